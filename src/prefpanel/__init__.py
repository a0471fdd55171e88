"""prefpanel: inline preference panels rendered from a descriptor schema."""

from prefpanel.domain.errors import (
    InvalidTypeError,
    MalformedOptionError,
    MissingLabelError,
    MissingOptionsError,
    MissingTitleError,
    PreferenceSchemaError,
)
from prefpanel.domain.validation import validate
from prefpanel.services.defaults import set_defaults
from prefpanel.services.enable import Host, disable, enable
from prefpanel.services.renderer import inject_options

__version__ = "0.3.0"

__all__ = [
    "Host",
    "InvalidTypeError",
    "MalformedOptionError",
    "MissingLabelError",
    "MissingOptionsError",
    "MissingTitleError",
    "PreferenceSchemaError",
    "__version__",
    "disable",
    "enable",
    "inject_options",
    "set_defaults",
    "validate",
]
