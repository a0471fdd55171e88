"""Schema errors raised by :func:`prefpanel.domain.validation.validate`.

Each error carries the offending preference ``name`` and a stable ``code``
so the service layer can translate it into a ``ServiceError``.
"""

from __future__ import annotations


class PreferenceSchemaError(ValueError):
    """Base class for descriptor schema violations."""

    code = "SCHEMA_ERROR"

    def __init__(self, message: str, *, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name


class MissingTitleError(PreferenceSchemaError):
    code = "MISSING_TITLE"


class InvalidTypeError(PreferenceSchemaError):
    code = "INVALID_TYPE"


class MissingLabelError(PreferenceSchemaError):
    code = "MISSING_LABEL"


class MissingOptionsError(PreferenceSchemaError):
    code = "MISSING_OPTIONS"


class MalformedOptionError(PreferenceSchemaError):
    code = "MALFORMED_OPTION"
