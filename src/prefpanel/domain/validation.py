"""Centralized sanity checks for preference descriptor lists.

Validation is all-or-nothing: the first violation raises and nothing is
returned. Default values are not cross-checked against the declared type.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from prefpanel.domain.descriptors import DESCRIPTOR_ADAPTER, Descriptor
from prefpanel.domain.errors import (
    InvalidTypeError,
    MalformedOptionError,
    MissingLabelError,
    MissingOptionsError,
    MissingTitleError,
    PreferenceSchemaError,
)
from prefpanel.domain.types import OPTION_TYPES, VALID_PREF_TYPES, PrefType


def validate(preferences: Iterable[Mapping[str, Any] | BaseModel]) -> tuple[Descriptor, ...]:
    """Check every descriptor and return them as frozen typed variants.

    Raises:
        MissingTitleError: ``title`` is missing or empty.
        InvalidTypeError: ``type`` is not an inline option type.
        MissingLabelError: a ``control`` has no ``label``.
        MissingOptionsError: a menulist, multiple-select or radio has no options.
        MalformedOptionError: an option lacks ``value`` or ``label``.
        PreferenceSchemaError: the descriptor has no ``name``.
    """
    validated: list[Descriptor] = []
    for raw in preferences:
        pref = raw.model_dump() if isinstance(raw, BaseModel) else raw
        check_descriptor(pref)
        try:
            validated.append(DESCRIPTOR_ADAPTER.validate_python(dict(pref)))
        except ValidationError as exc:
            name = pref.get("name")
            msg = f"The '{name}' pref is malformed: {exc.errors()[0]['msg']}"
            raise PreferenceSchemaError(msg, name=name) from exc
    return tuple(validated)


def check_descriptor(pref: Mapping[str, Any]) -> None:
    """Run the structural checks for a single raw descriptor."""
    name = pref.get("name")
    pref_type = pref.get("type")

    if not pref.get("title"):
        raise MissingTitleError(f"The '{name}' pref requires a title", name=name)

    if not isinstance(pref_type, str) or pref_type not in VALID_PREF_TYPES:
        raise InvalidTypeError(f"The '{name}' pref must be of valid type", name=name)

    if pref_type == PrefType.CONTROL and not pref.get("label"):
        raise MissingLabelError(f"The '{name}' control requires a label", name=name)

    if pref_type in OPTION_TYPES:
        options = pref.get("options")
        if not options:
            raise MissingOptionsError(f"The '{name}' pref requires options", name=name)
        for item in options:
            if not isinstance(item, Mapping) or "value" not in item or "label" not in item:
                raise MalformedOptionError(
                    "Each option requires both a value and a label", name=name
                )
