"""Preference types accepted by the inline options panel."""

from __future__ import annotations

from enum import StrEnum


class PrefType(StrEnum):
    """Closed set of inline option types, keyed by their wire value."""

    BOOL = "bool"
    BOOLINT = "boolint"
    INTEGER = "integer"
    STRING = "string"
    COLOR = "color"
    FILE = "file"
    DIRECTORY = "directory"
    CONTROL = "control"
    MENULIST = "menulist"
    MULTIPLE_SELECT = "multiple-select"
    RADIO = "radio"


VALID_PREF_TYPES: frozenset[str] = frozenset(t.value for t in PrefType)

# Types whose descriptors must carry a non-empty ``options`` list.
OPTION_TYPES: frozenset[PrefType] = frozenset(
    {PrefType.MENULIST, PrefType.MULTIPLE_SELECT, PrefType.RADIO}
)

# Types rendered as a full-path file picker.
PATH_TYPES: frozenset[PrefType] = frozenset({PrefType.FILE, PrefType.DIRECTORY})
