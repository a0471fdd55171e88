"""Preference descriptors as frozen tagged variants.

One model per :class:`~prefpanel.domain.types.PrefType`, discriminated on the
``type`` field. Each variant carries only the fields its control needs, so
code that branches on a descriptor can match on the class instead of
comparing type strings.

Descriptors are produced by :func:`prefpanel.domain.validation.validate`;
build them directly only from input that has already passed validation.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Field, TypeAdapter


def _as_text(value: Any) -> Any:
    """Render non-string scalars as text; ``None`` is left for the field to judge."""
    if value is None or isinstance(value, str):
        return value
    return str(value)


def _as_flag(value: Any) -> bool:
    return bool(value)


Text = Annotated[str, BeforeValidator(_as_text)]
OptionalText = Annotated[str | None, BeforeValidator(_as_text)]
Flag = Annotated[bool, BeforeValidator(_as_flag)]


class Option(BaseModel):
    """A ``{value, label}`` pair offered by menulist, radio and tag controls."""

    model_config = {"frozen": True}

    value: Any
    label: Any


class BasePref(BaseModel):
    """Fields shared by every preference descriptor."""

    model_config = {"frozen": True, "extra": "ignore"}

    name: Text
    title: Text
    value: Any = None
    description: OptionalText = None
    hidden: Flag = False


class BoolPref(BasePref):
    type: Literal["bool"]


class BoolIntPref(BasePref):
    type: Literal["boolint"]
    on: Any = None
    off: Any = None


class IntegerPref(BasePref):
    type: Literal["integer"]


class StringPref(BasePref):
    type: Literal["string"]


class ColorPref(BasePref):
    type: Literal["color"]


class FilePref(BasePref):
    type: Literal["file"]


class DirectoryPref(BasePref):
    type: Literal["directory"]


class ControlPref(BasePref):
    type: Literal["control"]
    label: Text


class MenulistPref(BasePref):
    type: Literal["menulist"]
    options: tuple[Option, ...]


class MultipleSelectPref(BasePref):
    type: Literal["multiple-select"]
    options: tuple[Option, ...]
    open: Flag = False


class RadioPref(BasePref):
    type: Literal["radio"]
    options: tuple[Option, ...]


Descriptor = Annotated[
    BoolPref
    | BoolIntPref
    | IntegerPref
    | StringPref
    | ColorPref
    | FilePref
    | DirectoryPref
    | ControlPref
    | MenulistPref
    | MultipleSelectPref
    | RadioPref,
    Field(discriminator="type"),
]

DESCRIPTOR_ADAPTER: TypeAdapter[Descriptor] = TypeAdapter(Descriptor)
