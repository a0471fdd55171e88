"""Shared service-layer helper functions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

DEFAULT_BRANCH_ROOT = "extensions"


def pref_root(preferences_branch: str, branch_root: str = DEFAULT_BRANCH_ROOT) -> str:
    """Dotted prefix every preference of a branch is stored under.

    Examples:
        >>> pref_root("myaddon")
        'extensions.myaddon.'
    """
    return f"{branch_root}.{preferences_branch}."


def pref_field(pref: Any, field: str, default: Any = None) -> Any:
    """Read *field* from a descriptor model or a raw mapping."""
    if isinstance(pref, Mapping):
        return pref.get(field, default)
    return getattr(pref, field, default)
