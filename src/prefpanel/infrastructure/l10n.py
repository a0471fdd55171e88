"""Localization pass for inline options.

Strings are looked up by key; a missing key leaves the attribute as is:

- ``<name>_title`` and ``<name>_description`` for each setting,
- ``<name>_options.<label>`` for each menuitem and radio,
- ``<name>_label`` for control buttons.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any


def localize_inline_options(
    document: Any,
    strings: Mapping[str, str],
    addon_id: str | None = None,
) -> None:
    """Rewrite setting titles, descriptions and labels from *strings*."""
    for setting in _tagged(document, "setting", addon_id):
        name = setting.getAttribute("pref-name")
        title = strings.get(f"{name}_title")
        if title is not None:
            setting.setAttribute("title", title)
        desc = strings.get(f"{name}_description")
        if desc is not None:
            setting.setAttribute("desc", desc)
        for tag in ("menuitem", "radio"):
            for item in setting.getElementsByTagName(tag):
                label = strings.get(f"{name}_options.{item.getAttribute('label')}")
                if label is not None:
                    item.setAttribute("label", label)

    for button in _tagged(document, "button", addon_id):
        label = strings.get(f"{button.getAttribute('pref-name')}_label")
        if label is not None:
            button.setAttribute("label", label)


def make_localizer(
    strings: Mapping[str, str],
    addon_id: str | None = None,
) -> Callable[[Any], None]:
    """Bind *strings* into a one-argument localization pass."""

    def localize(document: Any) -> None:
        localize_inline_options(document, strings, addon_id)

    return localize


def load_properties(path: Path) -> dict[str, str]:
    """Read a ``key=value`` locale file; ``#`` and ``!`` start comments."""
    strings: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line[0] in "#!":
            continue
        key, sep, value = line.partition("=")
        if not sep:
            key, sep, value = line.partition(":")
        if sep:
            strings[key.strip()] = value.strip()
    return strings


def _tagged(document: Any, tag: str, addon_id: str | None) -> list[Any]:
    return [
        el
        for el in document.getElementsByTagName(tag)
        if el.hasAttribute("pref-name")
        and (addon_id is None or el.getAttribute("data-jetpack-id") == addon_id)
    ]
