"""Add-on manager lookup used before the options subscription is made."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS_URL = "data:text/xml,<placeholder/>"


@dataclass(frozen=True)
class Addon:
    id: str
    name: str = ""
    options_url: str = DEFAULT_OPTIONS_URL


AddonCallback = Callable[[Addon | None], None]


class AddonManager(Protocol):
    def get_addon_by_id(self, addon_id: str, callback: AddonCallback) -> None: ...


class StaticAddonManager:
    """Add-on manager over a fixed set of add-ons; answers synchronously.

    With no *addons* given every id resolves to a bare :class:`Addon`.
    """

    def __init__(self, addons: Iterable[Addon] | None = None) -> None:
        self._addons: dict[str, Addon] | None = (
            None if addons is None else {a.id: a for a in addons}
        )

    def get_addon_by_id(self, addon_id: str, callback: AddonCallback) -> None:
        if self._addons is None:
            addon: Addon | None = Addon(id=addon_id)
        else:
            addon = self._addons.get(addon_id)
            if addon is None:
                logger.debug("Unknown add-on id %s", addon_id)
        callback(addon)
