"""Pluggy hook specifications for host events.

One inbound event (the add-on manager displayed an options panel) and
one generic outbound broadcast (observer notification on a topic).
"""

from __future__ import annotations

from typing import Any

import pluggy

PROJECT_NAME = "prefpanel"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class PrefPanelHookSpec:
    """Hook specifications for the prefpanel host event system."""

    @hookspec
    def addon_options_displayed(self, document: Any, addon_id: str) -> None:
        """Called when the host shows the detail view for *addon_id*."""

    @hookspec
    def observer_notified(self, topic: str, data: str | None) -> None:
        """Called for every broadcast made through ``HostEventBus.notify``."""
