"""Synchronous host event bus over pluggy.

Panel-display subscriptions and topic observers are registered as small
pluggy plugins, so entry-point plugins and in-process callbacks receive
the same events. Dispatch is synchronous; pluggy calls the most recently
registered implementation first.

INVARIANT: Observer failures are warnings, never errors.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from typing import Any

from prefpanel.plugins.hookspecs import hookimpl
from prefpanel.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

PanelHandler = Callable[[Any], None]
TopicCallback = Callable[[str, "str | None"], None]


def command_topic(addon_id: str) -> str:
    """Topic broadcast when a control button of *addon_id* is pressed."""
    return f"{addon_id}-cmdPressed"


class _PanelDisplayListener:
    """Runs *handler* when the options panel for *addon_id* is displayed."""

    def __init__(self, addon_id: str, handler: PanelHandler) -> None:
        self.addon_id = addon_id
        self.handler = handler

    @hookimpl
    def addon_options_displayed(self, document: Any, addon_id: str) -> None:
        if addon_id == self.addon_id:
            self.handler(document)


class _TopicObserver:
    def __init__(self, topic: str, callback: TopicCallback) -> None:
        self.topic = topic
        self.callback = callback

    @hookimpl
    def observer_notified(self, topic: str, data: str | None) -> None:
        if topic == self.topic:
            self.callback(topic, data)


class HostEventBus:
    """Inbound panel-display events and outbound observer broadcasts.

    Parameters:
        plugin_manager: Manager to register listeners on; a fresh one is
            created when omitted.
    """

    def __init__(self, plugin_manager: PluginManager | None = None) -> None:
        self._pm = plugin_manager or PluginManager()
        self._observer_ids = itertools.count(1)

    @property
    def plugins(self) -> PluginManager:
        return self._pm

    # ------------------------------------------------------------------
    # Panel display
    # ------------------------------------------------------------------

    def on_panel_display(self, addon_id: str, handler: PanelHandler) -> None:
        """Subscribe *handler* to options-displayed events for *addon_id*.

        A second subscription for the same add-on replaces the first.
        """
        self.off_panel_display(addon_id)
        self._pm.register_plugin(
            _PanelDisplayListener(addon_id, handler), name=_panel_plugin_name(addon_id)
        )

    def off_panel_display(self, addon_id: str) -> bool:
        """Drop the subscription for *addon_id*; returns whether one existed."""
        return self._pm.unregister(name=_panel_plugin_name(addon_id)) is not None

    def is_subscribed(self, addon_id: str) -> bool:
        return self._pm.get_plugin(_panel_plugin_name(addon_id)) is not None

    def display_options(self, document: Any, addon_id: str) -> None:
        """Fire the options-displayed event, as the host does on opening a detail view."""
        logger.debug("Options displayed for %s", addon_id)
        self._pm.hook.addon_options_displayed(document=document, addon_id=addon_id)

    # ------------------------------------------------------------------
    # Observer broadcasts
    # ------------------------------------------------------------------

    def notify(self, topic: str, data: str | None = None) -> None:
        """Broadcast *data* on *topic*. Fire-and-forget.

        Each observer runs in isolation; one that raises is logged and the
        rest still receive the broadcast.
        """
        kwargs = {"topic": topic, "data": data}
        for impl in reversed(self._pm.hook.observer_notified.get_hookimpls()):
            try:
                impl.function(*(kwargs[arg] for arg in impl.argnames))
            except Exception:
                logger.warning(
                    "Observer failed for topic %s (%s)", topic, impl.plugin_name, exc_info=True
                )

    def observe(self, topic: str, callback: TopicCallback) -> str:
        """Call *callback(topic, data)* for broadcasts on *topic*. Returns a token."""
        token = f"observer:{topic}:{next(self._observer_ids)}"
        self._pm.register_plugin(_TopicObserver(topic, callback), name=token)
        return token

    def unobserve(self, token: str) -> bool:
        return self._pm.unregister(name=token) is not None


def _panel_plugin_name(addon_id: str) -> str:
    return f"panel-display:{addon_id}"
