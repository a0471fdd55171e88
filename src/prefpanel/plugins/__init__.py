"""Host event layer: pluggy hooks for panel display and observer broadcasts.

INVARIANT: Observer failures are warnings, never errors.
"""

from prefpanel.plugins.event_bus import HostEventBus, command_topic
from prefpanel.plugins.hookspecs import hookimpl
from prefpanel.plugins.manager import PluginManager

__all__ = ["HostEventBus", "PluginManager", "command_topic", "hookimpl"]
