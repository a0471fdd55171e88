"""Plugin discovery and registration.

Discovery: entry points in the ``prefpanel.plugins`` group, loaded via
pluggy's setuptools entry-point support. Plugins implement any of the
hooks in :class:`~prefpanel.plugins.hookspecs.PrefPanelHookSpec`.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from prefpanel.plugins.hookspecs import PROJECT_NAME, PrefPanelHookSpec

ENTRY_POINT_GROUP = "prefpanel.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(PrefPanelHookSpec)

    def discover(self) -> list[str]:
        """Load entry-point plugins and return the names of all registered plugins."""
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> str:
        """Register a plugin instance directly. Returns the registered name."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)
        return resolved_name

    def unregister(self, plugin: object | None = None, name: str | None = None) -> object | None:
        """Unregister a plugin by instance or by name."""
        if name is not None and self._pm.get_plugin(name) is None:
            return None
        return self._pm.unregister(plugin=plugin, name=name)

    def get_plugin(self, name: str) -> object | None:
        return self._pm.get_plugin(name)

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
