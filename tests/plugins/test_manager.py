"""Tests for PluginManager: registration and hook relay."""

from __future__ import annotations

from prefpanel.plugins.hookspecs import hookimpl
from prefpanel.plugins.manager import PluginManager


class _DummyPlugin:
    """Minimal plugin for registration tests."""

    @hookimpl
    def observer_notified(self, topic: str, data: str | None) -> None:
        pass


class TestPluginManager:
    def test_hook_relay_accessible(self) -> None:
        pm = PluginManager()
        assert hasattr(pm.hook, "addon_options_displayed")
        assert hasattr(pm.hook, "observer_notified")

    def test_register_plugin(self) -> None:
        pm = PluginManager()
        assert pm.register_plugin(_DummyPlugin(), name="dummy") == "dummy"
        assert "dummy" in pm.list_plugin_names()

    def test_register_plugin_default_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin())
        assert "_DummyPlugin" in pm.list_plugin_names()

    def test_unregister_by_name(self) -> None:
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="dummy")
        assert pm.unregister(name="dummy") is plugin
        assert pm.get_plugin("dummy") is None
        assert pm.unregister(name="dummy") is None

    def test_discover_without_entry_points(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin(), name="dummy")
        assert "dummy" in pm.discover()
