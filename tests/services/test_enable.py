"""Tests for the enable/disable entry points."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from prefpanel import enable
from prefpanel.domain.errors import (
    InvalidTypeError,
    MissingLabelError,
    MissingTitleError,
    PreferenceSchemaError,
)
from prefpanel.infrastructure.addons import Addon, AddonCallback, StaticAddonManager
from prefpanel.infrastructure.document import find_settings, new_addon_document
from prefpanel.infrastructure.l10n import make_localizer
from prefpanel.infrastructure.preferences import MemoryPreferenceService
from prefpanel.services.enable import Host, disable
from tests.conftest import ADDON_ID, ROOT


class DeferredAddonManager:
    """Add-on manager that answers only when told to."""

    def __init__(self) -> None:
        self.pending: list[tuple[str, AddonCallback]] = []

    def get_addon_by_id(self, addon_id: str, callback: AddonCallback) -> None:
        self.pending.append((addon_id, callback))

    def answer(self) -> None:
        for addon_id, callback in self.pending:
            callback(Addon(id=addon_id))
        self.pending.clear()


DEBUG_PREF = [{"name": "debug", "title": "Debug mode", "type": "bool", "value": False}]


class TestEnable:
    def test_resolves_with_addon_id(self, host: Host) -> None:
        enabled = enable(DEBUG_PREF, ADDON_ID, host=host)
        assert enabled.done()
        assert enabled.result() == {"id": ADDON_ID}
        assert host.events.is_subscribed(ADDON_ID)

    def test_seeds_defaults_synchronously(self, host: Host, prefs: MemoryPreferenceService) -> None:
        manager = DeferredAddonManager()
        host.addons = manager
        enabled = enable(DEBUG_PREF, ADDON_ID, host=host)
        assert prefs.get_default_branch(ROOT).get_bool("debug") is False
        assert not enabled.done()
        assert not host.events.is_subscribed(ADDON_ID)

        manager.answer()
        assert enabled.result() == {"id": ADDON_ID}
        assert host.events.is_subscribed(ADDON_ID)

    @pytest.mark.parametrize(
        ("preferences", "error"),
        [
            ([{"name": "a", "type": "bool"}], MissingTitleError),
            ([{"name": "a", "title": "A", "type": "slider"}], InvalidTypeError),
            ([{"name": "a", "title": "A", "type": "control"}], MissingLabelError),
        ],
    )
    def test_invalid_raises_before_any_write(
        self,
        host: Host,
        prefs: MemoryPreferenceService,
        preferences: list[dict[str, Any]],
        error: type[PreferenceSchemaError],
    ) -> None:
        ok = {"name": "first", "title": "First", "type": "bool", "value": True}
        with pytest.raises(error):
            enable([ok, *preferences], ADDON_ID, host=host)
        assert list(prefs.get_default_branch(ROOT).names()) == []
        assert not host.events.is_subscribed(ADDON_ID)

    def test_preferences_branch_override(
        self, host: Host, prefs: MemoryPreferenceService
    ) -> None:
        enable(DEBUG_PREF, ADDON_ID, host=host, preferences_branch="shortname")
        assert prefs.get_default_branch("extensions.shortname.").get_bool("debug") is False
        document = new_addon_document()
        host.events.display_options(document, ADDON_ID)
        (setting,) = find_settings(document)
        assert setting.getAttribute("pref") == "extensions.shortname.debug"

    def test_unknown_addon_still_subscribes(self, prefs: MemoryPreferenceService) -> None:
        host = Host(preferences=prefs, addons=StaticAddonManager([Addon(id="other@test")]))
        assert enable(DEBUG_PREF, ADDON_ID, host=host).result() == {"id": ADDON_ID}
        assert host.events.is_subscribed(ADDON_ID)


class TestOptionsDisplayed:
    def test_renders_after_anchor(
        self, host: Host, document: Any, sample_preferences: list[dict[str, Any]]
    ) -> None:
        enable(sample_preferences, ADDON_ID, host=host)
        host.events.display_options(document, ADDON_ID)

        settings = find_settings(document, ADDON_ID)
        assert len(settings) == len(sample_preferences) - 1
        anchor = document.getElementById("detail-downloads")
        assert all(s.parentNode is anchor.parentNode for s in settings)
        assert host.panels[ADDON_ID].settings.keys() == {s.getAttribute("pref-name") for s in settings}

    def test_other_addon_ignored(self, host: Host, document: Any) -> None:
        enable(DEBUG_PREF, ADDON_ID, host=host)
        host.events.display_options(document, "other@test")
        assert find_settings(document) == []
        assert ADDON_ID not in host.panels

    def test_each_display_renders_again(self, host: Host) -> None:
        enable(DEBUG_PREF, ADDON_ID, host=host)
        first, second = new_addon_document(), new_addon_document()
        host.events.display_options(first, ADDON_ID)
        host.events.display_options(second, ADDON_ID)
        assert len(find_settings(first)) == 1
        assert len(find_settings(second)) == 1
        assert host.panels[ADDON_ID].settings["debug"].ownerDocument is second

    def test_missing_anchor_logs_warning(
        self, host: Host, caplog: pytest.LogCaptureFixture
    ) -> None:
        enable(DEBUG_PREF, ADDON_ID, host=host)
        document = new_addon_document(anchor_id="somewhere-else")
        with caplog.at_level(logging.WARNING, logger="prefpanel"):
            host.events.display_options(document, ADDON_ID)
        assert find_settings(document) == []
        assert "No element #detail-downloads" in caplog.text

    def test_localize_runs_after_render(self, prefs: MemoryPreferenceService, document: Any) -> None:
        host = Host(
            preferences=prefs,
            localize=make_localizer({"debug_title": "Mode débogage"}, ADDON_ID),
        )
        enable(DEBUG_PREF, ADDON_ID, host=host)
        host.events.display_options(document, ADDON_ID)
        assert find_settings(document)[0].getAttribute("title") == "Mode débogage"

    def test_control_press_reaches_observers(self, host: Host, document: Any) -> None:
        received: list[str | None] = []
        host.events.observe(f"{ADDON_ID}-cmdPressed", lambda _topic, data: received.append(data))
        enable(
            [{"name": "purge", "title": "Purge", "type": "control", "label": "Go"}],
            ADDON_ID,
            host=host,
        )
        host.events.display_options(document, ADDON_ID)
        host.panels[ADDON_ID].press("purge")
        assert received == ["purge"]


class TestDisable:
    def test_removes_subscription(self, host: Host, document: Any) -> None:
        enable(DEBUG_PREF, ADDON_ID, host=host)
        assert disable(ADDON_ID, host=host) is True
        host.events.display_options(document, ADDON_ID)
        assert find_settings(document) == []

    def test_keeps_defaults(self, host: Host, prefs: MemoryPreferenceService) -> None:
        enable(DEBUG_PREF, ADDON_ID, host=host)
        disable(ADDON_ID, host=host)
        assert prefs.get_default_branch(ROOT).get_bool("debug") is False

    def test_not_enabled(self, host: Host) -> None:
        assert disable(ADDON_ID, host=host) is False

    def test_in_memory_host(self) -> None:
        host = Host.in_memory()
        enable(DEBUG_PREF, "a@test", host=host)
        assert host.preferences.get_default_branch("extensions.a@test.").get_bool("debug") is False
