"""Shared pytest fixtures and test helpers for prefpanel tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from prefpanel.infrastructure.document import new_addon_document
from prefpanel.infrastructure.preferences import MemoryPreferenceService
from prefpanel.services.enable import Host

ADDON_ID = "jid1-example@jetpack"
ROOT = f"extensions.{ADDON_ID}."


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def prefs() -> MemoryPreferenceService:
    return MemoryPreferenceService()


@pytest.fixture
def host(prefs: MemoryPreferenceService) -> Host:
    """In-memory host sharing the ``prefs`` fixture's store."""
    return Host(preferences=prefs)


@pytest.fixture
def document():
    """Minimal add-on detail page with the settings anchor in place."""
    return new_addon_document()


@pytest.fixture
def sample_preferences() -> list[dict[str, Any]]:
    """One descriptor per preference type."""
    return [
        {"name": "debug", "title": "Debug mode", "type": "bool", "value": False},
        {
            "name": "level",
            "title": "Level",
            "type": "boolint",
            "value": 1,
            "on": 1,
            "off": 0,
        },
        {"name": "count", "title": "Count", "type": "integer", "value": 3},
        {"name": "greeting", "title": "Greeting", "type": "string", "value": "hi"},
        {"name": "accent", "title": "Accent", "type": "color", "value": "#ff0000"},
        {"name": "log", "title": "Log file", "type": "file"},
        {"name": "cache", "title": "Cache dir", "type": "directory"},
        {"name": "purge", "title": "Purge", "type": "control", "label": "Purge now"},
        {
            "name": "mode",
            "title": "Mode",
            "type": "menulist",
            "value": "a",
            "options": [{"value": "a", "label": "Alpha"}, {"value": "b", "label": "Beta"}],
        },
        {
            "name": "sites",
            "title": "Sites",
            "type": "multiple-select",
            "value": ["example.com"],
            "open": True,
            "options": [{"value": "mozilla.org", "label": "mozilla.org"}],
        },
        {
            "name": "size",
            "title": "Size",
            "type": "radio",
            "value": 1,
            "options": [{"value": 1, "label": "Small"}, {"value": 2, "label": "Large"}],
        },
        {"name": "secret", "title": "Secret", "type": "string", "value": "s", "hidden": True},
    ]


def write_manifest(
    directory: Path,
    preferences: list[dict[str, Any]],
    *,
    addon_id: str = ADDON_ID,
    **extra: Any,
) -> Path:
    """Write a package.json-style manifest and return its path."""
    path = directory / "package.json"
    path.write_text(
        json.dumps({"id": addon_id, "preferences": preferences, **extra}),
        encoding="utf-8",
    )
    return path
