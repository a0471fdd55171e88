"""PanelService: manifest-level operations behind the CLI.

Wraps the core API (which raises) into :class:`ServiceResult` values with
stable error codes, so commands only have to emit results.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from prefpanel.domain.errors import PreferenceSchemaError
from prefpanel.domain.validation import validate
from prefpanel.infrastructure.document import document_to_xml, find_settings, new_addon_document
from prefpanel.infrastructure.l10n import load_properties, make_localizer
from prefpanel.infrastructure.manifest import Manifest, ManifestError, load_manifest
from prefpanel.plugins.event_bus import HostEventBus
from prefpanel.services._helpers import pref_root
from prefpanel.services.defaults import set_defaults
from prefpanel.services.enable import Host, disable, enable
from prefpanel.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from prefpanel.config.settings import PanelSettings
    from prefpanel.infrastructure.preferences import PreferenceService

logger = logging.getLogger(__name__)


class PanelService:
    """Validate, seed, render and inspect the preferences of one manifest."""

    def __init__(
        self,
        settings: PanelSettings,
        preferences: PreferenceService,
        events: HostEventBus | None = None,
    ) -> None:
        self._settings = settings
        self._preferences = preferences
        self._events = events or HostEventBus()

    def validate(self, manifest_path: Path) -> ServiceResult:
        op = "validate"
        try:
            manifest = load_manifest(manifest_path)
            descriptors = validate(manifest.preferences)
        except (ManifestError, PreferenceSchemaError) as exc:
            return _failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": manifest.id,
                "branch": manifest.branch,
                "count": len(descriptors),
                "preferences": [
                    {"name": d.name, "type": d.type, "hidden": d.hidden} for d in descriptors
                ],
            },
        )

    def seed(self, manifest_path: Path) -> ServiceResult:
        op = "seed"
        try:
            manifest = load_manifest(manifest_path)
            descriptors = validate(manifest.preferences)
        except (ManifestError, PreferenceSchemaError) as exc:
            return _failure(op, exc)

        written = set_defaults(
            descriptors,
            self._preferences,
            manifest.branch,
            branch_root=self._settings.host.branch_root,
        )
        skipped = [d.name for d in descriptors if d.name not in written]
        warnings = [f"No default stored for '{name}'" for name in skipped]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": manifest.id,
                "root": self._root(manifest),
                "written": written,
                "skipped": skipped,
            },
            warnings=warnings,
        )

    def render(self, manifest_path: Path, *, locale: Path | None = None) -> ServiceResult:
        """Enable the manifest on a scratch host page and return the rendered XML."""
        op = "render"
        try:
            manifest = load_manifest(manifest_path)
        except ManifestError as exc:
            return _failure(op, exc)

        host = Host(
            preferences=self._preferences,
            events=self._events,
            localize=(
                make_localizer(load_properties(locale), manifest.id) if locale is not None else None
            ),
            config=self._settings.host,
            tags=self._settings.tags,
        )
        try:
            enabled = enable(
                manifest.preferences,
                manifest.id,
                host=host,
                preferences_branch=manifest.branch,
            )
        except PreferenceSchemaError as exc:
            return _failure(op, exc)

        enabled.result()
        document = new_addon_document(self._settings.host.anchor_id)
        try:
            host.events.display_options(document, manifest.id)
        finally:
            disable(manifest.id, host=host)

        settings = find_settings(document, manifest.id)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": manifest.id,
                "settings": [s.getAttribute("pref-name") for s in settings],
                "xml": document_to_xml(document),
            },
        )

    def show(self, manifest_path: Path) -> ServiceResult:
        """List every stored preference under the manifest's branch."""
        op = "show"
        try:
            manifest = load_manifest(manifest_path)
        except ManifestError as exc:
            return _failure(op, exc)

        root = self._root(manifest)
        branch = self._preferences.get_branch(root)
        items: list[dict[str, Any]] = [
            {
                "name": name,
                "kind": str(kind),
                "value": value,
                "user_set": self._preferences.has_user_value(root + name),
            }
            for name, kind, value in branch.items()
        ]
        return ServiceResult(ok=True, op=op, data={"id": manifest.id, "root": root, "items": items})

    def reset(self, manifest_path: Path, name: str) -> ServiceResult:
        """Drop the user value of *name* so it reads as its default again."""
        op = "reset"
        try:
            manifest = load_manifest(manifest_path)
        except ManifestError as exc:
            return _failure(op, exc)

        key = self._root(manifest) + name
        had_value = self._preferences.has_user_value(key)
        self._preferences.reset_user_value(key)
        logger.debug("Reset %s (had user value: %s)", key, had_value)
        return ServiceResult(ok=True, op=op, data={"key": key, "reset": had_value})

    def _root(self, manifest: Manifest) -> str:
        return pref_root(manifest.branch, self._settings.host.branch_root)


def _failure(op: str, exc: Exception) -> ServiceResult:
    if isinstance(exc, PreferenceSchemaError):
        detail = {"name": exc.name} if exc.name is not None else {}
        error = ServiceError(code=exc.code, message=str(exc), detail=detail)
    else:
        error = ServiceError(code="MANIFEST_ERROR", message=str(exc))
    return ServiceResult(ok=False, op=op, error=error)
