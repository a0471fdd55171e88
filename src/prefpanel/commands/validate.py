"""Command: check a manifest's preference descriptors."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from prefpanel.commands._base import PanelCommand

if TYPE_CHECKING:
    from prefpanel.commands._context import AppContext


@click.command(
    cls=PanelCommand,
    examples="""\
  prefpanel validate package.json
  prefpanel --json validate prefs.yaml""",
)
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def validate(app: AppContext, manifest: Path) -> None:
    """Validate the preference descriptors in MANIFEST."""
    from prefpanel.infrastructure.preferences import MemoryPreferenceService
    from prefpanel.services.panel import PanelService

    app.emit(PanelService(app.settings, MemoryPreferenceService()).validate(manifest))
