"""Command: write default preference values into the store."""

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
  prefpanel seed package.json
  prefpanel -c ./prefpanel.toml seed package.json""",
)
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def seed(app: AppContext, manifest: Path) -> None:
    """Seed the default values declared in MANIFEST."""
    app.emit(app.panels.seed(manifest))
