"""Commands: inspect and reset stored preference values."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from prefpanel.commands._base import PanelCommand

if TYPE_CHECKING:
    from prefpanel.commands._context import AppContext


@click.command(cls=PanelCommand, examples="  prefpanel show package.json")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def show(app: AppContext, manifest: Path) -> None:
    """List stored preferences for MANIFEST's branch."""
    app.emit(app.panels.show(manifest))


@click.command(cls=PanelCommand, examples="  prefpanel reset package.json tags")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("name")
@click.pass_obj
def reset(app: AppContext, manifest: Path, name: str) -> None:
    """Clear the user value of preference NAME."""
    app.emit(app.panels.reset(manifest, name))
