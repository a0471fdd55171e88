"""Command: render the inline options panel for a manifest."""

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
  prefpanel render package.json
  prefpanel -q render package.json > options.xul
  prefpanel render package.json --locale locale/fr.properties""",
)
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--locale",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Properties file with localized titles and labels.",
)
@click.pass_obj
def render(app: AppContext, manifest: Path, locale: Path | None) -> None:
    """Render the settings MANIFEST declares into a scratch add-on page."""
    app.emit(app.panels.render(manifest, locale=locale))
