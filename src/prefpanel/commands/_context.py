"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy preference store initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from prefpanel.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from prefpanel.config.settings import PanelSettings
    from prefpanel.infrastructure.preferences import PreferenceService
    from prefpanel.plugins.event_bus import HostEventBus
    from prefpanel.services.panel import PanelService
    from prefpanel.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The preference database is opened on first use so ``--help`` and
    ``--version`` never touch the filesystem.
    """

    def __init__(self, settings: PanelSettings) -> None:
        self.settings = settings
        self._preferences: PreferenceService | None = None
        self._events: HostEventBus | None = None

        from prefpanel.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def preferences(self) -> PreferenceService:
        """SQLite preference service at the configured store path."""
        if self._preferences is None:
            from prefpanel.infrastructure.database import SqlPreferenceService, init_database

            self._preferences = SqlPreferenceService(init_database(self.settings.store_path))
        return self._preferences

    @property
    def events(self) -> HostEventBus:
        """Event bus with entry-point plugins loaded."""
        if self._events is None:
            from prefpanel.plugins.event_bus import HostEventBus

            self._events = HostEventBus()
            self._events.plugins.discover()
        return self._events

    @property
    def panels(self) -> PanelService:
        from prefpanel.services.panel import PanelService

        return PanelService(self.settings, self.preferences, self.events)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
