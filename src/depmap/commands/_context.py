"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Workspace initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from depmap.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from pathlib import Path

    from depmap.config.settings import DepmapSettings
    from depmap.infrastructure.workspace import Workspace
    from depmap.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The workspace is created on first use so ``--help`` and ``--version``
    never read input tables.
    """

    def __init__(self, settings: DepmapSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from depmap.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

        if settings.verbose:
            from depmap.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def workspace(self) -> Workspace:
        """The workspace for the configured inputs (created lazily)."""
        if self._workspace is None:
            from depmap.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    def use_inputs(self, *, inventory: Path | None, resolutions: Path | None) -> None:
        """Replace the workspace with one reading the given input tables.

        Click hands over absolute paths; relative ones resolve against the
        project root like the configured defaults.
        """
        from depmap.infrastructure.workspace import Workspace

        self._workspace = Workspace(
            self.settings,
            inventory_path=self.settings.resolve_input(inventory) if inventory else None,
            resolutions_path=self.settings.resolve_input(resolutions) if resolutions else None,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
