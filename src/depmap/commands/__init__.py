"""Subcommand modules for depmap.

Provides register_commands() which uses deferred imports to keep
``depmap --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from depmap.commands.build import build
    from depmap.commands.export import export
    from depmap.commands.stats import stats

    cli.add_command(build)
    cli.add_command(export)
    cli.add_command(stats)
