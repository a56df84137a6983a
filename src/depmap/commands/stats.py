"""Command: summarize the dependency graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from depmap.commands._base import DepCommand
from depmap.services.graph import GraphService

if TYPE_CHECKING:
    from depmap.commands._context import AppContext


@click.command(
    cls=DepCommand,
    examples="""\
  depmap stats
  depmap stats --top 20
  depmap --json stats""",
)
@click.option("--top", default=None, type=click.IntRange(min=1), help="Max packages listed.")
@click.pass_obj
def stats(app: AppContext, top: int | None) -> None:
    """Show node and link counts and the most-depended-on packages."""
    app.emit(GraphService(app.workspace).stats(top=top or app.settings.output.top))
