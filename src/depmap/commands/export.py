"""Command: export the dependency graph as JSON or Graphviz DOT."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from depmap.commands._base import DepCommand
from depmap.services.export import EXPORT_FORMATS, ExportService
from depmap.services.result import ServiceResult

if TYPE_CHECKING:
    from depmap.commands._context import AppContext


@click.command(
    cls=DepCommand,
    examples="""\
  depmap export
  depmap export --format dot | dot -Tsvg > deps.svg
  depmap export --format json --output graph.json""",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(EXPORT_FORMATS, case_sensitive=False),
    default=None,
    help="Output format (default from config: json).",
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Write to file instead of stdout.",
)
@click.pass_obj
def export(app: AppContext, fmt: str | None, output_file: Path | None) -> None:
    """Export the dependency graph in JSON or DOT format."""
    fmt = (fmt or app.settings.output.format).lower()
    result = ExportService(app.workspace).export_graph(
        fmt=fmt, indent=app.settings.output.indent
    )

    if not result.ok:
        app.emit(result)
        return

    if output_file:
        output_file.write_text(result.data["content"], encoding="utf-8")
        app.emit(
            ServiceResult(
                ok=True,
                op="export_graph",
                data={
                    "format": fmt,
                    "output_file": str(output_file),
                    "node_count": result.data["node_count"],
                    "link_count": result.data["link_count"],
                },
                meta=result.meta,
            )
        )
    else:
        # Pipe-friendly: raw content to stdout
        click.echo(result.data["content"], nl=False)
