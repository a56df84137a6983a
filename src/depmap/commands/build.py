"""Command: build the dependency graph and print it as JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from depmap.commands._base import DepCommand
from depmap.services.graph import GraphService

if TYPE_CHECKING:
    from depmap.commands._context import AppContext


@click.command(
    cls=DepCommand,
    examples="""\
  depmap build
  depmap build > graph.json
  depmap build --inventory out/map.json --resolutions out/resolutions.json
  depmap --root /work/app build""",
)
@click.option(
    "--inventory",
    type=click.Path(dir_okay=False, resolve_path=True, path_type=Path),
    default=None,
    help="Package inventory JSON, relative to the current directory "
    "(default: map.json under the project root).",
)
@click.option(
    "--resolutions",
    type=click.Path(dir_okay=False, resolve_path=True, path_type=Path),
    default=None,
    help="Resolution table JSON, relative to the current directory "
    "(default: resolutions.json under the project root).",
)
@click.pass_obj
def build(app: AppContext, inventory: Path | None, resolutions: Path | None) -> None:
    """Build the dependency graph and print it as JSON on stdout."""
    if inventory or resolutions:
        app.use_inputs(inventory=inventory, resolutions=resolutions)

    result = GraphService(app.workspace).build()
    if not result.ok:
        app.emit(result)
        return

    document = {"nodes": result.data["nodes"], "links": result.data["links"]}
    click.echo(json.dumps(document, indent=app.settings.output.indent, ensure_ascii=False))
