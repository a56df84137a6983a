"""Root CLI group for depmap with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from depmap import __version__
from depmap.commands import register_commands
from depmap.commands._base import DepGroup
from depmap.commands._context import AppContext
from depmap.config.settings import DepmapSettings


@click.group(
    cls=DepGroup,
    invoke_without_command=True,
    examples="""\
  depmap
  depmap build > graph.json
  depmap export --format dot
  depmap -v stats""",
)
@click.version_option(version=__version__, prog_name="depmap")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON results.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--root",
    "project_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: current directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    project_root: Path | None,
) -> None:
    """depmap — build a package dependency graph from a solved resolution table.

    With no command, runs ``build``.
    """
    settings = DepmapSettings.from_cli(
        config_path=config_path,
        project_root=project_root,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        from depmap.commands.build import build

        ctx.invoke(build)


register_commands(cli)
