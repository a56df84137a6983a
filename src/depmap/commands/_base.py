"""Click classes that add an ``--examples`` flag.

A command declared with ``examples="..."`` gains an eager ``--examples``
option that prints the text and exits before the command body runs, so no
input tables are read.
"""

from __future__ import annotations

from typing import Any

import click


def _examples_option(examples: str) -> click.Option:
    def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{examples}")
            ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        is_eager=True,
        expose_value=False,
        callback=_print_examples,
        help="Show usage examples.",
    )


def _with_examples(kwargs: dict[str, Any], examples: str | None) -> dict[str, Any]:
    if examples:
        kwargs["params"] = [*(kwargs.get("params") or ()), _examples_option(examples)]
    return kwargs


class DepCommand(click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **_with_examples(kwargs, examples))


class DepGroup(click.Group):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **_with_examples(kwargs, examples))
