"""Output mode dispatch for ServiceResult.

Machines get ``--json`` (the serialized ServiceResult), ``--quiet`` gets a
single status line, everyone else gets the Rich renderers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from depmap.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from depmap.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """How a ServiceResult should be presented."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
