"""Allow ``python -m depmap``."""

from depmap.cli import cli

cli()
