"""depmap — replay a solved resolution table into a package dependency graph."""

__version__ = "0.1.0"
