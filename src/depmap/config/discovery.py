"""Locating depmap.toml for a project.

Precedence: ``--config``, then ``DEPMAP_CONFIG``, then the nearest
``depmap.toml`` at or above the project root. The search never starts from
the shell's cwd when ``--root`` points elsewhere.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "depmap.toml"
CONFIG_ENV_VAR = "DEPMAP_CONFIG"


def find_config(project_root: Path) -> Path | None:
    """Return the nearest depmap.toml in *project_root* or an ancestor."""
    for directory in (project_root, *project_root.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def locate_config(project_root: Path, explicit: str | None = None) -> Path | None:
    """Pick the config file in effect for *project_root*.

    An explicit path or ``DEPMAP_CONFIG`` naming a missing file yields None;
    the caller decides whether that is an error.
    """
    override = explicit or os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None
    return find_config(project_root)
