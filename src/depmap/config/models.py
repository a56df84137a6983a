"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, depmap.toml only contains
overrides. A project following the conventional layout needs no file.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class InputsConfig(BaseModel):
    """[inputs] section. Relative paths resolve against the project root."""

    model_config = {"frozen": True}

    inventory: str = "map.json"
    resolutions: str = "resolutions.json"
    manifest_name: str = "package.json"


class ResolutionConfig(BaseModel):
    """[resolution] section."""

    model_config = {"frozen": True}

    duplicates: Literal["first", "reject"] = "first"


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    format: Literal["json", "dot"] = "json"
    indent: int = Field(default=2, ge=0)
    top: int = Field(default=10, ge=1)

