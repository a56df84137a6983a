"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``DEPMAP_*`` prefix
  3. TOML file    — ``depmap.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``locate_config`` walk-up discovery from
:mod:`depmap.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from depmap.config.discovery import locate_config
from depmap.config.models import InputsConfig, OutputConfig, ResolutionConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``depmap.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class DepmapSettings(BaseSettings):
    """Unified settings for the depmap CLI.

    Stored on the :class:`~depmap.commands._context.AppContext` at the CLI
    root level.

    Attributes:
        project_root: Directory whose path prefixes mark packages as local,
            and against which relative input paths resolve. Defaults to CWD.
        config_path: The TOML file in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DEPMAP_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (not in TOML) ---
    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    inputs: InputsConfig = Field(default_factory=InputsConfig)
    resolution: ResolutionConfig = Field(default_factory=ResolutionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> DepmapSettings:
        """Construct settings from CLI invocation.

        Discovers ``depmap.toml`` via walk-up from the project root (or uses
        an explicit *config_path*) and merges CLI flags as highest-priority
        overrides. The project root is never taken from the config file's
        location.
        """
        # Symlinks and ".." collapse so the root matches the package manager's cwd.
        resolved_root = (project_root or Path.cwd()).resolve()
        toml_path = locate_config(resolved_root, config_path)

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    @property
    def locality_prefix(self) -> str:
        """The string every local package location starts with."""
        return str(self.project_root)

    def resolve_input(self, value: str | Path) -> Path:
        """Resolve an input path against the project root."""
        p = Path(value)
        return p if p.is_absolute() else self.project_root / p

    @property
    def inventory_path(self) -> Path:
        return self.resolve_input(self.inputs.inventory)

    @property
    def resolutions_path(self) -> Path:
        return self.resolve_input(self.inputs.resolutions)
