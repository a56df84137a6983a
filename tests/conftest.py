"""Shared pytest fixtures and test helpers for depmap tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from depmap.config.settings import DepmapSettings
from depmap.infrastructure.workspace import Workspace
from depmap.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """``depmap -v`` enables telemetry for the rest of the thread; undo it."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """CLI invocations reconfigure the root logger; put it back."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    depmap_level = logging.getLogger("depmap").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("depmap").setLevel(depmap_level)


@pytest.fixture
def tmp_path(tmp_path: Path) -> Path:
    """Symlink-free temporary directory; settings resolve project roots the same way."""
    return tmp_path.resolve()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_json(path: Path, data: Any) -> Path:
    """Write *data* as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def write_manifest(location: Path, **sections: Any) -> Path:
    """Write a ``package.json`` into the *location* directory."""
    return write_json(location / "package.json", sections)


def package(name: str, version: str, location: Path | str) -> dict[str, str]:
    """An inventory row."""
    return {"name": name, "version": version, "location": str(location)}


def resolution(key: str, version: str) -> dict[str, str]:
    """A resolution-table row."""
    return {"key": key, "version": version}


# ---------------------------------------------------------------------------
# Sample project
# ---------------------------------------------------------------------------
#
# <tmp>/app                       app@0.0.0        local
# <tmp>/app/packages/lib          lib@1.0.0        local (peer on react)
# <tmp>/store/react-dom           react-dom@18.2.0 external (peer on react)
# <tmp>/store/scheduler           scheduler@0.23.0 external
# <tmp>/store/left-pad            left-pad@1.3.0   external
# <tmp>/store/react               react@18.2.0     external


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project directory (the locality prefix)."""
    root = tmp_path / "app"
    root.mkdir()
    return root


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    """Directory of external packages, outside the project root."""
    store = tmp_path / "store"
    store.mkdir()
    return store


@pytest.fixture
def sample_project(project_root: Path, store_root: Path) -> Path:
    """Write inventory, resolutions and manifests for the sample project."""
    lib = project_root / "packages" / "lib"
    write_manifest(
        project_root,
        name="app",
        dependencies={"lib": "workspace:^", "react-dom": "^18.0.0"},
        devDependencies={"left-pad": "^1.0.0"},
    )
    write_manifest(
        lib,
        name="lib",
        dependencies={"left-pad": "^1.3.0"},
        peerDependencies={"react": "*"},
    )
    write_manifest(
        store_root / "react-dom",
        name="react-dom",
        dependencies={"scheduler": "^0.23.0"},
        devDependencies={"jest": "^29.0.0"},
        peerDependencies={"react": "^18.2.0"},
    )
    write_manifest(store_root / "scheduler", name="scheduler")
    write_manifest(store_root / "left-pad", name="left-pad")
    write_manifest(store_root / "react", name="react")

    write_json(
        project_root / "map.json",
        [
            package("app", "0.0.0", project_root),
            package("lib", "1.0.0", lib),
            package("react-dom", "18.2.0", store_root / "react-dom"),
            package("scheduler", "0.23.0", store_root / "scheduler"),
            package("left-pad", "1.3.0", store_root / "left-pad"),
            package("react", "18.2.0", store_root / "react"),
        ],
    )
    write_json(
        project_root / "resolutions.json",
        [
            resolution("lib@workspace:^", "1.0.0"),
            resolution("react-dom@^18.0.0", "18.2.0"),
            resolution("left-pad@^1.0.0", "1.3.0"),
            resolution("left-pad@^1.3.0", "1.3.0"),
            resolution("scheduler@^0.23.0", "0.23.0"),
        ],
    )
    return project_root


@pytest.fixture
def workspace(sample_project: Path) -> Workspace:
    """Workspace over the sample project."""
    return Workspace(DepmapSettings.from_cli(project_root=sample_project))


@pytest.fixture
def _in_sample_project(sample_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the sample project so the CLI uses its conventional inputs."""
    monkeypatch.chdir(sample_project)


SAMPLE_GRAPH: dict[str, Any] = {
    "nodes": [
        "app@0.0.0",
        "lib@1.0.0",
        "react-dom@18.2.0",
        "scheduler@0.23.0",
        "left-pad@1.3.0",
        "react@18.2.0",
        "root",
    ],
    "links": [
        {"source": "app@0.0.0", "target": "lib@1.0.0", "type": "regular"},
        {"source": "app@0.0.0", "target": "react-dom@18.2.0", "type": "regular"},
        {"source": "app@0.0.0", "target": "left-pad@1.3.0", "type": "regular"},
        {"source": "lib@1.0.0", "target": "left-pad@1.3.0", "type": "regular"},
        {"source": "react-dom@18.2.0", "target": "scheduler@0.23.0", "type": "regular"},
        {"source": "react-dom@18.2.0", "target": "react", "type": "peer"},
        {"source": "root", "target": "app@0.0.0", "type": "regular"},
        {"source": "root", "target": "lib@1.0.0", "type": "regular"},
    ],
}
