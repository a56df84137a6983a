"""Tests for depmap.toml discovery."""

from pathlib import Path

import pytest

from depmap.config.discovery import CONFIG_ENV_VAR, find_config, locate_config


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class TestFindConfig:
    def test_in_project_root(self, tmp_path: Path) -> None:
        (tmp_path / "depmap.toml").write_text("")
        assert find_config(tmp_path) == tmp_path / "depmap.toml"

    def test_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / "depmap.toml").write_text("")
        deep = tmp_path / "a" / "b" / "c"
        deep.mkdir(parents=True)
        assert find_config(deep) == tmp_path / "depmap.toml"

    def test_nearest_wins(self, tmp_path: Path) -> None:
        (tmp_path / "depmap.toml").write_text("")
        inner = tmp_path / "app"
        inner.mkdir()
        (inner / "depmap.toml").write_text("")
        assert find_config(inner) == inner / "depmap.toml"

    def test_ignores_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        shell = tmp_path / "shell"
        shell.mkdir()
        (shell / "depmap.toml").write_text("")
        project = tmp_path / "project"
        project.mkdir()
        monkeypatch.chdir(shell)
        assert find_config(project) is None


class TestLocateConfig:
    def test_explicit_path_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "depmap.toml").write_text("")
        explicit = tmp_path / "explicit.toml"
        explicit.write_text("")
        env = tmp_path / "env.toml"
        env.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(env))
        assert locate_config(tmp_path, str(explicit)) == explicit

    def test_env_var_beats_walk_up(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "depmap.toml").write_text("")
        env = tmp_path / "env.toml"
        env.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(env))
        assert locate_config(tmp_path) == env

    def test_missing_override_yields_none(self, tmp_path: Path) -> None:
        (tmp_path / "depmap.toml").write_text("")
        assert locate_config(tmp_path, str(tmp_path / "nope.toml")) is None

    def test_falls_back_to_walk_up(self, tmp_path: Path) -> None:
        (tmp_path / "depmap.toml").write_text("")
        assert locate_config(tmp_path) == tmp_path / "depmap.toml"
