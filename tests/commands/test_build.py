"""Tests for the build command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from depmap.cli import cli
from tests.conftest import SAMPLE_GRAPH, package, resolution, write_json, write_manifest


@pytest.mark.usefixtures("_in_sample_project")
class TestBuildCommand:
    def test_prints_graph(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["build"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == SAMPLE_GRAPH

    def test_no_command_runs_build(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == SAMPLE_GRAPH

    def test_two_space_indent_single_newline(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["build"])
        assert result.output.startswith('{\n  "nodes": [\n    "app@0.0.0",')
        assert result.output.endswith("]\n}\n")

    def test_indent_from_config(self, cli_runner: CliRunner, sample_project: Path) -> None:
        (sample_project / "depmap.toml").write_text("[output]\nindent = 4\n")
        result = cli_runner.invoke(cli, ["build"])
        assert result.exit_code == 0
        assert result.output.startswith('{\n    "nodes"')

    def test_input_overrides(self, cli_runner: CliRunner, sample_project: Path) -> None:
        write_json(
            sample_project / "out" / "inventory.json",
            [package("app", "0.0.0", sample_project)],
        )
        write_json(
            sample_project / "out" / "table.json",
            [
                resolution("lib@workspace:^", "1.0.0"),
                resolution("react-dom@^18.0.0", "18.2.0"),
                resolution("left-pad@^1.0.0", "1.3.0"),
            ],
        )
        result = cli_runner.invoke(
            cli,
            ["build", "--inventory", "out/inventory.json", "--resolutions", "out/table.json"],
        )
        assert result.exit_code == 0, result.output
        doc = json.loads(result.output)
        assert doc["nodes"] == ["app@0.0.0", "root"]
        assert doc["links"][-1] == {"source": "root", "target": "app@0.0.0", "type": "regular"}


class TestBuildFailures:
    @pytest.mark.usefixtures("_in_sample_project")
    def test_missing_resolution(self, cli_runner: CliRunner, sample_project: Path) -> None:
        write_json(sample_project / "resolutions.json", [])
        result = cli_runner.invoke(cli, ["build"])
        assert result.exit_code == 1
        assert "RESOLUTION_NOT_FOUND" in result.output
        assert "lib@workspace:^" in result.output
        assert '"nodes"' not in result.output

    @pytest.mark.usefixtures("_in_sample_project")
    def test_missing_resolution_json(self, cli_runner: CliRunner, sample_project: Path) -> None:
        write_json(sample_project / "resolutions.json", [])
        result = cli_runner.invoke(cli, ["--json", "build"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["ok"] is False
        assert data["op"] == "build_graph"
        assert data["error"]["code"] == "RESOLUTION_NOT_FOUND"
        assert data["error"]["detail"]["key"] == "lib@workspace:^"

    @pytest.mark.usefixtures("_in_sample_project")
    def test_quiet_failure(self, cli_runner: CliRunner, sample_project: Path) -> None:
        write_json(sample_project / "resolutions.json", [])
        result = cli_runner.invoke(cli, ["-q", "build"])
        assert result.exit_code == 1
        assert result.output.startswith("ERROR: build_graph")

    def test_missing_inventory(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--root", str(tmp_path), "build"])
        assert result.exit_code == 1
        assert "INPUT_NOT_FOUND" in result.output

    def test_malformed_manifest(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        write_json(tmp_path / "map.json", [package("a", "1.0.0", tmp_path / "a")])
        write_json(tmp_path / "resolutions.json", [])
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "package.json").write_text("{not json")
        result = cli_runner.invoke(cli, ["--root", str(tmp_path), "build"])
        assert result.exit_code == 1
        assert "MALFORMED_MANIFEST" in result.output

    def test_undecodable_manifest(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        write_json(tmp_path / "map.json", [package("a", "1.0.0", tmp_path / "a")])
        write_json(tmp_path / "resolutions.json", [])
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "package.json").write_bytes(b'{"dependencies": {"\xff": "1"}}')
        result = cli_runner.invoke(cli, ["--root", str(tmp_path), "build"])
        assert result.exit_code == 1
        assert not isinstance(result.exception, UnicodeDecodeError)
        assert "MALFORMED_MANIFEST" in result.output

    def test_duplicate_rejected_by_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        write_manifest(tmp_path / "a")
        write_json(tmp_path / "map.json", [package("a", "1.0.0", tmp_path / "a")])
        write_json(
            tmp_path / "resolutions.json",
            [resolution("b@^1.0.0", "1.0.0"), resolution("b@^1.0.0", "1.1.0")],
        )
        (tmp_path / "depmap.toml").write_text('[resolution]\nduplicates = "reject"\n')
        result = cli_runner.invoke(cli, ["--root", str(tmp_path), "build"])
        assert result.exit_code == 1
        assert "DUPLICATE_RESOLUTION" in result.output


class TestRootOption:
    def test_root_sets_locality(self, cli_runner: CliRunner, sample_project: Path) -> None:
        result = cli_runner.invoke(cli, ["--root", str(sample_project), "build"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == SAMPLE_GRAPH

    def test_dotted_root_keeps_locality(
        self, cli_runner: CliRunner, sample_project: Path, tmp_path: Path
    ) -> None:
        (tmp_path / "other").mkdir()
        dotted = tmp_path / "other" / ".." / sample_project.name
        result = cli_runner.invoke(cli, ["--root", str(dotted), "build"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == SAMPLE_GRAPH

    def test_input_options_relative_to_cwd(
        self,
        cli_runner: CliRunner,
        sample_project: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        inputs = tmp_path / "inputs"
        inputs.mkdir()
        (inputs / "map.json").write_text((sample_project / "map.json").read_text())
        (inputs / "res.json").write_text((sample_project / "resolutions.json").read_text())
        (sample_project / "map.json").unlink()
        monkeypatch.chdir(inputs)
        result = cli_runner.invoke(
            cli,
            [
                "--root",
                str(sample_project),
                "build",
                "--inventory",
                "map.json",
                "--resolutions",
                "res.json",
            ],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == SAMPLE_GRAPH

    def test_root_elsewhere_makes_everything_external(
        self, cli_runner: CliRunner, sample_project: Path, tmp_path: Path
    ) -> None:
        other = tmp_path / "other"
        other.mkdir()
        result = cli_runner.invoke(
            cli,
            [
                "--root",
                str(other),
                "build",
                "--inventory",
                str(sample_project / "map.json"),
                "--resolutions",
                str(sample_project / "resolutions.json"),
            ],
        )
        assert result.exit_code == 0, result.output
        doc = json.loads(result.output)
        assert all(link["source"] != "root" for link in doc["links"])
        # app is external now: its devDependency on left-pad is dropped
        assert {"source": "app@0.0.0", "target": "left-pad@1.3.0", "type": "regular"} not in doc[
            "links"
        ]
