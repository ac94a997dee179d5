import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from gosymex.cli.main import app

from conftest import fixture_path

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch):
    # keep a stray gosymex.yaml in the working directory from leaking into tests
    monkeypatch.chdir(tmp_path)


def test_describe_file_prints_json():
    result = runner.invoke(app, ["describe", str(fixture_path("testfile.go"))])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["Imports"] == ["fmt", "net/http"]
    assert payload["Interfaces"] is None
    assert payload["Funcs"] == [
        "MyFunc(param1 int, param2 string) returns (result bool)",
        "main()",
    ]


def test_describe_missing_path_fails():
    result = runner.invoke(app, ["describe", "does/not/exist.go"])
    assert result.exit_code == 1


def test_describe_directory_reports_failures(tmp_path: Path):
    (tmp_path / "ok.go").write_text("package p\n\nfunc Ok() {}\n")
    (tmp_path / "bad.go").write_text("package p\n\nfunc Bad( {\n")

    result = runner.invoke(app, ["describe", str(tmp_path)])

    assert result.exit_code == 1
    assert "Ok()" in result.stdout
    assert "bad.go" in result.output


def test_describe_honours_config_file(tmp_path: Path):
    (tmp_path / "a_test.go").write_text("package p\n\nfunc TestA() {}\n")
    config = tmp_path / "custom.yaml"
    config.write_text("include_tests: true\n")

    without = runner.invoke(app, ["describe", str(tmp_path)])
    with_config = runner.invoke(app, ["describe", str(tmp_path), "--config", str(config)])

    assert "TestA()" not in without.stdout
    assert "TestA()" in with_config.stdout


def test_detect_lists_direct_dependencies(go_project: Path):
    result = runner.invoke(app, ["detect", str(go_project / "internal" / "util" / "util.go")])

    assert result.exit_code == 0
    assert "is a Go project" in result.output
    assert "Module Path: example.com/demo" in result.output
    assert "github.com/spf13/cobra" in result.output
    assert "golang.org/x/mod" in result.output
    assert "github.com/spf13/pflag" not in result.output


def test_detect_all_deps_includes_indirect(go_project: Path):
    result = runner.invoke(app, ["detect", str(go_project), "--all-deps"])

    assert result.exit_code == 0
    assert "github.com/spf13/pflag" in result.output


def test_detect_without_dependencies(tmp_path: Path):
    (tmp_path / "go.mod").write_text("module example.com/lonely\n")
    result = runner.invoke(app, ["detect", str(tmp_path)])

    assert result.exit_code == 0
    assert "No dependencies found." in result.output


def test_detect_outside_project(tmp_path: Path):
    config = tmp_path / "gosymex.yaml"
    config.write_text("manifest_name: gosymex-absent.mod\n")

    result = runner.invoke(app, ["detect", str(tmp_path), "--config", str(config)])

    assert result.exit_code == 1
    assert "is not a Go project" in result.output
    assert "No gosymex-absent.mod file found." in result.output
