"""Tests for the di-container command line tool."""

import textwrap

import pytest
import yaml
from typer.testing import CliRunner

from di_container import __version__
from di_container.cli import app
from di_container.cli.console import reset_console, set_verbose

SERVICES_MODULE = textwrap.dedent(
    """
    class Config:
        pass


    class Logger:
        def __init__(self, config):
            self.config = config


    def make_clock():
        return object()
    """
)


@pytest.fixture
def runner(restore_logging):
    """Create a CLI runner with a fresh console per test."""
    reset_console()
    yield CliRunner()
    reset_console()
    set_verbose(False)


@pytest.fixture
def write_manifest(tmp_path, monkeypatch):
    (tmp_path / "cli_services.py").write_text(SERVICES_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))

    def write(services, name="services.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump({"services": services}))
        return str(path)

    return write


@pytest.fixture
def good_manifest(write_manifest):
    return write_manifest([
        {"identifier": "IConfig", "implementation": "cli_services:Config"},
        {"identifier": "ILogger", "kind": "transient", "implementation": "cli_services:Logger", "arguments": ["IConfig"]},
        {"identifier": "IClock", "factory": "cli_services:make_clock"},
    ])


def invoke(runner, args):
    return runner.invoke(app, args, env={"COLUMNS": "200"})


class TestCLIApp:
    """Test suite for the top-level application."""

    def test_help(self, runner):
        result = invoke(runner, ["--help"])

        assert result.exit_code == 0
        assert "show" in result.output
        assert "check" in result.output

    def test_version(self, runner):
        result = invoke(runner, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestShowCommand:
    """Test suite for `di-container show`."""

    def test_lists_services(self, runner, good_manifest):
        result = invoke(runner, ["show", good_manifest])

        assert result.exit_code == 0
        assert "IConfig" in result.output
        assert "transient" in result.output
        assert "cli_services:make_clock()" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = invoke(runner, ["show", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1
        assert "CONFIG_FILE_NOT_FOUND" in result.output


class TestCheckCommand:
    """Test suite for `di-container check`."""

    def test_all_services_resolve(self, runner, good_manifest):
        result = invoke(runner, ["check", good_manifest])

        assert result.exit_code == 0
        assert "All 3 services resolved" in result.output

    def test_selected_services(self, runner, good_manifest):
        result = invoke(runner, ["check", good_manifest, "--service", "ILogger"])

        assert result.exit_code == 0
        assert "All 1 services resolved" in result.output

    def test_unresolved_dependency_fails(self, runner, write_manifest):
        manifest = write_manifest([
            {"identifier": "ILogger", "implementation": "cli_services:Logger", "arguments": ["IMissing"]},
        ])

        result = invoke(runner, ["check", manifest])

        assert result.exit_code == 1
        assert "FAILED" in result.output
        assert "UnresolvedDependencyError" in result.output

    def test_unregistered_selection_fails(self, runner, good_manifest):
        result = invoke(runner, ["check", good_manifest, "-s", "INope"])

        assert result.exit_code == 1
        assert "NotRegisteredError" in result.output

    def test_invalid_manifest(self, runner, write_manifest):
        manifest = write_manifest([{"identifier": "X"}], name="bad.yaml")

        result = invoke(runner, ["--verbose", "check", manifest])

        assert result.exit_code == 1
        assert "Details" in result.output
        assert "Raised at" in result.output

    def test_verbose_enables_library_logging(self, runner, good_manifest):
        result = invoke(runner, ["--verbose", "check", good_manifest])

        assert result.exit_code == 0
        assert "Registered singleton: 'IConfig'" in result.output
