"""End-to-end tests for the ramlkit CLI (validate, document, resources)."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Callable

import pytest
from typer.testing import CliRunner

import ramlkit.app as app_module
from ramlkit import __version__
from ramlkit.app import app

runner = CliRunner()

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def _strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


HEADER = "#%RAML 0.8\ntitle: Broken API\nbaseUri: http://example.com\n"


@pytest.fixture(autouse=True)
def _detach_log_handler(isolated_config: Path):
    """Remove the handler main_callback installs; it points at CliRunner streams."""
    yield
    if app_module._log_handler is not None:
        logging.getLogger("ramlkit").removeHandler(app_module._log_handler)
        app_module._log_handler = None


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------


class TestGlobalOptions:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"ramlkit {__version__}" in result.output

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        output = _strip_ansi(result.output)
        for command in ("validate", "document", "resources"):
            assert command in output


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


class TestValidate:
    def test_valid_document(self, api_raml: Path) -> None:
        result = runner.invoke(app, ["validate", str(api_raml)])
        assert result.exit_code == 0, result.output
        assert "Jukebox API: valid RAML (2 resources)" in _strip_ansi(result.output)

    def test_quiet_hides_success(self, api_raml: Path) -> None:
        result = runner.invoke(app, ["--quiet", "validate", str(api_raml)])
        assert result.exit_code == 0
        assert "valid RAML" not in result.output

    def test_reads_stdin(self) -> None:
        result = runner.invoke(app, ["--no-color", "validate", "-"], input=HEADER + "/ping:\n  get:\n")
        assert result.exit_code == 0, result.output
        assert "Broken API: valid RAML (1 resources)" in result.output

    @pytest.mark.parametrize(
        "body, exit_code, message",
        [
            ("/users:\n  fetch:\n", 3, "fetch is an unsupported HTTP method"),
            ("/users:\n  get:\n    is: [ secured ]\n", 4, "secured"),
            ("/users:\n  description: !include missing.md\n", 5, "Cannot include missing.md"),
            ("/users: [unclosed\n", 6, "Invalid YAML"),
        ],
    )
    def test_invalid_documents(
        self,
        body: str,
        exit_code: int,
        message: str,
        raml_tree: Callable[[dict[str, str]], Path],
    ) -> None:
        base = raml_tree({"api.raml": HEADER + body})
        result = runner.invoke(app, ["--no-color", "validate", str(base / "api.raml")])
        assert result.exit_code == exit_code
        assert "Error:" in result.output
        assert message in result.output

    def test_missing_file(self) -> None:
        result = runner.invoke(app, ["--no-color", "validate", "nowhere.raml"])
        assert result.exit_code == 6
        assert "RAML file not found" in result.output

    def test_base_dir_option(self, raml_tree: Callable[[dict[str, str]], Path]) -> None:
        base = raml_tree({
            "raml/api.raml": HEADER + "/users:\n  description: !include users.md\n",
            "shared/users.md": "All users",
        })
        result = runner.invoke(
            app, ["validate", str(base / "raml" / "api.raml"), "--base-dir", str(base / "shared")]
        )
        assert result.exit_code == 0, result.output

    def test_bad_environment(self, api_raml: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RAMLKIT_NO_EXPAND", "maybe")
        result = runner.invoke(app, ["--no-color", "validate", str(api_raml)])
        assert result.exit_code == 1
        assert "RAMLKIT_NO_EXPAND" in result.output


# ---------------------------------------------------------------------------
# document
# ---------------------------------------------------------------------------


class TestDocument:
    def test_plain_markdown_on_stdout(self, api_raml: Path) -> None:
        result = runner.invoke(app, ["--plain", "document", str(api_raml)])
        assert result.exit_code == 0, result.output
        assert result.stdout.startswith("# Jukebox API\n")
        assert "## Getting started" in result.stdout
        assert "### /songs" in result.stdout
        assert "**limit**" in result.stdout

    def test_no_expand(self, api_raml: Path) -> None:
        result = runner.invoke(app, ["--plain", "document", "--no-expand", str(api_raml)])
        assert result.exit_code == 0, result.output
        assert "### /songs" in result.stdout
        assert "**limit**" not in result.stdout

    def test_output_file(self, api_raml: Path, isolated_config: Path) -> None:
        target = isolated_config / "API.md"
        result = runner.invoke(app, ["--no-color", "document", str(api_raml), "-o", str(target)])
        assert result.exit_code == 0, result.output
        assert f"Wrote {target}" in result.output
        assert target.read_text(encoding="utf-8").startswith("# Jukebox API\n")


# ---------------------------------------------------------------------------
# resources
# ---------------------------------------------------------------------------


class TestResources:
    def test_json(self, api_raml: Path) -> None:
        result = runner.invoke(app, ["--json", "resources", str(api_raml)])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == [
            {"Path": "/songs", "Methods": "GET", "Name": ""},
            {"Path": "/songs/{songId}", "Methods": "GET", "Name": ""},
        ]

    def test_plain(self, api_raml: Path) -> None:
        result = runner.invoke(app, ["--plain", "resources", str(api_raml)])
        assert result.exit_code == 0
        lines = result.stdout.strip().split("\n")
        assert lines[0] == "Path\tMethods\tName"
        assert lines[1].startswith("/songs\tGET")

    def test_no_resources(self, raml_tree: Callable[[dict[str, str]], Path]) -> None:
        base = raml_tree({"api.raml": HEADER})
        result = runner.invoke(app, ["--no-color", "resources", str(base / "api.raml")])
        assert result.exit_code == 0
        assert "No resources defined in this document." in result.output
