"""Shared test fixtures for ramlkit.

Provides reusable fixtures for building documents from RAML text, creating
include trees on disk, isolating configuration, managing output state, and
running CLI commands. These fixtures are automatically discovered by pytest
and available to all test modules without explicit imports.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Callable

import pytest

from ramlkit.nodes import Root
from ramlkit.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def root() -> Root:
    """A minimal valid root for hanging nodes under in unit tests."""
    return Root({"title": "x", "baseUri": "http://foo.com"})


@pytest.fixture
def root_with_traits() -> Root:
    """A minimal root declaring the ``secured``, ``paged`` and ``rateLimited`` traits."""
    return Root({
        "title": "x",
        "baseUri": "http://foo.com",
        "traits": [
            {"secured": {}},
            {"paged": {}},
            {"rateLimited": {}},
        ],
    })


@pytest.fixture
def raml_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write a tree of files under tmp_path and return the root directory.

    Keys are paths relative to tmp_path, values are file contents (dedented).
    """

    def _write(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content), encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def api_raml() -> Path:
    """Path to the bundled example API (with includes, traits and resource types)."""
    return FIXTURES_DIR / "api.raml"


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Clears all RAMLKIT_* environment variables and changes the working
    directory to tmp_path, so no stray ``ramlkit.json`` is picked up.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    for var in ["RAMLKIT_BASE_DIR", "RAMLKIT_ENCODING", "RAMLKIT_NO_EXPAND"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner() -> Any:
    """Typer CLI test runner capturing stdout and stderr."""
    from typer.testing import CliRunner

    return CliRunner()
