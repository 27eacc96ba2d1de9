"""Tests for ramlkit.parser.loader."""

from __future__ import annotations

import io
import logging
import textwrap
from pathlib import Path
from typing import Callable
from unittest.mock import patch

import httpx
import pytest

from ramlkit.exceptions import IncludeError, RamlSyntaxError
from ramlkit.models import ParserConfig
from ramlkit.parser.loader import (
    _load_from_file,
    _load_from_stdin,
    _load_from_url,
    load_raml,
    parse_raml,
)

MINIMAL = textwrap.dedent("""\
    #%RAML 0.8
    title: Minimal
    baseUri: http://example.com
    /ping:
      get:
""")


# ---------------------------------------------------------------------------
# load_raml dispatch
# ---------------------------------------------------------------------------


class TestLoadRaml:
    """Test load_raml dispatcher routes to the correct loader."""

    def test_loads_bundled_example(self, api_raml: Path) -> None:
        root = load_raml(str(api_raml))
        assert root.title == "Jukebox API"
        assert root.version == "v1"
        assert root.expanded

    def test_loads_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "api.raml"
        path.write_text(MINIMAL, encoding="utf-8")
        root = load_raml(str(path))
        assert root.resource("ping").method("get") is not None

    def test_includes_resolve_against_document_dir(
        self, raml_tree: Callable[[dict[str, str]], Path], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        base = raml_tree({
            "raml/api.raml": MINIMAL + "/docs:\n  description: !include docs.md\n",
            "raml/docs.md": "All about docs",
        })
        monkeypatch.chdir(base)
        root = load_raml("raml/api.raml")
        assert root.resource("docs").description == "All about docs"

    def test_config_base_dir_wins(self, raml_tree: Callable[[dict[str, str]], Path]) -> None:
        base = raml_tree({
            "raml/api.raml": MINIMAL + "/docs:\n  description: !include docs.md\n",
            "shared/docs.md": "Shared docs",
        })
        config = ParserConfig(base_dir=base / "shared")
        root = load_raml(str(base / "raml" / "api.raml"), config)
        assert root.resource("docs").description == "Shared docs"

    def test_config_can_disable_expansion(self, api_raml: Path) -> None:
        root = load_raml(str(api_raml), ParserConfig(expand=False))
        assert not root.expanded
        assert root.resource("songs").type is not None

    def test_loads_from_stdin(self) -> None:
        with patch("ramlkit.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(MINIMAL)
            root = load_raml("-")
        assert root.title == "Minimal"

    def test_loads_from_url(self) -> None:
        mock_response = httpx.Response(
            status_code=200,
            text=MINIMAL,
            request=httpx.Request("GET", "https://example.com/api.raml"),
        )
        with patch("ramlkit.parser.loader.httpx.get", return_value=mock_response) as mock_get:
            root = load_raml("https://example.com/api.raml", ParserConfig(timeout=5))
        assert root.title == "Minimal"
        assert mock_get.call_args.kwargs["timeout"] == 5


# ---------------------------------------------------------------------------
# parse_raml
# ---------------------------------------------------------------------------


class TestParseRaml:
    def test_parses_and_expands(self) -> None:
        root = parse_raml(MINIMAL)
        assert root.expanded

    def test_without_expansion(self) -> None:
        assert not parse_raml(MINIMAL, expand=False).expanded

    def test_invalid_yaml(self) -> None:
        with pytest.raises(RamlSyntaxError, match="Invalid YAML"):
            parse_raml("title: [unclosed\n")

    def test_scalar_document(self) -> None:
        with pytest.raises(RamlSyntaxError, match="map"):
            parse_raml("#%RAML 0.8\njust text\n")

    def test_missing_header_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="ramlkit"):
            parse_raml("title: x\nbaseUri: http://foo.com\n")
        assert "#%RAML" in caplog.text

    def test_missing_include(self, tmp_path: Path) -> None:
        with pytest.raises(IncludeError, match="nowhere.raml"):
            parse_raml(MINIMAL + "/x: !include nowhere.raml\n", base_dir=tmp_path)


# ---------------------------------------------------------------------------
# Source loaders
# ---------------------------------------------------------------------------


class TestLoadFromFile:
    def test_file_not_found_raises(self) -> None:
        with pytest.raises(RamlSyntaxError, match="not found"):
            _load_from_file("/nonexistent/path/to/api.raml", "utf-8")

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.raml"
        path.write_text("   \n", encoding="utf-8")
        with pytest.raises(RamlSyntaxError, match="empty"):
            _load_from_file(str(path), "utf-8")

    def test_encoding_is_honoured(self, tmp_path: Path) -> None:
        path = tmp_path / "latin.raml"
        path.write_bytes("title: caf\xe9\n".encode("latin-1"))
        assert "café" in _load_from_file(str(path), "latin-1")

    def test_undecodable_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "latin.raml"
        path.write_bytes("title: caf\xe9\n".encode("latin-1"))
        with pytest.raises(RamlSyntaxError, match="Failed to read"):
            _load_from_file(str(path), "utf-8")


class TestLoadFromStdin:
    def test_empty_stdin_raises(self) -> None:
        with patch("ramlkit.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("")
            with pytest.raises(RamlSyntaxError, match="No input"):
                _load_from_stdin()


class TestLoadFromUrl:
    def test_http_error_status(self) -> None:
        mock_response = httpx.Response(
            status_code=404,
            request=httpx.Request("GET", "https://example.com/api.raml"),
        )
        with patch("ramlkit.parser.loader.httpx.get", return_value=mock_response):
            with pytest.raises(RamlSyntaxError, match="HTTP 404"):
                _load_from_url("https://example.com/api.raml", 30.0)

    def test_connection_error(self) -> None:
        error = httpx.ConnectError("refused", request=httpx.Request("GET", "https://example.com"))
        with patch("ramlkit.parser.loader.httpx.get", side_effect=error):
            with pytest.raises(RamlSyntaxError, match="Failed to fetch"):
                _load_from_url("https://example.com/api.raml", 30.0)

    def test_empty_body(self) -> None:
        mock_response = httpx.Response(
            status_code=200,
            text="",
            request=httpx.Request("GET", "https://example.com/api.raml"),
        )
        with patch("ramlkit.parser.loader.httpx.get", return_value=mock_response):
            with pytest.raises(RamlSyntaxError, match="Empty response"):
                _load_from_url("https://example.com/api.raml", 30.0)


# ---------------------------------------------------------------------------
# Package-level helpers
# ---------------------------------------------------------------------------


class TestPackageApi:
    def test_parse(self, raml_tree: Callable[[dict[str, str]], Path]) -> None:
        import ramlkit

        base = raml_tree({"docs.md": "Ping docs"})
        root = ramlkit.parse(MINIMAL + "/docs:\n  description: !include docs.md\n", base_dir=str(base))
        assert root.resource("docs").description == "Ping docs"

    def test_load(self, api_raml: Path) -> None:
        import ramlkit

        root = ramlkit.load(str(api_raml), ParserConfig(expand=False))
        assert root.title == "Jukebox API"
        assert not root.expanded
