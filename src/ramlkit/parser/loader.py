"""Load RAML documents from a URL, local file, or stdin.

This module handles all I/O for fetching the root RAML document, turning it
into a raw mapping, inlining ``!include`` files, and building the node tree.

The two public functions are:

* :func:`load_raml` -- Load and build a document from any supported source.
* :func:`parse_raml` -- Build a document from RAML text already in memory.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

import httpx
import yaml

from ramlkit.exceptions import RamlSyntaxError
from ramlkit.models import ParserConfig
from ramlkit.nodes import Root
from ramlkit.parser.includes import expand_includes, load_yaml

logger = logging.getLogger(__name__)

RAML_HEADER = "#%RAML"


def load_raml(source: str, config: Optional[ParserConfig] = None) -> Root:
    """Load a RAML document from URL, file path, or stdin ('-').

    Relative ``!include`` paths resolve against ``config.base_dir`` when it
    is set, otherwise against the document's own directory (or the current
    directory for URLs and stdin).

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        config: Loading options; defaults to :class:`ParserConfig()`.

    Returns:
        The built (and, unless ``config.expand`` is false, expanded) root.

    Raises:
        RamlSyntaxError: If the source cannot be loaded or is not a YAML map.
        IncludeError: If an included file cannot be read or parsed.
        ValidationError: If the document is not valid RAML.
        UnknownReference: If a trait, resource type or schema is not declared.
    """
    config = config or ParserConfig()

    if source == "-":
        content, base_dir = _load_from_stdin(), Path.cwd()
    elif source.startswith(("http://", "https://")):
        content, base_dir = _load_from_url(source, config.timeout), Path.cwd()
    else:
        content = _load_from_file(source, config.encoding)
        base_dir = Path(source).resolve().parent

    return parse_raml(content, base_dir=config.base_dir or base_dir,
                      expand=config.expand, encoding=config.encoding)


def parse_raml(
    text: str,
    base_dir: Optional[Union[str, Path]] = None,
    expand: bool = True,
    encoding: str = "utf-8",
) -> Root:
    """Build a :class:`~ramlkit.nodes.root.Root` from RAML text.

    Args:
        text: The document source.
        base_dir: Directory relative includes resolve against (default cwd).
        expand: Apply traits, resource types and schema references.
        encoding: Text encoding of included files.

    Raises:
        RamlSyntaxError: If *text* is not valid YAML or not a map.
    """
    if not text.lstrip().startswith(RAML_HEADER):
        logger.warning("Document does not start with a %s header line", RAML_HEADER)

    try:
        data = load_yaml(text)
    except yaml.YAMLError as exc:
        raise RamlSyntaxError(f"Invalid YAML: {exc}") from exc

    data = expand_includes(data, Path(base_dir) if base_dir is not None else Path.cwd(), encoding)
    root = Root(data)
    logger.info("Built document %r with %d top-level resources", root.title, len(root.resources))
    if expand:
        root.expand()
    return root


def _load_from_stdin() -> str:
    """Read the document from stdin.

    Raises:
        RamlSyntaxError: If stdin cannot be read or is empty.
    """
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise RamlSyntaxError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise RamlSyntaxError("No input received from stdin")
    return content


def _load_from_url(url: str, timeout: float) -> str:
    """Fetch the document from *url*.

    Raises:
        RamlSyntaxError: If the URL cannot be fetched or returns an empty body.
    """
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise RamlSyntaxError(
            f"HTTP {exc.response.status_code} fetching RAML from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise RamlSyntaxError(f"Failed to fetch RAML from {url}: {exc}") from exc

    if not response.text.strip():
        raise RamlSyntaxError(f"Empty response fetching RAML from {url}")
    return response.text


def _load_from_file(path: str, encoding: str) -> str:
    """Read the document from a local file.

    Raises:
        RamlSyntaxError: If the file is missing, unreadable, or empty.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise RamlSyntaxError(f"RAML file not found: {path}")

    try:
        content = file_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise RamlSyntaxError(f"Failed to read RAML file {path}: {exc}") from exc

    if not content.strip():
        raise RamlSyntaxError(f"RAML file is empty: {path}")
    return content
