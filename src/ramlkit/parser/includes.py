"""Inline ``!include`` tags in a raw RAML document.

The ``!include`` tag is registered on :class:`RamlLoader`, a private
:class:`yaml.SafeLoader` subclass, so PyYAML's global loaders are never
touched.  Loading only records each tag as an :class:`Include` marker;
:func:`expand_includes` then walks the loaded data depth-first and replaces
every marker with the content of the file it names.

Relative include paths resolve against the directory of the file that
contains them, so an included file may itself include siblings by their
bare name.  Files with a RAML or YAML extension are parsed (and their own
includes expanded); any other file (JSON or XSD schemas, Markdown,
examples) is inlined as text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ramlkit.exceptions import IncludeError

logger = logging.getLogger(__name__)

INCLUDE_TAG = "!include"

RAML_EXTENSIONS = (".raml", ".yaml", ".yml")


@dataclass(frozen=True)
class Include:
    """An unresolved ``!include`` of *path*, as written in the document."""

    path: str


class RamlLoader(yaml.SafeLoader):
    """SafeLoader that understands the RAML ``!include`` tag."""


def _construct_include(loader: RamlLoader, node: yaml.Node) -> Include:
    if not isinstance(node, yaml.ScalarNode):
        raise yaml.constructor.ConstructorError(
            None, None, f"{INCLUDE_TAG} expects a file path", node.start_mark
        )
    return Include(loader.construct_scalar(node).strip())


RamlLoader.add_constructor(INCLUDE_TAG, _construct_include)


def load_yaml(text: str) -> Any:
    """Parse *text* with :class:`RamlLoader`; raises :class:`yaml.YAMLError`."""
    return yaml.load(text, Loader=RamlLoader)


def child_working_dir(cwd: Path, path: str) -> Path:
    """Directory that includes inside the file at *path* resolve against."""
    target = Path(path)
    if target.is_absolute():
        return target.parent
    return cwd / target.parent


def read_include(path: str, cwd: Path, encoding: str = "utf-8") -> Any:
    """Read the included file at *path*, relative to *cwd*.

    Returns:
        The parsed document for RAML/YAML files, otherwise the file's text.

    Raises:
        IncludeError: If the file cannot be read or is not valid YAML.
    """
    target = Path(path)
    if not target.is_absolute():
        target = cwd / target

    try:
        text = target.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise IncludeError(f"Cannot include {path}: {exc}") from exc

    if target.suffix.lower() not in RAML_EXTENSIONS:
        logger.debug("Inlined %s as text", target)
        return text

    try:
        data = load_yaml(text)
    except yaml.YAMLError as exc:
        raise IncludeError(f"Cannot include {path}: not a valid YAML document\n{exc}") from exc
    logger.debug("Included %s", target)
    return data


def expand_includes(value: Any, cwd: Path, encoding: str = "utf-8") -> Any:
    """Return *value* with every :class:`Include` replaced by its content.

    Args:
        value: Data produced by :func:`load_yaml`.
        cwd: Directory relative include paths resolve against.
        encoding: Text encoding of included files.

    Raises:
        IncludeError: If an included file cannot be read or parsed.
    """
    if isinstance(value, Include):
        content = read_include(value.path, cwd, encoding)
        return expand_includes(content, child_working_dir(cwd, value.path), encoding)
    if isinstance(value, dict):
        return {key: expand_includes(item, cwd, encoding) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_includes(item, cwd, encoding) for item in value]
    return value
