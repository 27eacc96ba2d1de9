"""ramlkit -- Parse, validate and expand RAML 0.8 API definitions.

This package turns a RAML document into a typed node tree: every property is
validated as it is read, ``!include`` files are inlined, and traits, resource
types and named schemas are applied to the resources that use them.

Typical use::

    import ramlkit

    root = ramlkit.load("api.raml")
    users = root.resource("/users")
    print(users.method("get").query_parameters)

Modules:
    nodes: The typed node tree and its property validation.
    parser: Loading, ``!include`` preprocessing and reference expansion.
    models: Vocabulary enumerations and the parser configuration model.
    config: Project-file and environment configuration resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    app: Typer application and CLI entry point.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

__version__ = "0.1.0"

if TYPE_CHECKING:
    from ramlkit.models import ParserConfig
    from ramlkit.nodes import Root


def parse(text: str, base_dir: Optional[Union[str, Path]] = None, expand: bool = True) -> Root:
    """Build a document from RAML *text*; see :func:`ramlkit.parser.loader.parse_raml`."""
    from ramlkit.parser import parse_raml

    return parse_raml(text, base_dir=base_dir, expand=expand)


def load(source: str, config: Optional[ParserConfig] = None) -> Root:
    """Load a document from a path, URL or ``-``; see :func:`ramlkit.parser.loader.load_raml`."""
    from ramlkit.parser import load_raml

    return load_raml(source, config)
