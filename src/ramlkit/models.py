"""Canonical Pydantic models and enumerations shared across ramlkit modules.

The node tree itself lives in :mod:`ramlkit.nodes`; this module only holds
the small value types the builder validates against and the configuration
model:

**Vocabulary enumerations** -- the fixed value sets RAML 0.8 allows:
    :class:`HTTPMethod`, :class:`Protocol`, :class:`ParameterType`.

**Configuration model** -- :class:`ParserConfig`, resolved by
:func:`ramlkit.config.resolve_config` and passed to
:func:`ramlkit.parser.loader.load_raml`.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class HTTPMethod(str, enum.Enum):
    """HTTP methods defined in RFC 2616 and RFC 5789.

    These are the only keys (besides properties and nested ``/`` resources)
    accepted on a resource.
    """

    OPTIONS = "options"
    GET = "get"
    HEAD = "head"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    TRACE = "trace"
    CONNECT = "connect"
    PATCH = "patch"


class Protocol(str, enum.Enum):
    """Protocols allowed in a ``protocols`` list (stored upper-cased)."""

    HTTP = "HTTP"
    HTTPS = "HTTPS"


class ParameterType(str, enum.Enum):
    """Primitive types a named parameter may declare."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    DATE = "date"
    BOOLEAN = "boolean"
    FILE = "file"


class ParserConfig(BaseModel):
    """Options controlling how a RAML document is loaded and resolved.

    Fields have the lowest precedence here; see
    :func:`~ramlkit.config.resolve_config` for how project files,
    environment variables and CLI flags layer on top.
    """

    model_config = ConfigDict(extra="forbid")

    base_dir: Optional[Path] = Field(
        default=None,
        description="Initial working directory for !include resolution "
        "(defaults to the document's own directory, or cwd)",
    )
    encoding: str = Field(default="utf-8", description="Text encoding of RAML files")
    expand: bool = Field(
        default=True, description="Resolve traits, resource types and schemas"
    )
    timeout: float = Field(
        default=30.0, description="Timeout in seconds when fetching a URL"
    )
