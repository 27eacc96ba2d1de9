"""Reusable property checks shared by the node builders.

Every check raises a :class:`~ramlkit.exceptions.ValidationError` subclass
whose message starts with the offending RAML property name, so that callers
can surface it to the user unchanged.
"""

from __future__ import annotations

import re
from typing import Any, Optional
from urllib.parse import urlsplit

from uritemplate import URITemplate

from ramlkit.exceptions import (
    InvalidMediaType,
    InvalidProperty,
    RequiredPropertyMissing,
)
from ramlkit.models import Protocol

MEDIA_TYPE_RE = re.compile(
    r"[a-z\d][-\w.+!#$&^]{0,63}/[a-z\d][-\w.+!#$&^]{0,63}(;.*)?",
    re.IGNORECASE,
)

_KEY_NAMES = {str: "string", int: "integer"}

PLACEHOLDER_MARK = "<<"

# Characters that may not appear literally in a URI (RFC 3986).
_URI_UNSAFE_RE = re.compile(r"[\s{}<>\"^`|\\]")


def has_placeholder(value: Any) -> bool:
    """Whether *value* is a string using a ``<<parameter>>`` placeholder.

    Such values appear in trait and resource type definitions and are only
    checked once the parameters have been substituted.
    """
    return isinstance(value, str) and PLACEHOLDER_MARK in value


def _is_type(value: Any, kind: type) -> bool:
    # bool is an int subclass; YAML ``true`` is never a status code or a number.
    if isinstance(value, bool) and kind is not bool:
        return False
    return isinstance(value, kind)


def check_map(
    key: str,
    value: Any,
    key_type: type = str,
    value_type: type = dict,
) -> None:
    """Check that *value* is a map with keys of *key_type* and map values.

    ``None`` values are accepted because YAML yields ``None`` for a key
    declared without a body (``page:``).
    """
    if not isinstance(value, dict):
        raise InvalidProperty(f"{key} property must be a map")
    if not all(_is_type(k, key_type) for k in value):
        raise InvalidProperty(
            f"{key} property must be a map with {_KEY_NAMES.get(key_type, key_type.__name__)} keys"
        )
    if not all(v is None or isinstance(v, value_type) for v in value.values()):
        raise InvalidProperty(f"{key} property must be a map with map values")


def check_string(key: str, value: Any, allow_empty: bool = True) -> None:
    """Check an optional string property (``None`` passes)."""
    if value is None or has_placeholder(value):
        return
    if not isinstance(value, str):
        raise InvalidProperty(f"{key} property must be a string")
    if not allow_empty and not value:
        raise InvalidProperty(f"{key} property must be a non-empty string")


def check_boolean(key: str, value: Any) -> None:
    if value is not None and not has_placeholder(value) and not isinstance(value, bool):
        raise InvalidProperty(f"{key} property must be a boolean")


def check_number(key: str, value: Any) -> None:
    if value is None or has_placeholder(value):
        return
    if not (_is_type(value, int) or _is_type(value, float)):
        raise InvalidProperty(f"{key} property must be a number")


def check_non_negative_integer(key: str, value: Any) -> None:
    if value is None or has_placeholder(value):
        return
    if not (_is_type(value, int) and value >= 0):
        raise InvalidProperty(f"{key} property must be a non-negative integer")


def check_protocols(value: Any) -> Optional[list[str]]:
    """Validate a ``protocols`` list and return it upper-cased."""
    if value is None:
        return None
    if not isinstance(value, list):
        raise InvalidProperty("protocols property must be an array")
    if not all(isinstance(p, str) for p in value):
        raise InvalidProperty("protocols property must be an array of strings")
    protocols = [p.upper() for p in value]
    allowed = {p.value for p in Protocol}
    if not all(p in allowed for p in protocols):
        raise InvalidProperty("protocols property elements must be HTTP or HTTPS")
    return protocols


def check_media_type(key: str, value: Any, error: type = InvalidProperty) -> None:
    if has_placeholder(value):
        return
    if not isinstance(value, str) or not MEDIA_TYPE_RE.fullmatch(value):
        raise error(f"{key} is malformed: {value!r} is not a media type")


def check_body_media_type(media_type: Any) -> None:
    check_media_type("body media type", media_type, InvalidMediaType)


def check_named_maps(
    key: str,
    value: Any,
    value_type: type = dict,
    label: str = "definition",
) -> dict[str, Any]:
    """Validate an array of single-name maps and merge it into one dict.

    Used for the root ``schemas``, ``traits`` and ``resourceTypes`` catalogs,
    which RAML 0.8 declares as a list of maps so that entries can be split
    across included files.
    """
    if not isinstance(value, list):
        raise InvalidProperty(f"{key} property must be an array")
    if not all(isinstance(entry, dict) for entry in value):
        raise InvalidProperty(f"{key} property must be an array of maps")
    if not all(isinstance(name, str) for entry in value for name in entry):
        raise InvalidProperty(f"{key} property must be an array of maps with string keys")
    if not all(
        v is None or isinstance(v, value_type) for entry in value for v in entry.values()
    ):
        kind = "string" if value_type is str else "map"
        raise InvalidProperty(f"{key} property must be an array of maps with {kind} values")

    merged: dict[str, Any] = {}
    for entry in value:
        for name, definition in entry.items():
            if name in merged:
                raise InvalidProperty(
                    f"{key} property contains duplicate {label} names: {name!r}"
                )
            merged[name] = definition
    return merged


def is_http_url(text: str) -> bool:
    """Return True if *text* is a well-formed absolute HTTP or HTTPS URL."""
    if _URI_UNSAFE_RE.search(text):
        return False
    try:
        parts = urlsplit(text)
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return False
    return parts.scheme.lower() in ("http", "https") and bool(parts.hostname)


def check_base_uri(base_uri: Any, version: Any) -> None:
    """Validate the root ``baseUri`` as an HTTP(S) URL or an RFC 6570 template.

    A template is accepted when expanding every variable to a placeholder
    value yields an HTTP(S) URL.  A template using the ``version`` variable
    additionally requires the document to declare ``version``.
    """
    if base_uri is None:
        raise RequiredPropertyMissing("Missing root baseUri property")
    if not isinstance(base_uri, str):
        raise InvalidProperty("baseUri property must be a string")

    if is_http_url(base_uri):
        return

    template = URITemplate(base_uri)
    expanded = template.expand({name: "a" for name in template.variable_names})
    if not is_http_url(expanded):
        raise InvalidProperty("baseUri property is not a URL or a URL template.")

    if "version" in template.variable_names and version is None:
        raise RequiredPropertyMissing(
            "version property is required when baseUri template has version parameter"
        )
