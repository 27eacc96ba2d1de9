"""Named parameters: headers, query/URI/base-URI parameters and form fields.

All five kinds share one property table; they differ only in their default
for ``required`` (URI parameters are required unless stated otherwise).
"""

from __future__ import annotations

import re
from typing import Any, Optional

from ramlkit.exceptions import InvalidProperty
from ramlkit.models import ParameterType
from ramlkit.nodes.base import Node, attribute
from ramlkit.nodes.validation import (
    check_boolean,
    check_non_negative_integer,
    check_number,
    check_string,
    has_placeholder,
)

_STRING_ONLY = ("enum", "pattern", "minLength", "maxLength")
_NUMERIC_ONLY = ("minimum", "maximum")


def _bounded(low: Any, high: Any) -> bool:
    """True when both bounds are numbers and *low* exceeds *high*."""
    numbers = (int, float)
    return isinstance(low, numbers) and isinstance(high, numbers) and low > high


class NamedParameter(Node):
    """Base class for every named parameter kind."""

    properties = {
        "displayName": attribute("display_name"),
        "description": attribute("description"),
        "type": attribute("type"),
        "enum": attribute("enum"),
        "pattern": attribute("pattern"),
        "minLength": attribute("min_length"),
        "maxLength": attribute("max_length"),
        "minimum": attribute("minimum"),
        "maximum": attribute("maximum"),
        "example": attribute("example"),
        "repeat": attribute("repeat"),
        "required": attribute("required"),
        "default": attribute("default"),
    }

    required_by_default = False

    display_name: Optional[str] = None
    description: Optional[str] = None
    type: str = ParameterType.STRING.value
    enum: Optional[list[Any]] = None
    pattern: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    example: Any = None
    repeat: bool = False
    default: Any = None

    def __init__(self, name: str, data: Optional[dict[str, Any]] = None, parent: Optional[Node] = None) -> None:
        self.required = self.required_by_default
        self._given: set[str] = set(data or {})
        super().__init__(name, data, parent)

    def validate(self) -> None:
        check_string("displayName", self.display_name)
        check_string("description", self.description)

        if has_placeholder(self.type):
            return
        if not isinstance(self.type, str) or self.type not in {t.value for t in ParameterType}:
            raise InvalidProperty(
                f"type property of parameter {self.name!r} must be one of "
                + ", ".join(t.value for t in ParameterType)
            )

        if self.type != ParameterType.STRING.value:
            for key in _STRING_ONLY:
                if key in self._given:
                    raise InvalidProperty(f"{key} property only applies to string parameters")
        if self.type not in (ParameterType.NUMBER.value, ParameterType.INTEGER.value):
            for key in _NUMERIC_ONLY:
                if key in self._given:
                    raise InvalidProperty(f"{key} property only applies to numeric parameters")

        if self.enum is not None and not has_placeholder(self.enum):
            if not isinstance(self.enum, list) or not self.enum:
                raise InvalidProperty("enum property must be a non-empty array")
            if len(set(map(str, self.enum))) != len(self.enum):
                raise InvalidProperty("enum property must not contain duplicate values")

        check_string("pattern", self.pattern)
        if self.pattern is not None and not has_placeholder(self.pattern):
            try:
                re.compile(self.pattern)
            except re.error as exc:
                raise InvalidProperty(f"pattern property is not a valid regular expression: {exc}") from exc

        check_non_negative_integer("minLength", self.min_length)
        check_non_negative_integer("maxLength", self.max_length)
        if _bounded(self.min_length, self.max_length):
            raise InvalidProperty("minLength property must not exceed maxLength")

        check_number("minimum", self.minimum)
        check_number("maximum", self.maximum)
        if _bounded(self.minimum, self.maximum):
            raise InvalidProperty("minimum property must not exceed maximum")

        check_boolean("repeat", self.repeat)
        check_boolean("required", self.required)

    def document(self) -> str:
        line = f"* **{self.display_name or self.name}**"
        details = [self.type]
        if self.required:
            details.append("required")
        if self.repeat:
            details.append("repeatable")
        line += f" ({', '.join(details)})"
        if self.description:
            line += f": {self.description}"
        extras = []
        if self.enum:
            extras.append("one of: " + ", ".join(str(v) for v in self.enum))
        if self.pattern:
            extras.append(f"pattern: `{self.pattern}`")
        if self.minimum is not None:
            extras.append(f"minimum: {self.minimum}")
        if self.maximum is not None:
            extras.append(f"maximum: {self.maximum}")
        if self.default is not None:
            extras.append(f"default: {self.default}")
        if self.example is not None:
            extras.append(f"example: `{self.example}`")
        if extras:
            line += " (" + "; ".join(extras) + ")"
        return line


class Header(NamedParameter):
    pass


class QueryParameter(NamedParameter):
    pass


class FormParameter(NamedParameter):
    pass


class UriParameter(NamedParameter):
    required_by_default = True


class BaseUriParameter(NamedParameter):
    required_by_default = True
