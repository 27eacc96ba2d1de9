"""Schemas declared at the root or inline in a body, and references to them."""

from __future__ import annotations

from typing import Any, Optional

from ramlkit.nodes.base import Node, indent_code


class Schema(Node):
    """A named schema document (JSON Schema or XSD), kept as raw text."""

    def __init__(self, name: str, value: Any, parent: Optional[Node] = None) -> None:
        self.value = value
        super().__init__(name, None, parent)

    def document(self) -> str:
        return f"Schema:  \n\n{indent_code(self.value)}"


class SchemaReference(Node):
    """A body's ``schema`` that names an entry of the root ``schemas`` catalog."""

    def document(self) -> str:
        return f"Schema: `{self.name}`"
