"""User documentation entries from the root ``documentation`` property."""

from __future__ import annotations

from typing import Any, Optional

from ramlkit.exceptions import RequiredPropertyMissing
from ramlkit.nodes.base import Node, attribute
from ramlkit.nodes.validation import check_string


class Documentation(Node):
    """One ``{title, content}`` documentation page."""

    properties = {
        "title": attribute("title"),
        "content": attribute("content"),
    }

    title: Optional[str] = None
    content: Optional[str] = None

    def __init__(self, data: Optional[dict[str, Any]], parent: Optional[Node] = None) -> None:
        super().__init__(None, data, parent)
        self.name = self.title

    def validate(self) -> None:
        if self.title is None:
            raise RequiredPropertyMissing("documentation title property is missing")
        if self.content is None:
            raise RequiredPropertyMissing("documentation content property is missing")
        check_string("documentation title", self.title, allow_empty=False)
        check_string("documentation content", self.content)

    def document(self) -> str:
        return f"## {self.title}\n{self.content}\n"
