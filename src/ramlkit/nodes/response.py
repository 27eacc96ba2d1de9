"""Responses keyed by HTTP status code."""

from __future__ import annotations

from typing import Any, Optional

from ramlkit.nodes.base import STRING_MAP, Node, attribute, children
from ramlkit.nodes.body import Body
from ramlkit.nodes.parameter import Header
from ramlkit.nodes.validation import check_string


class Response(Node):
    properties = {
        "description": attribute("description"),
        "headers": children("_build_headers", STRING_MAP),
        "body": children("_build_bodies", STRING_MAP),
    }

    description: Optional[str] = None

    @property
    def code(self) -> int:
        return self.name

    @property
    def headers(self) -> dict[str, Header]:
        return self._children_by(Header)

    @property
    def bodies(self) -> dict[str, Body]:
        return self._children_by(Body)

    def _build_headers(self, key: str, value: dict[str, Any]) -> None:
        for name, data in value.items():
            self.children.append(Header(name, data, self))

    def _build_bodies(self, key: str, value: dict[str, Any]) -> None:
        for media_type, data in value.items():
            self.children.append(Body(media_type, data, self))

    def validate(self) -> None:
        check_string("description", self.description)

    def document(self) -> str:
        lines = [f"**{self.code}**"]
        if self.description:
            lines.append(self.description.strip())
        if self.headers:
            lines.append("Headers:")
            lines.extend(h.document() for h in self.headers.values())
        lines.extend(b.document() for b in self.bodies.values())
        return "  \n".join(lines)
