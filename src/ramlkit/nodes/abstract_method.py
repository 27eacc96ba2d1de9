"""Shared shape of methods and traits: headers, query parameters, bodies, responses."""

from __future__ import annotations

from typing import Any, Optional

from ramlkit.nodes.base import STATUS_MAP, STRING_MAP, Node, attribute, children
from ramlkit.nodes.body import Body
from ramlkit.nodes.parameter import Header, QueryParameter
from ramlkit.nodes.response import Response
from ramlkit.nodes.validation import check_protocols, check_string

MERGEABLE_KINDS = (Header, QueryParameter, Body, Response)
"""Child kinds that traits and resource types contribute to a method."""


class AbstractMethod(Node):
    """Base class of :class:`~ramlkit.nodes.method.Method` and :class:`~ramlkit.nodes.trait.Trait`."""

    properties = {
        "displayName": attribute("display_name"),
        "description": attribute("description"),
        "protocols": attribute("protocols"),
        "headers": children("_build_headers", STRING_MAP),
        "queryParameters": children("_build_query_parameters", STRING_MAP),
        "body": children("_build_bodies", STRING_MAP),
        "responses": children("_build_responses", STATUS_MAP),
    }

    display_name: Optional[str] = None
    description: Optional[str] = None
    protocols: Optional[list[str]] = None

    @property
    def headers(self) -> dict[str, Header]:
        return self._children_by(Header)

    @property
    def query_parameters(self) -> dict[str, QueryParameter]:
        return self._children_by(QueryParameter)

    @property
    def bodies(self) -> dict[str, Body]:
        return self._children_by(Body)

    @property
    def responses(self) -> dict[int, Response]:
        return self._children_by(Response)

    def mergeable_children(self) -> list[Node]:
        return self._children_of(*MERGEABLE_KINDS)

    def _build_headers(self, key: str, value: dict[str, Any]) -> None:
        for name, data in value.items():
            self.children.append(Header(name, data, self))

    def _build_query_parameters(self, key: str, value: dict[str, Any]) -> None:
        for name, data in value.items():
            self.children.append(QueryParameter(name, data, self))

    def _build_bodies(self, key: str, value: dict[str, Any]) -> None:
        for media_type, data in value.items():
            self.children.append(Body(media_type, data, self))

    def _build_responses(self, key: str, value: dict[int, Any]) -> None:
        for code, data in value.items():
            self.children.append(Response(code, data, self))

    def validate(self) -> None:
        check_string("description", self.description)
        check_string("displayName", self.display_name)
        self.protocols = check_protocols(self.protocols)

    def document(self) -> str:
        lines = [f"#### **{self.display_name or str(self.name).upper()}**"]
        if self.description:
            lines.append(self.description.strip())
        if self.protocols:
            lines.append("Supported HTTP protocols: %s" % ", ".join(self.protocols))

        sections = (
            ("Headers", self.headers),
            ("Query Parameters", self.query_parameters),
            ("Body", self.bodies),
            ("Responses", self.responses),
        )
        for title, entries in sections:
            if entries:
                lines.append(f"**{title}:**")
                lines.extend(entry.document() for entry in entries.values())
        return "  \n".join(lines)
