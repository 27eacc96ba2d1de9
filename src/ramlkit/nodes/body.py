"""Request and response bodies, keyed by media type."""

from __future__ import annotations

from typing import Any, Optional, Union

from ramlkit.exceptions import InvalidProperty, RequiredPropertyMissing
from ramlkit.nodes.base import STRING_MAP, Node, attribute, children, indent_code
from ramlkit.nodes.parameter import FormParameter
from ramlkit.nodes.schema import Schema, SchemaReference
from ramlkit.nodes.validation import check_body_media_type, check_string

WEB_FORM_MEDIA_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class Body(Node):
    """A body definition for one media type.

    Web-form bodies describe their fields with ``formParameters``; every
    other body may carry a ``schema``, either inline or by naming an entry
    in the root ``schemas`` catalog.
    """

    properties = {
        "formParameters": children("_build_form_parameters", STRING_MAP),
        "schema": children("_build_schema"),
        "example": attribute("example"),
    }

    example: Any = None

    @property
    def media_type(self) -> str:
        return self.name

    @property
    def form_parameters(self) -> dict[str, FormParameter]:
        return self._children_by(FormParameter)

    @property
    def schema(self) -> Optional[Union[Schema, SchemaReference]]:
        found = self._children_of(Schema, SchemaReference)
        return found[0] if found else None

    def is_web_form(self) -> bool:
        return self.media_type in WEB_FORM_MEDIA_TYPES

    def _build_form_parameters(self, key: str, value: dict[str, Any]) -> None:
        for name, data in value.items():
            self.children.append(FormParameter(name, data, self))

    def _build_schema(self, key: str, value: Any) -> None:
        check_string("schema", value, allow_empty=False)
        if value is None:
            raise InvalidProperty("schema property must be a non-empty string")
        root = self.root
        if root is not None and value in root.schemas:
            self.children.append(SchemaReference(value, None, self))
        else:
            self.children.append(Schema(None, value, self))

    def validate(self) -> None:
        check_body_media_type(self.media_type)
        if self.is_web_form():
            if self.schema is not None:
                raise InvalidProperty("schema property can't be defined for web forms.")
            if not self.form_parameters:
                raise RequiredPropertyMissing(
                    "formParameters property must be specified for web forms."
                )

    def document(self) -> str:
        lines = [f"**{self.media_type}**:"]
        if self.form_parameters:
            lines.append("Form Parameters:")
            lines.extend(p.document() for p in self.form_parameters.values())
        if self.schema is not None:
            lines.append(self.schema.document())
        if self.example is not None:
            lines.append(f"Example:  \n\n{indent_code(self.example)}")
        return "  \n".join(lines)
