"""The document root: API metadata, catalogs, and top-level resources."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ramlkit.exceptions import InvalidProperty, RamlSyntaxError, RequiredPropertyMissing
from ramlkit.nodes.base import STRING_MAP, Node, attribute, children
from ramlkit.nodes.documentation import Documentation
from ramlkit.nodes.parameter import BaseUriParameter
from ramlkit.nodes.resource import Resource, build_resource, find_resource
from ramlkit.nodes.resource_type import ResourceType, check_base_uri_parameters
from ramlkit.nodes.schema import Schema
from ramlkit.nodes.trait import Trait
from ramlkit.nodes.validation import (
    check_base_uri,
    check_media_type,
    check_named_maps,
    check_protocols,
)

logger = logging.getLogger(__name__)

# Catalogs are built before anything else so that references can be checked
# no matter where the catalog appears in the document.
_CATALOG_KEYS = ("schemas", "traits", "resourceTypes")


class Root(Node):
    """The root of a RAML document.

    Building a ``Root`` validates the whole document; call :meth:`expand`
    afterwards to apply traits, resource types and schema references.

    Args:
        data: The raw document mapping, with includes already inlined.

    Raises:
        RamlSyntaxError: If *data* is not a map.
        ValidationError: If any node of the document fails validation.
        UnknownReference: If an ``is``/``type`` names an undeclared definition.
    """

    is_root = True

    properties = {
        "title": attribute("title"),
        "version": attribute("version"),
        "baseUri": attribute("base_uri"),
        "protocols": attribute("protocols"),
        "mediaType": attribute("media_type"),
        "schemas": children("_build_schemas"),
        "traits": children("_build_traits"),
        "resourceTypes": children("_build_resource_types"),
        "baseUriParameters": children("_build_base_uri_parameters", STRING_MAP),
        "documentation": children("_build_documentation"),
    }

    title: Optional[str] = None
    version: Any = None
    base_uri: Optional[str] = None
    protocols: Optional[list[str]] = None
    media_type: Optional[str] = None

    def __init__(self, data: Any) -> None:
        if not isinstance(data, dict):
            raise RamlSyntaxError(
                "RAML document must be a map (got "
                f"{type(data).__name__ if data is not None else 'empty document'})"
            )
        self._declared: dict[str, set[str]] = {"traits": set(), "resourceTypes": set()}
        self._expanded = False
        super().__init__(None, data, None)

    def _consume(self, data: dict[Any, Any]) -> None:
        ordered = {key: data[key] for key in _CATALOG_KEYS if key in data}
        ordered.update(data)
        super()._consume(ordered)

    def _unknown_property(self, key: Any, value: Any) -> None:
        if isinstance(key, str) and key.startswith("/"):
            self.children.append(build_resource(key, value, self))
        else:
            super()._unknown_property(key, value)

    # ------------------------------------------------------------------ #
    # Builders
    # ------------------------------------------------------------------ #

    def _build_schemas(self, key: str, value: Any) -> None:
        for name, text in check_named_maps(key, value, str, "schema").items():
            self.children.append(Schema(name, text, self))

    def _build_traits(self, key: str, value: Any) -> None:
        definitions = check_named_maps(key, value, dict, "trait")
        self._declared["traits"] = set(definitions)
        for name, data in definitions.items():
            self.children.append(Trait(name, data, self))

    def _build_resource_types(self, key: str, value: Any) -> None:
        definitions = check_named_maps(key, value, dict, "resource type")
        self._declared["resourceTypes"] = set(definitions)
        for name, data in definitions.items():
            self.children.append(ResourceType(name, data, self))

    def _build_base_uri_parameters(self, key: str, value: dict[str, Any]) -> None:
        check_base_uri_parameters(value)
        for name, data in value.items():
            self.children.append(BaseUriParameter(name, data, self))

    def _build_documentation(self, key: str, value: Any) -> None:
        if not isinstance(value, list):
            raise InvalidProperty("documentation property must be an array")
        if not value:
            raise InvalidProperty(
                "documentation property must include at least one document or not be included"
            )
        for entry in value:
            if not isinstance(entry, dict):
                raise InvalidProperty("documentation property must be an array of maps")
            self.children.append(Documentation(entry, self))

    # ------------------------------------------------------------------ #
    # Validation
    # ------------------------------------------------------------------ #

    def validate(self) -> None:
        if self.title is None:
            raise RequiredPropertyMissing("Missing root title property.")
        if not isinstance(self.title, str):
            raise InvalidProperty("Root title property must be a string")

        if self.version is not None and (
            isinstance(self.version, bool) or not isinstance(self.version, (str, int, float))
        ):
            raise InvalidProperty("version property must be a string")

        check_base_uri(self.base_uri, self.version)
        self.protocols = check_protocols(self.protocols)

        if self.media_type is not None:
            if not isinstance(self.media_type, str):
                raise InvalidProperty("mediaType property must be a string")
            check_media_type("mediaType property", self.media_type)

    # ------------------------------------------------------------------ #
    # Lookup
    # ------------------------------------------------------------------ #

    def declares(self, catalog: str, name: str) -> bool:
        """Whether *name* is declared in the ``traits`` or ``resourceTypes`` catalog."""
        return name in self._declared.get(catalog, ())

    @property
    def schemas(self) -> dict[str, Any]:
        return {s.name: s.value for s in self._children_of(Schema)}

    @property
    def traits(self) -> dict[str, Trait]:
        return self._children_by(Trait)

    @property
    def resource_types(self) -> dict[str, ResourceType]:
        return self._children_by(ResourceType)

    @property
    def documents(self) -> list[Documentation]:
        return self._children_of(Documentation)

    documentation = documents

    @property
    def base_uri_parameters(self) -> list[BaseUriParameter]:
        return self._children_of(BaseUriParameter)

    parameters = base_uri_parameters

    @property
    def resources(self) -> list[Resource]:
        return self._children_of(Resource)

    def resource(self, name: Any) -> Optional[Resource]:
        return find_resource(self.resources, name)

    @property
    def expanded(self) -> bool:
        return self._expanded

    # ------------------------------------------------------------------ #
    # Expansion and rendering
    # ------------------------------------------------------------------ #

    def expand(self) -> Root:
        """Apply resource types, traits and schema references in place.

        Safe to call more than once: later calls are no-ops.
        """
        if self._expanded:
            logger.debug("Document %r already expanded", self.title)
            return self
        from ramlkit.parser.resolver import Resolver

        Resolver(self).expand()
        self._expanded = True
        return self

    def document(self) -> str:
        doc = ""
        if self.title:
            doc += f"# {self.title}\n"
        if self.version is not None:
            doc += f"Version: {self.version}\n"
        if self.base_uri:
            doc += f"Base URI: `{self.base_uri}`\n"

        for child in self.documents:
            doc += child.document()

        if self.base_uri_parameters:
            doc += "**Base URI Parameters:**  \n"
            doc += "  \n".join(child.document() for child in self.base_uri_parameters) + "\n"

        for child in self.resources:
            doc += child.document()
        return doc
