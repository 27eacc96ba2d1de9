"""Resources: the ``/path`` entries of a RAML document."""

from __future__ import annotations

from typing import Any, Optional

from ramlkit.exceptions import InvalidMethod, InvalidProperty
from ramlkit.nodes.base import Node, children
from ramlkit.nodes.method import HTTP_METHODS
from ramlkit.nodes.resource_type import AbstractResource


def find_resource(resources: list["Resource"], name: Any) -> Optional["Resource"]:
    """Find a resource by relative URI, with or without its leading slash."""
    name = str(name)
    for resource in resources:
        if resource.name == name or resource.name == f"/{name}":
            return resource
    return None


def build_resource(key: str, value: Any, parent: Node) -> "Resource":
    """Build the resource for a ``/path`` key of a resource or the root."""
    if value is not None and not isinstance(value, dict):
        raise InvalidProperty(f"{key} resource definition must be a map")
    return Resource(key, value, parent)


class Resource(AbstractResource):
    """A resource keyed by its relative URI (``/users``, ``/{userId}``).

    Besides its properties, a resource holds nested resources (keys starting
    with ``/``) and methods; any other key is reported as an invalid method.
    """

    properties = {
        **AbstractResource.properties,
        **{verb: children("_build_method") for verb in HTTP_METHODS},
    }

    def _unknown_property(self, key: Any, value: Any) -> None:
        if isinstance(key, str) and key.startswith("/"):
            self.children.append(build_resource(key, value, self))
        else:
            raise InvalidMethod(f"{key} is an unsupported HTTP method")

    @property
    def resources(self) -> list[Resource]:
        return self._children_of(Resource)

    def resource(self, name: Any) -> Optional[Resource]:
        return find_resource(self.resources, name)

    @property
    def path(self) -> str:
        """The full relative URI from the root, e.g. ``/users/{userId}/keys``."""
        segments = [self.name] + [p.name for p in self.parents if isinstance(p, Resource)]
        return "".join(reversed(segments))

    def document(self) -> str:
        lines = [f"### {self.display_name or self.path}"]
        if self.display_name:
            lines.append(f"`{self.path}`")
        if self.description:
            lines.append(self.description.strip())
        if self.uri_parameters:
            lines.append("**URI Parameters:**")
            lines.extend(p.document() for p in self.uri_parameters)
        if self.base_uri_parameters:
            lines.append("**Base URI Parameters:**")
            lines.extend(p.document() for p in self.base_uri_parameters)

        doc = "  \n".join(lines) + "\n"
        for method in self.methods.values():
            doc += method.document() + "\n"
        for resource in self.resources:
            doc += resource.document()
        return doc
