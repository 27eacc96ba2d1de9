"""Resource types, and the properties resources and resource types share."""

from __future__ import annotations

import copy
from typing import Any, Optional, Union

from ramlkit.exceptions import InvalidProperty
from ramlkit.nodes.base import STRING_MAP, Node, attribute, children
from ramlkit.nodes.method import HTTP_METHODS, Method
from ramlkit.nodes.parameter import BaseUriParameter, UriParameter
from ramlkit.nodes.reference import ResourceTypeReference, TraitReference
from ramlkit.nodes.trait import Trait, build_trait_list
from ramlkit.nodes.validation import check_string

RESERVED_BASE_URI_PARAMETERS = ("version",)


def check_base_uri_parameters(value: dict[str, Any]) -> None:
    for name in RESERVED_BASE_URI_PARAMETERS:
        if name in value:
            raise InvalidProperty(
                f'baseUriParameters property can\'t contain reserved "{name}" parameter'
            )


class AbstractResource(Node):
    """Properties shared by :class:`~ramlkit.nodes.resource.Resource` and :class:`ResourceType`."""

    properties = {
        "displayName": attribute("display_name"),
        "description": attribute("description"),
        "uriParameters": children("_build_uri_parameters", STRING_MAP),
        "baseUriParameters": children("_build_base_uri_parameters", STRING_MAP),
        "is": children("_build_traits"),
        "type": children("_build_type"),
    }

    display_name: Optional[str] = None
    description: Optional[str] = None

    @property
    def uri_parameters(self) -> list[UriParameter]:
        return self._children_of(UriParameter)

    @property
    def base_uri_parameters(self) -> list[BaseUriParameter]:
        return self._children_of(BaseUriParameter)

    @property
    def methods(self) -> dict[str, Method]:
        return self._children_by(Method)

    def method(self, name: str) -> Optional[Method]:
        return self.methods.get(str(name))

    @property
    def traits(self) -> list[Union[Trait, TraitReference]]:
        return self._children_of(Trait, TraitReference)

    @property
    def type(self) -> Optional[Union["ResourceType", ResourceTypeReference]]:
        found = self._children_of(ResourceType, ResourceTypeReference)
        return found[0] if found else None

    def _build_uri_parameters(self, key: str, value: dict[str, Any]) -> None:
        for name, data in value.items():
            self.children.append(UriParameter(name, data, self))

    def _build_base_uri_parameters(self, key: str, value: dict[str, Any]) -> None:
        check_base_uri_parameters(value)
        for name, data in value.items():
            self.children.append(BaseUriParameter(name, data, self))

    def _build_traits(self, key: str, value: Any) -> None:
        self.children.extend(build_trait_list(value, self))

    def _build_type(self, key: str, value: Any) -> None:
        self.children.append(build_resource_type(value, self))

    def _build_method(self, key: str, value: Any) -> None:
        if value is not None and not isinstance(value, dict):
            raise InvalidProperty(f"{key} method definition must be a map")
        self.children.append(Method(key.rstrip("?"), value, self, optional=key.endswith("?")))

    def validate(self) -> None:
        check_string("displayName", self.display_name)
        check_string("description", self.description)


class ResourceType(AbstractResource):
    """A resource type definition, from the root catalog or inline in ``type``.

    Method keys may end in ``?`` to mark them optional: such a method is only
    applied to resources that define that method themselves.
    """

    properties = {
        **AbstractResource.properties,
        "usage": attribute("usage"),
        **{verb: children("_build_method") for verb in HTTP_METHODS},
        **{f"{verb}?": children("_build_method") for verb in HTTP_METHODS},
    }

    usage: Optional[str] = None

    def __init__(self, name: Optional[str], data: Optional[dict[str, Any]] = None, parent: Optional[Node] = None) -> None:
        self.data: dict[str, Any] = copy.deepcopy(data or {})
        super().__init__(name, data, parent)

    def validate(self) -> None:
        super().validate()
        check_string("usage", self.usage)


def _names_resource_type(key: Any, parent: Node) -> bool:
    # A declared resource type name wins over a resource property of the same name.
    root = parent.root
    if root is not None and root.declares("resourceTypes", key):
        return True
    return key not in ResourceType.properties


def build_resource_type(value: Any, parent: Node) -> Union[ResourceType, ResourceTypeReference]:
    """Build the node for a ``type`` property.

    The value is a resource type name, a single ``{name: {param: value}}``
    map, or an inline resource type definition.
    """
    if isinstance(value, str):
        return ResourceTypeReference(value, None, parent)
    if isinstance(value, dict) and len(value) == 1 and _names_resource_type(next(iter(value)), parent):
        name, parameters = next(iter(value.items()))
        if parameters is not None and not isinstance(parameters, dict):
            raise InvalidProperty(f"type property parameters of {name!r} must be a map")
        return ResourceTypeReference(name, parameters, parent)
    if isinstance(value, dict):
        return ResourceType(None, value, parent)
    raise InvalidProperty(
        "type property must be a resource type name, a parameterized resource type name "
        "or a resource type definition"
    )
