"""HTTP methods of a resource (or of a resource type's method templates)."""

from __future__ import annotations

from typing import Any, Optional, Union

from ramlkit.exceptions import InvalidMethod
from ramlkit.models import HTTPMethod
from ramlkit.nodes.abstract_method import AbstractMethod
from ramlkit.nodes.base import Node, children
from ramlkit.nodes.reference import TraitReference
from ramlkit.nodes.trait import Trait, build_trait_list

HTTP_METHODS = frozenset(m.value for m in HTTPMethod)


class Method(AbstractMethod):
    """One HTTP method.

    Args:
        name: The HTTP verb; anything outside :data:`HTTP_METHODS` raises
            :class:`~ramlkit.exceptions.InvalidMethod`.
        data: The raw method definition.
        parent: The owning resource or resource type.
        optional: ``True`` for ``get?``-style resource-type methods that only
            apply when the resource defines the method itself.
    """

    properties = {
        **AbstractMethod.properties,
        "is": children("_build_traits"),
    }

    def __init__(
        self,
        name: str,
        data: Optional[dict[str, Any]] = None,
        parent: Optional[Node] = None,
        optional: bool = False,
    ) -> None:
        if name not in HTTP_METHODS:
            raise InvalidMethod(f"{name} is an unsupported HTTP method")
        self.optional = optional
        super().__init__(name, data, parent)

    @property
    def traits(self) -> list[Union[Trait, TraitReference]]:
        return self._children_of(Trait, TraitReference)

    def _build_traits(self, key: str, value: Any) -> None:
        self.children.extend(build_trait_list(value, self))
