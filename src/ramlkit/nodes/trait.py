"""Traits: reusable, parameterizable bundles of method properties."""

from __future__ import annotations

import copy
from typing import Any, Optional, Union

from ramlkit.exceptions import InvalidProperty
from ramlkit.nodes.abstract_method import AbstractMethod
from ramlkit.nodes.base import Node, attribute
from ramlkit.nodes.reference import TraitReference
from ramlkit.nodes.validation import check_string


class Trait(AbstractMethod):
    """A trait definition, either from the root catalog or inline in ``is``.

    The raw mapping is kept in :attr:`data` so the resolver can substitute
    ``<<parameters>>`` into a copy and build a specialised trait from it.
    """

    properties = {
        **AbstractMethod.properties,
        "usage": attribute("usage"),
    }

    usage: Optional[str] = None

    def __init__(self, name: Optional[str], data: Optional[dict[str, Any]] = None, parent: Optional[Node] = None) -> None:
        self.data: dict[str, Any] = copy.deepcopy(data or {})
        super().__init__(name, data, parent)

    def validate(self) -> None:
        super().validate()
        check_string("usage", self.usage)


def _names_trait(key: Any, parent: Node) -> bool:
    # A declared trait name wins over a method property of the same name.
    root = parent.root
    if root is not None and root.declares("traits", key):
        return True
    return key not in Trait.properties


def build_trait_list(value: Any, parent: Node) -> list[Union[Trait, TraitReference]]:
    """Build the nodes for an ``is`` property.

    Each element is a trait name, a single ``{name: {param: value}}`` map,
    or an inline trait definition.
    """
    if not isinstance(value, list):
        raise InvalidProperty("is property must be an array")

    traits: list[Union[Trait, TraitReference]] = []
    for item in value:
        if isinstance(item, str):
            traits.append(TraitReference(item, None, parent))
        elif isinstance(item, dict) and len(item) == 1 and _names_trait(next(iter(item)), parent):
            name, parameters = next(iter(item.items()))
            if parameters is not None and not isinstance(parameters, dict):
                raise InvalidProperty(f"is property parameters of {name!r} must be a map")
            traits.append(TraitReference(name, parameters, parent))
        elif isinstance(item, dict):
            traits.append(Trait(None, item, parent))
        else:
            raise InvalidProperty(
                "is property must be an array of trait names, parameterized trait names or trait definitions"
            )
    return traits
