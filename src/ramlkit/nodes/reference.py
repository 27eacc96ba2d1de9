"""References from ``is`` and ``type`` to the root trait and resource-type catalogs."""

from __future__ import annotations

from typing import Any, ClassVar, Optional

from ramlkit.exceptions import InvalidProperty, UnknownReference
from ramlkit.nodes.base import Node
from ramlkit.nodes.validation import has_placeholder


class Reference(Node):
    """A by-name use of a catalog definition, with optional bound parameters.

    The referenced name must already be declared in the root catalog when
    the reference is built, unless the name is itself a ``<<parameter>>``
    placeholder, which can only be checked once it has been substituted.
    """

    catalog: ClassVar[str] = ""
    property_name: ClassVar[str] = ""
    label: ClassVar[str] = ""

    def __init__(
        self,
        name: str,
        parameters: Optional[dict[str, Any]] = None,
        parent: Optional[Node] = None,
    ) -> None:
        self.parameters = dict(parameters or {})
        super().__init__(name, None, parent)

    def validate(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise InvalidProperty(f"{self.property_name} property must name a {self.label}")
        if not all(isinstance(k, str) for k in self.parameters):
            raise InvalidProperty(
                f"{self.property_name} property parameters of {self.name!r} must have string names"
            )
        if has_placeholder(self.name):
            return
        root = self.root
        if root is None or not root.declares(self.catalog, self.name):
            raise UnknownReference(f"{self.label} {self.name!r} is not declared in {self.catalog}")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} {self.parameters!r}>"


class TraitReference(Reference):
    catalog = "traits"
    property_name = "is"
    label = "trait"


class ResourceTypeReference(Reference):
    catalog = "resourceTypes"
    property_name = "type"
    label = "resource type"
