"""Node ownership, property dispatch, and rendering helpers shared by every node kind.

Every concrete node class declares a ``properties`` table mapping raw RAML
keys to :class:`Property` entries.  :meth:`Node.__init__` walks the raw
mapping once, runs the generic structural check (:class:`MapShape`) for
map-valued properties, and then either stores the value on an attribute or
hands it to a named builder method that creates child nodes.  Semantic checks
run afterwards in :meth:`Node.validate`, so the structural shape of every key
is always checked before any cross-property rule.

Parents are held through :func:`weakref.ref`: a node owns its children, never
its parent.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import Any, ClassVar, Iterator, Optional, TypeVar

from ramlkit.exceptions import UnknownProperty
from ramlkit.nodes.validation import check_map

N = TypeVar("N", bound="Node")


@dataclass(frozen=True)
class MapShape:
    """Expected shape of a map-valued property (key type, value type)."""

    key_type: type = str
    value_type: type = dict

    def check(self, key: str, value: Any) -> None:
        check_map(key, value, self.key_type, self.value_type)


STRING_MAP = MapShape(str, dict)
"""A map of string names to definition maps (headers, parameters, bodies)."""

STATUS_MAP = MapShape(int, dict)
"""A map of integer status codes to definition maps (responses)."""


@dataclass(frozen=True)
class Property:
    """How one raw mapping key is consumed by a node.

    Exactly one of ``attr`` (store the raw value on that attribute) or
    ``build`` (name of a method called as ``method(key, value)``) is set.
    """

    attr: Optional[str] = None
    build: Optional[str] = None
    shape: Optional[MapShape] = None


def attribute(attr: str) -> Property:
    return Property(attr=attr)


def children(build: str, shape: Optional[MapShape] = None) -> Property:
    return Property(build=build, shape=shape)


class Node:
    """Base class of every RAML tree node.

    Args:
        name: The node's key in its parent (path segment, verb, media type,
            status code, parameter name...).  ``None`` for nodes that are
            not keyed, such as the root or inline definitions.
        data: The raw mapping to consume.  ``None`` is treated as an empty
            map, since YAML yields ``None`` for keys with no value.
        parent: The owning node, stored as a weak reference.
    """

    properties: ClassVar[dict[str, Property]] = {}
    is_root: ClassVar[bool] = False

    def __init__(
        self,
        name: Any = None,
        data: Optional[dict[Any, Any]] = None,
        parent: Optional[Node] = None,
    ) -> None:
        self.name = name
        self.children: list[Node] = []
        self._parent = weakref.ref(parent) if parent is not None else None
        self._consume(data or {})
        self.validate()

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    def _consume(self, data: dict[Any, Any]) -> None:
        for key, value in data.items():
            prop = self.properties.get(key) if isinstance(key, str) else None
            if prop is None:
                self._unknown_property(key, value)
                continue
            if prop.shape is not None:
                prop.shape.check(key, value)
            if prop.build is not None:
                getattr(self, prop.build)(key, value)
            else:
                setattr(self, prop.attr, value)

    def _unknown_property(self, key: Any, value: Any) -> None:
        raise UnknownProperty(f"{key} is an unknown property.")

    def validate(self) -> None:
        """Check cross-property rules once every key has been consumed."""

    # ------------------------------------------------------------------ #
    # Ownership
    # ------------------------------------------------------------------ #

    @property
    def parent(self) -> Optional[Node]:
        return self._parent() if self._parent is not None else None

    @property
    def parents(self) -> list[Node]:
        """Ancestors of this node, nearest first."""
        result: list[Node] = []
        node = self.parent
        while node is not None:
            result.append(node)
            node = node.parent
        return result

    @property
    def root(self) -> Optional[Node]:
        """The :class:`~ramlkit.nodes.root.Root` this node belongs to, if any."""
        if self.is_root:
            return self
        for ancestor in self.parents:
            if ancestor.is_root:
                return ancestor
        return None

    def adopt(self, child: Node, index: Optional[int] = None) -> None:
        """Make *child* one of this node's children, re-pointing its parent link."""
        child._parent = weakref.ref(self)
        if index is None:
            self.children.append(child)
        else:
            self.children.insert(index, child)

    def walk(self) -> Iterator[Node]:
        """Yield every descendant, depth-first pre-order."""
        for child in self.children:
            yield child
            yield from child.walk()

    def _children_of(self, *kinds: type[N]) -> list[N]:
        return [child for child in self.children if isinstance(child, kinds)]

    def _children_by(self, kind: type[N]) -> dict[Any, N]:
        return {child.name: child for child in self.children if isinstance(child, kind)}

    # ------------------------------------------------------------------ #
    # Documentation
    # ------------------------------------------------------------------ #

    def document(self) -> str:
        """Render this node as a Markdown fragment."""
        return ""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


def indent_code(text: Any) -> str:
    """Indent *text* by four spaces so Markdown renders it as a code block."""
    return "\n".join(f"    {line}" for line in str(text).splitlines())
