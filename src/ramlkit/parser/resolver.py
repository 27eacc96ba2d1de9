"""Expand trait, resource-type, and schema references in a built RAML tree.

RAML documents avoid repetition by declaring reusable *traits* (bundles of
method properties, applied with ``is``) and *resource types* (templates of
resource and method properties, applied with ``type``), both of which may take
``<<parameters>>``.  This module rewrites a validated
:class:`~ramlkit.nodes.root.Root` so that every such reference is replaced by
the definition it names.

Definitions are never modified.  For each use, the definition's raw mapping is
copied, placeholders are substituted textually (:func:`substitute`), and a
fresh node is built from the result before its children are merged into the
referencing node.  Besides caller-supplied parameters, ``resourcePath`` and
``resourcePathName`` are bound for resource types and traits, and
``methodName`` for traits.

Merge order for one method, lowest priority first:

1. the resource type's template for that method,
2. traits applied by the resource type's ``is``,
3. traits applied by the resource's ``is``,
4. traits applied by the method's ``is``, in array order,
5. the method's own properties.

Keyed children (headers, query parameters, bodies, responses) are unioned,
a higher-priority entry replacing a lower one with the same key; scalar
properties take the highest-priority defined value.

The single public entry point is :class:`Resolver`, normally reached through
:meth:`Root.expand() <ramlkit.nodes.root.Root.expand>`.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Optional, Union

from ramlkit.exceptions import InvalidProperty, UnknownReference
from ramlkit.nodes import (
    AbstractMethod,
    BaseUriParameter,
    Method,
    Node,
    Resource,
    ResourceType,
    ResourceTypeReference,
    Root,
    Schema,
    SchemaReference,
    Trait,
    TraitReference,
    UriParameter,
)
from ramlkit.nodes.resource_type import AbstractResource

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"<<\s*([A-Za-z_][\w-]*)\s*>>")

# Documentation about a definition, not part of what it contributes.
_UNSUBSTITUTED_KEYS = frozenset({"usage"})

_MERGED_ATTRIBUTES = ("description", "protocols")

_OWN = math.inf


def substitute(value: Any, parameters: dict[str, Any], owner: str) -> Any:
    """Return a copy of *value* with every ``<<name>>`` placeholder replaced.

    Walks maps (keys and values) and lists recursively.  A string that is
    exactly one placeholder takes the bound value as-is, so ``<<max>>`` bound
    to ``10`` stays an integer; placeholders embedded in longer text are
    rendered with :func:`str`.

    Args:
        value: Raw definition data.
        parameters: Parameter name to value bindings.
        owner: Description of the definition, used in error messages.

    Raises:
        InvalidProperty: If a placeholder has no binding.
    """
    if isinstance(value, str):
        return _substitute_text(value, parameters, owner)
    if isinstance(value, dict):
        return {
            substitute(key, parameters, owner): (
                item if key in _UNSUBSTITUTED_KEYS else substitute(item, parameters, owner)
            )
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [substitute(item, parameters, owner) for item in value]
    return value


def _substitute_text(text: str, parameters: dict[str, Any], owner: str) -> Any:
    whole = _PLACEHOLDER_RE.fullmatch(text)
    if whole:
        return _lookup(whole.group(1), parameters, owner)
    return _PLACEHOLDER_RE.sub(
        lambda match: str(_lookup(match.group(1), parameters, owner)), text
    )


def _lookup(name: str, parameters: dict[str, Any], owner: str) -> Any:
    if name not in parameters:
        raise InvalidProperty(f"{owner} uses parameter <<{name}>> but no value was given for it")
    return parameters[name]


def _nearest_resource(node: Node) -> Optional[Resource]:
    for ancestor in node.parents:
        if isinstance(ancestor, Resource):
            return ancestor
    return None


def resource_parameters(resource: Optional[Resource]) -> dict[str, Any]:
    """Implicit parameters bound for definitions applied to *resource*."""
    if resource is None:
        return {}
    return {
        "resourcePath": resource.path,
        "resourcePathName": resource.name.rsplit("/", 1)[-1],
    }


class Resolver:
    """Expand every reference under a :class:`~ramlkit.nodes.root.Root`.

    Args:
        root: A fully built root.  Its catalogs are read, never written.
    """

    def __init__(self, root: Root) -> None:
        self.root = root
        self._traits = root.traits
        self._resource_types = root.resource_types
        self._schemas = root.schemas

    def expand(self) -> None:
        for resource in self.root.resources:
            self._expand_resource(resource)
        # Schemas last: specialised definitions may only name a schema once
        # their placeholders are substituted.
        for resource in self.root.resources:
            self._expand_schemas(resource)
        logger.info("Expanded %d top-level resources of %r", len(self.root.resources), self.root.title)

    # ------------------------------------------------------------------ #
    # Resources
    # ------------------------------------------------------------------ #

    def _expand_resource(self, resource: Resource) -> None:
        templates: dict[str, Method] = {}
        inherited_traits: list[Union[Trait, TraitReference]] = []

        type_node = resource.type
        if type_node is not None:
            resource_type = self._resolve_resource_type(type_node, resource, frozenset())
            resource.children.remove(type_node)
            self._inherit_properties(resource, resource_type)
            inherited_traits = resource_type.traits
            for verb, template in resource_type.methods.items():
                self._merge_method(template, [])
                if resource.method(verb) is None:
                    if template.optional:
                        continue
                    resource.children.append(Method(verb, None, resource))
                templates[verb] = template

        own_traits = resource.traits
        for trait in own_traits:
            resource.children.remove(trait)
        resource_traits = inherited_traits + own_traits

        for verb, method in resource.methods.items():
            inherited: list[AbstractMethod] = [templates[verb]] if verb in templates else []
            inherited.extend(self._resolve_trait(trait, method) for trait in resource_traits)
            self._merge_method(method, inherited)

        for child in resource.resources:
            self._expand_resource(child)

    def _resolve_resource_type(
        self,
        node: Union[ResourceType, ResourceTypeReference],
        resource: Resource,
        seen: frozenset[str],
    ) -> ResourceType:
        """Build the specialised, fully inherited resource type for *resource*."""
        if isinstance(node, ResourceTypeReference):
            definition = self._resource_types.get(node.name)
            if definition is None:
                raise UnknownReference(f"resource type {node.name!r} is not declared in resourceTypes")
            if node.name in seen:
                raise InvalidProperty(f"type property of resource type {node.name!r} inherits from itself")
            seen = seen | {node.name}
            parameters = node.parameters
        else:
            definition, parameters = node, {}

        label = f"resource type {definition.name!r}" if definition.name else "inline resource type"
        logger.debug("Applying %s to %s", label, resource.path)
        data = substitute(definition.data, {**parameters, **resource_parameters(resource)}, label)
        specialised = ResourceType(definition.name, data, resource)

        base_node = specialised.type
        if base_node is not None:
            base = self._resolve_resource_type(base_node, resource, seen)
            specialised.children.remove(base_node)
            self._inherit_properties(specialised, base)
            for index, trait in enumerate(base.traits):
                specialised.adopt(trait, index)
            for verb, template in base.methods.items():
                self._merge_method(template, [])
                own = specialised.method(verb)
                if own is None:
                    specialised.adopt(template)
                else:
                    self._merge_method(own, [template])
        return specialised

    def _inherit_properties(self, target: AbstractResource, source: ResourceType) -> None:
        """Copy description and URI parameters *target* does not define itself."""
        if target.description is None:
            target.description = source.description
        for kind in (UriParameter, BaseUriParameter):
            defined = {param.name for param in target._children_of(kind)}
            for param in source._children_of(kind):
                if param.name not in defined:
                    target.adopt(param)

    # ------------------------------------------------------------------ #
    # Methods and traits
    # ------------------------------------------------------------------ #

    def _resolve_trait(self, node: Union[Trait, TraitReference], method: Method) -> Trait:
        """Build the specialised trait *node* stands for, as applied to *method*."""
        if isinstance(node, TraitReference):
            definition = self._traits.get(node.name)
            if definition is None:
                raise UnknownReference(f"trait {node.name!r} is not declared in traits")
            parameters = node.parameters
        else:
            definition, parameters = node, {}

        label = f"trait {definition.name!r}" if definition.name else "inline trait"
        implicit = {"methodName": method.name, **resource_parameters(_nearest_resource(method))}
        logger.debug("Applying %s to method %s", label, method.name)
        data = substitute(definition.data, {**parameters, **implicit}, label)
        return Trait(definition.name, data, method)

    def _merge_method(self, method: Method, inherited: list[AbstractMethod]) -> None:
        """Merge *inherited* layers and the method's own traits into *method*.

        The method's trait references are resolved and spliced in where they
        stood; afterwards every keyed child appears once, taken from the
        highest-priority layer defining it.
        """
        entries: list[tuple[float, Node]] = []
        layers: list[AbstractMethod] = list(inherited)
        for rank, layer in enumerate(layers):
            entries.extend((rank, child) for child in layer.mergeable_children())

        for child in method.children:
            if isinstance(child, (Trait, TraitReference)):
                trait = self._resolve_trait(child, method)
                layers.append(trait)
                entries.extend((len(layers) - 1, c) for c in trait.mergeable_children())
            else:
                entries.append((_OWN, child))

        winners: dict[tuple[type, Any], int] = {}
        for index, (rank, child) in enumerate(entries):
            key = (type(child), child.name)
            if key not in winners or rank >= entries[winners[key]][0]:
                winners[key] = index

        method.children = []
        for index, (_, child) in enumerate(entries):
            if winners[(type(child), child.name)] == index:
                method.adopt(child)

        for attr in _MERGED_ATTRIBUTES:
            if getattr(method, attr) is not None:
                continue
            for layer in reversed(layers):
                value = getattr(layer, attr)
                if value is not None:
                    setattr(method, attr, value)
                    break

    # ------------------------------------------------------------------ #
    # Schemas
    # ------------------------------------------------------------------ #

    def _expand_schemas(self, node: Node) -> None:
        for index, child in enumerate(node.children):
            if isinstance(child, SchemaReference):
                if child.name not in self._schemas:
                    raise UnknownReference(f"schema {child.name!r} is not declared in schemas")
                node.children[index] = Schema(child.name, self._schemas[child.name], node)
            else:
                self._expand_schemas(child)
