"""Typed RAML node tree -- one class per node kind, each with its own property table.

Building a :class:`Root` from a raw document mapping validates and
constructs the whole tree:

* :mod:`~ramlkit.nodes.base` -- ownership, parent links, property dispatch.
* :mod:`~ramlkit.nodes.validation` -- reusable property checks.
* :mod:`~ramlkit.nodes.root` -- metadata and the schema, trait and
  resource-type catalogs.
* :mod:`~ramlkit.nodes.resource` / :mod:`~ramlkit.nodes.method` -- the
  resource hierarchy and its HTTP methods.
* :mod:`~ramlkit.nodes.trait` / :mod:`~ramlkit.nodes.resource_type` /
  :mod:`~ramlkit.nodes.reference` -- definitions and the ``is``/``type``
  references that point at them.
"""

from ramlkit.nodes.abstract_method import AbstractMethod
from ramlkit.nodes.base import Node
from ramlkit.nodes.body import Body
from ramlkit.nodes.documentation import Documentation
from ramlkit.nodes.method import Method
from ramlkit.nodes.parameter import (
    BaseUriParameter,
    FormParameter,
    Header,
    NamedParameter,
    QueryParameter,
    UriParameter,
)
from ramlkit.nodes.reference import Reference, ResourceTypeReference, TraitReference
from ramlkit.nodes.resource import Resource
from ramlkit.nodes.resource_type import ResourceType
from ramlkit.nodes.response import Response
from ramlkit.nodes.root import Root
from ramlkit.nodes.schema import Schema, SchemaReference
from ramlkit.nodes.trait import Trait

__all__ = [
    "AbstractMethod",
    "BaseUriParameter",
    "Body",
    "Documentation",
    "FormParameter",
    "Header",
    "Method",
    "NamedParameter",
    "Node",
    "QueryParameter",
    "Reference",
    "Resource",
    "ResourceType",
    "ResourceTypeReference",
    "Response",
    "Root",
    "Schema",
    "SchemaReference",
    "Trait",
    "TraitReference",
    "UriParameter",
]
