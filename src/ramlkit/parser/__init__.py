"""RAML loading pipeline: read the source, inline includes, build, expand.

* :mod:`~ramlkit.parser.loader` -- fetch a document from a file, URL or
  stdin and build the node tree.
* :mod:`~ramlkit.parser.includes` -- the ``!include`` tag and include
  preprocessing.
* :mod:`~ramlkit.parser.resolver` -- trait, resource type and schema
  expansion.
"""

from ramlkit.parser.loader import load_raml, parse_raml

__all__ = ["load_raml", "parse_raml"]
