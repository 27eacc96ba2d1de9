"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~ramlkit.exceptions.RamlError` subclass.
CI scripts that lint RAML documents can inspect the exit code to tell a
malformed document from a broken include without parsing stderr.

Example::

    $ ramlkit validate api.raml
    $ echo $?
    4   # EXIT_UNRESOLVED_REFERENCE -- an ``is``/``type`` name is not declared
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_INVALID_DOCUMENT = 3
"""The RAML document failed property validation."""

EXIT_UNRESOLVED_REFERENCE = 4
"""A trait, resource type, or schema reference names an undeclared definition."""

EXIT_INCLUDE_ERROR = 5
"""An ``!include`` target could not be read or parsed."""

EXIT_SYNTAX_ERROR = 6
"""The root document is not valid YAML or not a map."""
