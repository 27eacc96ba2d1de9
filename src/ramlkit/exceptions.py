"""Exception hierarchy for ramlkit.

All exceptions inherit from :class:`RamlError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`ramlkit.exit_codes`.
Every error is fatal to the parse that raised it: no partial tree is ever
returned. Messages always name the offending property so the CLI can print
them to the user verbatim.

Subclass hierarchy::

    RamlError                    (exit 1)
    +-- ConfigError              (exit 1)
    +-- RamlSyntaxError          (exit 6)
    +-- IncludeError             (exit 5)
    +-- UnknownReference         (exit 4)
    +-- ValidationError          (exit 3)
        +-- UnknownProperty
        +-- InvalidProperty
        +-- RequiredPropertyMissing
        +-- InvalidMethod
        +-- InvalidMediaType
"""

from ramlkit.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INCLUDE_ERROR,
    EXIT_INVALID_DOCUMENT,
    EXIT_SYNTAX_ERROR,
    EXIT_UNRESOLVED_REFERENCE,
)


class RamlError(Exception):
    """Base exception for all ramlkit errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`ramlkit.exit_codes`. The CLI entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(RamlError):
    """Raised for configuration problems (invalid project file, bad env values)."""

    exit_code = EXIT_GENERIC_FAILURE


class RamlSyntaxError(RamlError):
    """Raised when the root document cannot be read, is not YAML, or is not a map."""

    exit_code = EXIT_SYNTAX_ERROR


class IncludeError(RamlError):
    """Raised when an ``!include`` path could not be read or parsed."""

    exit_code = EXIT_INCLUDE_ERROR


class UnknownReference(RamlError):
    """Raised when an ``is``/``type`` name has no matching catalog entry."""

    exit_code = EXIT_UNRESOLVED_REFERENCE


class ValidationError(RamlError):
    """Base class for errors raised while validating a node's properties."""

    exit_code = EXIT_INVALID_DOCUMENT


class UnknownProperty(ValidationError):
    """Raised for a mapping key not recognised by the node kind."""


class InvalidProperty(ValidationError):
    """Raised when a recognised key holds a value of the wrong shape or format."""


class RequiredPropertyMissing(ValidationError):
    """Raised when a mandatory property is absent."""


class InvalidMethod(ValidationError):
    """Raised for a resource-level key that is not a supported HTTP method."""


class InvalidMediaType(ValidationError):
    """Raised when a body's media-type key does not match the media-type grammar."""
