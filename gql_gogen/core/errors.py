"""Exceptions raised while loading a schema and generating declarations.

Loading failures (``SchemaLoadError``, ``DecodeError``) are fatal for a run.
``DeclarationError`` and its subclasses only abort the declaration being
built; the definition generator records them and moves on.
"""

from typing import Any


class CodegenError(Exception):
    """Base class for all gql-gogen errors."""


class SchemaLoadError(CodegenError):
    """Raised when a schema file cannot be read or converted."""


class SchemaParseError(SchemaLoadError):
    """Raised when a GraphQL SDL document cannot be turned into a schema document."""


class DecodeError(CodegenError):
    """Raised when a schema document does not match the schema model.

    Attributes:
        errors: Structured error entries (location, message, input) as
            reported by the validation layer.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class DeclarationError(CodegenError):
    """Base class for failures that abort a single declaration."""


class UnknownScalarError(DeclarationError):
    """Raised when a scalar has no handler in the scalar registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No scalar spec is provided for scalar: {name}")


class UnrecognizedFieldSpecError(DeclarationError):
    """Raised when a field spec is none of the known variants."""

    def __init__(self, spec: Any):
        self.spec = spec
        super().__init__(f"Unknown field spec: {type(spec).__name__}")
