"""Scalar handlers for Go code generation.

Provides a protocol for defining how GraphQL scalars map to Go types, in
object (output) position and in input position.

Example usage:
    from gql_gogen.core.scalars import GoScalar, default_registry

    # Use built-in handlers
    registry = default_registry()

    # Map a custom scalar to a qualified Go type
    registry = registry.merge({"DateTime": GoScalar("Time", package="time")})
"""

import re
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Protocol, runtime_checkable

from .errors import UnknownScalarError
from .ir import GoType, NamedType, PointerType


@runtime_checkable
class ScalarSpec(Protocol):
    """Protocol for scalar handlers.

    Implement this protocol to control how a scalar is emitted.
    """

    def on_object_type(self, nullable: bool) -> GoType:
        """Type of the scalar in an object field; the handler decides how
        nullability is represented."""
        ...

    def on_input_type(self) -> GoType:
        """Type of the scalar in an input field. Nullability is applied by
        the caller."""
        ...


class GoScalar:
    """Scalar emitted as a plain Go type, pointer-wrapped when nullable.

    Args:
        type_name: Go type name (e.g. "string", "Time")
        package: Import path qualifying the type (e.g. "time")
    """

    def __init__(self, type_name: str, package: str | None = None):
        self.type_name = type_name
        self.package = package

    @property
    def go_type(self) -> NamedType:
        return NamedType(self.type_name, self.package)

    def on_object_type(self, nullable: bool) -> GoType:
        if nullable:
            return PointerType(self.go_type)
        return self.go_type

    def on_input_type(self) -> GoType:
        return self.go_type

    def __repr__(self) -> str:
        qualified = f"{self.package}.{self.type_name}" if self.package else self.type_name
        return f"{type(self).__name__}({qualified!r})"


class StringScalar(GoScalar):
    def __init__(self):
        super().__init__("string")


class BooleanScalar(GoScalar):
    def __init__(self):
        super().__init__("bool")


class IntScalar(GoScalar):
    def __init__(self):
        super().__init__("int32")


class Int64Scalar(GoScalar):
    def __init__(self):
        super().__init__("int64")


class FloatScalar(GoScalar):
    def __init__(self):
        super().__init__("float32")


class VoidScalar:
    """Placeholder for operations without a result.

    Always a string pointer, whatever nullability is requested.
    """

    def on_object_type(self, nullable: bool) -> GoType:
        return PointerType(NamedType("string"))

    def on_input_type(self) -> GoType:
        return PointerType(NamedType("string"))


DEFAULT_SCALARS: Mapping[str, ScalarSpec] = MappingProxyType({
    "String": StringScalar(),
    "Boolean": BooleanScalar(),
    "Int": IntScalar(),
    "Int64": Int64Scalar(),
    "Float": FloatScalar(),
    "Void": VoidScalar(),
})


class ScalarRegistry:
    """Read-only mapping between scalar names and their handlers.

    Registries are values: ``merge`` returns a new registry and later
    entries replace earlier ones for the same scalar name.

    Example:
        registry = default_registry()
        spec = registry.resolve("Int")
        spec.on_object_type(nullable=True)  # PointerType(NamedType("int32"))
    """

    def __init__(self, handlers: Mapping[str, ScalarSpec] | None = None):
        self._handlers: Mapping[str, ScalarSpec] = MappingProxyType(dict(handlers or {}))

    def get(self, scalar_name: str) -> ScalarSpec | None:
        """Get the handler for a scalar, or None if not registered."""
        return self._handlers.get(scalar_name)

    def resolve(self, scalar_name: str) -> ScalarSpec:
        """Get the handler for a scalar.

        Raises:
            UnknownScalarError: If no handler is registered.
        """
        handler = self.get(scalar_name)
        if handler is None:
            raise UnknownScalarError(scalar_name)
        return handler

    def merge(self, *others: "ScalarRegistry | Mapping[str, ScalarSpec]") -> "ScalarRegistry":
        """Return a registry with ``others`` layered over this one."""
        return merge_registries(self, *others)

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, scalar_name: object) -> bool:
        return scalar_name in self._handlers


def merge_registries(*registries: ScalarRegistry | Mapping[str, ScalarSpec]) -> ScalarRegistry:
    """Merge registries left to right; the last one wins on conflicts."""
    handlers: dict[str, ScalarSpec] = {}
    for registry in registries:
        if isinstance(registry, ScalarRegistry):
            handlers.update(registry._handlers)
        else:
            handlers.update(registry)
    return ScalarRegistry(handlers)


def default_registry() -> ScalarRegistry:
    """Registry holding the built-in scalars."""
    return ScalarRegistry(DEFAULT_SCALARS)


_IDENTIFIER = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


def parse_scalar_override(text: str) -> tuple[str, GoScalar]:
    """Parse a ``NAME=GoType`` override.

    The Go type is either a bare identifier (``string``) or an import path
    followed by a dot and the type name (``time.Time``,
    ``encoding/json.RawMessage``).

    Raises:
        ValueError: If the text is not a valid override.
    """
    name, sep, target = text.partition("=")
    name, target = name.strip(), target.strip()
    if not sep or not _IDENTIFIER.match(name) or not target:
        raise ValueError(f"Invalid scalar override {text!r}, expected NAME=GoType")

    package, dot, type_name = target.rpartition(".")
    if not dot:
        package, type_name = None, target
    elif not package or "/" in type_name:
        raise ValueError(f"Invalid Go type {target!r} in scalar override {text!r}")
    if not _IDENTIFIER.match(type_name):
        raise ValueError(f"Invalid Go type {target!r} in scalar override {text!r}")
    return name, GoScalar(type_name, package=package)
