"""Intermediate Representation (IR) for generated Go declarations.

The definition generator produces these records and the Go backend renders
them. Type descriptors are a small tree of named, pointer and slice types;
declarations describe one top-level Go construct each.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Union


@dataclass(frozen=True)
class NamedType:
    """A Go type referenced by name, optionally qualified by an import path."""
    name: str
    package: str | None = None


@dataclass(frozen=True)
class PointerType:
    """Pointer to ``elem``; marks an optional value."""
    elem: "GoType"


@dataclass(frozen=True)
class SliceType:
    """Slice of ``elem``."""
    elem: "GoType"


GoType = Union[NamedType, PointerType, SliceType]


def packages_of(go_type: GoType) -> set[str]:
    """Return the import paths a type expression refers to."""
    while not isinstance(go_type, NamedType):
        go_type = go_type.elem
    return {go_type.package} if go_type.package else set()


@dataclass
class IRConstant:
    """A typed constant of an enum, e.g. ``ColorRED Color = "RED"``."""
    name: str
    value: str


@dataclass
class IREnum:
    """A string-backed enum type with its constants, its list of known
    values and a validating JSON decoder."""
    kind: ClassVar[str] = "enum"

    name: str
    constants: list[IRConstant] = field(default_factory=list)

    @property
    def values_var(self) -> str:
        """Name of the variable holding every known value, in order."""
        return "allValuesOf" + self.name


@dataclass
class IRUnion:
    """A marker interface with a single nullary method."""
    kind: ClassVar[str] = "union"

    name: str
    marker: str


@dataclass
class IRStructField:
    name: str
    type: GoType
    json_key: str
    omit_empty: bool = False

    @property
    def tag(self) -> str:
        key = self.json_key + (",omitempty" if self.omit_empty else "")
        return f'json:"{key}"'


@dataclass
class IRStruct:
    """A data type with one field per schema field."""
    kind: ClassVar[str] = "struct"

    name: str
    fields: list[IRStructField] = field(default_factory=list)


@dataclass
class IRMarkerMethod:
    """Empty implementation of a union marker method on a struct."""
    kind: ClassVar[str] = "marker"

    receiver: str
    name: str


@dataclass
class IRMethod:
    """A parameterless method signature."""
    name: str
    returns: GoType


@dataclass
class IRInterface:
    """An interface listing method signatures (root operation types)."""
    kind: ClassVar[str] = "interface"

    name: str
    methods: list[IRMethod] = field(default_factory=list)


IRDeclaration = Union[IREnum, IRUnion, IRStruct, IRMarkerMethod, IRInterface]
