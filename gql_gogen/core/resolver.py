"""Resolution of schema field specs to Go type descriptors.

Two contexts exist. In object (output) position, scalars decide how their
own nullability is represented, unions are never pointer-wrapped, and every
other named type is wrapped in a pointer when nullable. In input position
the field itself is wrapped when nullable and scalars ignore nullability.

For arrays, the nullability of the field applies to the slice and the
array spec's own ``nullable`` flag applies to the elements.
"""

from .errors import UnrecognizedFieldSpecError
from .ir import GoType, NamedType, PointerType, SliceType
from .scalars import ScalarRegistry
from .schema import (
    InputArrayFieldSpec,
    InputFieldSchema,
    InputLiteralFieldSpec,
    InputTypeKind,
    InputTypeSpec,
    ObjectArrayFieldSpec,
    ObjectCallableFieldSpec,
    ObjectFieldSchema,
    ObjectLiteralFieldSpec,
    ObjectTypeKind,
    ObjectTypeSpec,
)


def _optional(go_type: GoType, nullable: bool) -> GoType:
    return PointerType(go_type) if nullable else go_type


class TypeResolver:
    """Turns field specs into Go types using a scalar registry."""

    def __init__(self, scalars: ScalarRegistry):
        self.scalars = scalars

    # -- object position ----------------------------------------------------

    def object_type(self, spec: ObjectTypeSpec, nullable: bool) -> GoType:
        """Resolve a named type in object position.

        Raises:
            UnknownScalarError: If a scalar has no registered handler.
        """
        if spec.kind == ObjectTypeKind.SCALAR:
            return self.scalars.resolve(spec.name).on_object_type(nullable)
        if spec.kind == ObjectTypeKind.UNION:
            return NamedType(spec.name)
        return _optional(NamedType(spec.name), nullable)

    def non_callable_object_field_spec(
        self,
        spec: ObjectLiteralFieldSpec | ObjectArrayFieldSpec,
        nullable: bool,
    ) -> GoType:
        if isinstance(spec, ObjectLiteralFieldSpec):
            return self.object_type(spec.type, nullable)
        if isinstance(spec, ObjectArrayFieldSpec):
            element = self.object_type(spec.type, spec.nullable)
            return _optional(SliceType(element), nullable)
        raise UnrecognizedFieldSpecError(spec)

    def object_field_spec(
        self,
        spec: ObjectLiteralFieldSpec | ObjectArrayFieldSpec | ObjectCallableFieldSpec,
        nullable: bool,
    ) -> GoType:
        """Resolve any object field spec.

        Callables resolve to their return type; their arguments do not take
        part in the type.
        """
        if isinstance(spec, ObjectCallableFieldSpec):
            return self.non_callable_object_field_spec(spec.return_type, nullable)
        return self.non_callable_object_field_spec(spec, nullable)

    def object_field(self, field: ObjectFieldSchema) -> GoType:
        return self.object_field_spec(field.spec, field.nullable)

    # -- input position -----------------------------------------------------

    def input_type(self, spec: InputTypeSpec) -> GoType:
        """Resolve a named type in input position (never wrapped here).

        Raises:
            UnknownScalarError: If a scalar has no registered handler.
        """
        if spec.kind == InputTypeKind.SCALAR:
            return self.scalars.resolve(spec.name).on_input_type()
        return NamedType(spec.name)

    def input_field_spec(self, spec: InputLiteralFieldSpec | InputArrayFieldSpec) -> GoType:
        """Resolve an input field spec without the field's own nullability."""
        if isinstance(spec, InputLiteralFieldSpec):
            return self.input_type(spec.type)
        if isinstance(spec, InputArrayFieldSpec):
            return SliceType(_optional(self.input_type(spec.type), spec.nullable))
        raise UnrecognizedFieldSpecError(spec)

    def input_field(self, field: InputFieldSchema) -> GoType:
        return _optional(self.input_field_spec(field.spec), field.nullable)
