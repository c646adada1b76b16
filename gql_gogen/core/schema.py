"""Typed model of a server schema document.

The document is the JSON produced by the gql schema serializer: nested
objects where every tagged union carries a ``_type`` discriminator. Decoding
is done by pydantic discriminated unions, so an unknown or missing tag, or a
payload that does not fit the selected variant, fails the whole decode.

Example document::

    {
        "server": {
            "enums": {"Color": {"name": "Color", "values": ["RED", "GREEN"]}},
            "objects": {
                "User": {
                    "name": "User",
                    "implements": {},
                    "fields": {
                        "id": {
                            "nullable": false,
                            "spec": {
                                "_type": "literal",
                                "type": {"_type": "Scalar", "name": "String"}
                            }
                        }
                    }
                }
            }
        }
    }
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError, field_validator

from .errors import DecodeError


class _SchemaNode(BaseModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# Input side
# =============================================================================


class InputTypeKind(str, Enum):
    """Kinds of named types allowed in input position."""

    INPUT = "InputType"
    ENUM = "Enum"
    SCALAR = "Scalar"


class InputTypeSpec(_SchemaNode):
    """Reference to a named type used by an input field or argument."""

    kind: InputTypeKind = Field(alias="_type")
    name: StrictStr


class InputLiteralFieldSpec(_SchemaNode):
    kind: Literal["literal"] = Field("literal", alias="_type")
    type: InputTypeSpec


class InputArrayFieldSpec(_SchemaNode):
    """List of ``type``; ``nullable`` applies to the elements, not the list."""

    kind: Literal["array"] = Field("array", alias="_type")
    type: InputTypeSpec
    nullable: StrictBool


InputFieldSpec = Annotated[
    Union[InputLiteralFieldSpec, InputArrayFieldSpec],
    Field(discriminator="kind"),
]


class InputFieldSchema(_SchemaNode):
    nullable: StrictBool
    spec: InputFieldSpec


class InputSchema(_SchemaNode):
    name: StrictStr
    fields: dict[str, InputFieldSchema] = Field(default_factory=dict)


# =============================================================================
# Output side
# =============================================================================


class ObjectTypeKind(str, Enum):
    """Kinds of named types allowed in output position."""

    OBJECT = "ObjectType"
    INTERFACE = "InterfaceType"
    SCALAR = "Scalar"
    UNION = "Union"
    ENUM = "Enum"


class ObjectTypeSpec(_SchemaNode):
    """Reference to a named type returned by an object field."""

    kind: ObjectTypeKind = Field(alias="_type")
    name: StrictStr


class ObjectLiteralFieldSpec(_SchemaNode):
    kind: Literal["literal"] = Field("literal", alias="_type")
    type: ObjectTypeSpec


class ObjectArrayFieldSpec(_SchemaNode):
    """List of ``type``; ``nullable`` applies to the elements, not the list."""

    kind: Literal["array"] = Field("array", alias="_type")
    type: ObjectTypeSpec
    nullable: StrictBool


# A callable may only return one of these two shapes.
ObjectNonCallableFieldSpec = Annotated[
    Union[ObjectLiteralFieldSpec, ObjectArrayFieldSpec],
    Field(discriminator="kind"),
]


class ObjectCallableFieldSpec(_SchemaNode):
    """A field taking arguments (query, mutation or any field with arguments)."""

    kind: Literal["callable"] = Field("callable", alias="_type")
    return_type: ObjectNonCallableFieldSpec = Field(alias="returnType")
    arguments: dict[str, InputFieldSchema] = Field(default_factory=dict)


ObjectFieldSpec = Annotated[
    Union[ObjectLiteralFieldSpec, ObjectArrayFieldSpec, ObjectCallableFieldSpec],
    Field(discriminator="kind"),
]


class ObjectFieldSchema(_SchemaNode):
    nullable: StrictBool
    spec: ObjectFieldSpec


class ObjectSchema(_SchemaNode):
    """An object type.

    ``implements`` maps each interface name to itself. The serializer writes
    ``{"name": ..., "$ref": ...}`` objects as values; those are reduced to the
    name.
    """

    name: StrictStr
    implements: dict[str, StrictStr] = Field(default_factory=dict)
    fields: dict[str, ObjectFieldSchema] = Field(default_factory=dict)

    @field_validator("implements", mode="before")
    @classmethod
    def _interface_names(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                key: item["name"] if isinstance(item, dict) and "name" in item else item
                for key, item in value.items()
            }
        return value


class InterfaceSchema(_SchemaNode):
    name: StrictStr
    fields: dict[str, ObjectFieldSchema] = Field(default_factory=dict)


class UnionSchema(_SchemaNode):
    """A union; the keys of ``items`` are the member object names."""

    name: StrictStr
    items: dict[str, StrictStr] = Field(default_factory=dict)

    @field_validator("items", mode="before")
    @classmethod
    def _member_names(cls, value: Any) -> Any:
        if isinstance(value, list) and all(isinstance(name, str) for name in value):
            return {name: name for name in value}
        return value

    @property
    def members(self) -> tuple[str, ...]:
        return tuple(self.items)


class EnumSchema(_SchemaNode):
    name: StrictStr
    values: tuple[StrictStr, ...] = ()


# =============================================================================
# Directives
# =============================================================================


class DirectiveLocation(str, Enum):
    SCHEMA = "SCHEMA"
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    FIELD_DEFINITION = "FIELD_DEFINITION"
    ARGUMENT_DEFINITION = "ARGUMENT_DEFINITION"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    ENUM_VALUE = "ENUM_VALUE"
    INPUT_OBJECT = "INPUT_OBJECT"
    INPUT_FIELD_DEFINITION = "INPUT_FIELD_DEFINITION"


class DirectiveSchema(_SchemaNode):
    name: StrictStr
    locations: tuple[DirectiveLocation, ...] = ()
    arguments: dict[str, InputFieldSchema] = Field(default_factory=dict)


# =============================================================================
# Root
# =============================================================================


class ServerSchema(_SchemaNode):
    """All server-side definitions, each section keyed by entity name."""

    objects: dict[str, ObjectSchema] = Field(default_factory=dict)
    interfaces: dict[str, InterfaceSchema] = Field(default_factory=dict)
    directives: dict[str, DirectiveSchema] = Field(default_factory=dict)
    unions: dict[str, UnionSchema] = Field(default_factory=dict)
    enums: dict[str, EnumSchema] = Field(default_factory=dict)
    scalars: tuple[StrictStr, ...] = ()
    inputs: dict[str, InputSchema] = Field(default_factory=dict)


class Schema(_SchemaNode):
    server: ServerSchema


def decode_schema(data: Any) -> Schema:
    """Decode an already parsed JSON document into a Schema.

    Raises:
        DecodeError: If the document does not match the schema model.
    """
    try:
        return Schema.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(_describe(exc), exc.errors(include_url=False)) from exc


def decode_schema_json(text: str | bytes) -> Schema:
    """Decode a JSON text into a Schema.

    Raises:
        DecodeError: If the text is not JSON or does not match the schema model.
    """
    try:
        return Schema.model_validate_json(text)
    except ValidationError as exc:
        raise DecodeError(_describe(exc), exc.errors(include_url=False)) from exc


def _describe(exc: ValidationError) -> str:
    first = exc.errors(include_url=False)[0]
    location = ".".join(str(part) for part in first["loc"]) or "<document>"
    return f"Invalid schema document ({exc.error_count()} error(s)); first at {location}: {first['msg']}"
