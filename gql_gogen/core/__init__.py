"""Core modules for GraphQL to Go code generation."""

from .binder import UnionBinder, bind_unions
from .definitions import DefinitionGenerator, GenerationFailure, GenerationResult
from .errors import (
    CodegenError,
    DeclarationError,
    DecodeError,
    SchemaLoadError,
    SchemaParseError,
    UnknownScalarError,
    UnrecognizedFieldSpecError,
)
from .generator import CodeGenerator, GenerationConfig
from .ir import (
    IRConstant,
    IREnum,
    IRInterface,
    IRMarkerMethod,
    IRMethod,
    IRStruct,
    IRStructField,
    IRUnion,
    NamedType,
    PointerType,
    SliceType,
)
from .loader import load_schema
from .parser import SchemaParser
from .resolver import TypeResolver
from .scalars import (
    GoScalar,
    ScalarRegistry,
    ScalarSpec,
    VoidScalar,
    default_registry,
    parse_scalar_override,
)
from .schema import Schema, decode_schema, decode_schema_json

__all__ = [
    # Errors
    "CodegenError",
    "SchemaLoadError",
    "SchemaParseError",
    "DecodeError",
    "DeclarationError",
    "UnknownScalarError",
    "UnrecognizedFieldSpecError",
    # Schema model
    "Schema",
    "decode_schema",
    "decode_schema_json",
    "load_schema",
    # Parser
    "SchemaParser",
    # Scalars
    "ScalarSpec",
    "ScalarRegistry",
    "GoScalar",
    "VoidScalar",
    "default_registry",
    "parse_scalar_override",
    # IR types
    "NamedType",
    "PointerType",
    "SliceType",
    "IRConstant",
    "IREnum",
    "IRUnion",
    "IRStruct",
    "IRStructField",
    "IRMarkerMethod",
    "IRMethod",
    "IRInterface",
    # Generation
    "TypeResolver",
    "UnionBinder",
    "bind_unions",
    "DefinitionGenerator",
    "GenerationFailure",
    "GenerationResult",
    "CodeGenerator",
    "GenerationConfig",
]
