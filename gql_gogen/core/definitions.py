"""Definition generator: turns a decoded schema into Go declarations.

Entities are processed kind by kind: enums, unions, objects, inputs. The
union membership index is complete before the object pass reads it, so an
object always knows every union it belongs to.

A failure while building one entity (an unknown scalar, for instance) drops
that entity's declarations, is recorded in the result, and generation
continues with the next entity.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from .binder import bind_unions
from .errors import DeclarationError
from .ir import (
    IRConstant,
    IRDeclaration,
    IREnum,
    IRInterface,
    IRMarkerMethod,
    IRMethod,
    IRStruct,
    IRStructField,
    IRUnion,
)
from .resolver import TypeResolver
from .scalars import ScalarRegistry
from .schema import EnumSchema, InputSchema, ObjectSchema, Schema, UnionSchema

logger = logging.getLogger(__name__)

# Objects with these names are the server's entry points and are generated
# as interfaces rather than data types.
ROOT_OPERATION_NAMES = ("Query", "Mutation", "Subscription")


def title_case(name: str) -> str:
    """Upper-case the first character, keeping the rest (``firstName`` -> ``FirstName``)."""
    return name[:1].upper() + name[1:]


def marker_name(union_name: str) -> str:
    return "Is" + union_name


@dataclass
class GenerationFailure:
    """An entity whose declarations could not be generated."""
    kind: str
    name: str
    error: DeclarationError

    def __str__(self) -> str:
        return f"{self.kind} {self.name}: {self.error}"


@dataclass
class GenerationResult:
    """Declarations produced by a run, plus every per-entity failure."""
    declarations: list[IRDeclaration] = field(default_factory=list)
    failures: list[GenerationFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class DefinitionGenerator:
    """Generates Go declarations for every enum, union, object and input.

    Example:
        generator = DefinitionGenerator(default_registry())
        result = generator.generate(schema)
        for failure in result.failures:
            print(failure)
    """

    def __init__(self, scalars: ScalarRegistry):
        self.resolver = TypeResolver(scalars)

    def generate(self, schema: Schema) -> GenerationResult:
        """Run all passes over ``schema``."""
        server = schema.server
        result = GenerationResult()

        for enum in server.enums.values():
            self._run(result, "enum", enum.name, lambda enum=enum: self.generate_enum(enum))

        for union in server.unions.values():
            self._run(result, "union", union.name, lambda union=union: self.generate_union(union))
        binder = bind_unions(server.unions.values())

        for obj in server.objects.values():
            if obj.name in ROOT_OPERATION_NAMES:
                self._run(result, "object", obj.name, lambda obj=obj: self.generate_root_operation(obj))
            else:
                self._run(
                    result, "object", obj.name,
                    lambda obj=obj: self.generate_object(obj, binder.unions_of(obj.name)),
                )

        for input_schema in server.inputs.values():
            self._run(result, "input", input_schema.name, lambda s=input_schema: self.generate_input(s))

        logger.info(
            "Generated %d declarations, %d failure(s)",
            len(result.declarations), len(result.failures),
        )
        return result

    def _run(
        self,
        result: GenerationResult,
        kind: str,
        name: str,
        build: Callable[[], list[IRDeclaration]],
    ):
        try:
            declarations = build()
        except DeclarationError as exc:
            logger.warning("Failed to generate %s definition %s: %s", kind, name, exc)
            result.failures.append(GenerationFailure(kind, name, exc))
            return
        logger.debug("Generated %s definition %s", kind, name)
        result.declarations.extend(declarations)

    # -- per kind -----------------------------------------------------------

    def generate_enum(self, enum: EnumSchema) -> list[IRDeclaration]:
        constants = [IRConstant(name=enum.name + value, value=value) for value in enum.values]
        return [IREnum(name=enum.name, constants=constants)]

    def generate_union(self, union: UnionSchema) -> list[IRDeclaration]:
        return [IRUnion(name=union.name, marker=marker_name(union.name))]

    def generate_object(self, obj: ObjectSchema, union_names: list[str]) -> list[IRDeclaration]:
        fields = [
            IRStructField(
                name=title_case(name),
                type=self.resolver.object_field(field),
                json_key=name,
                omit_empty=field.nullable,
            )
            for name, field in obj.fields.items()
        ]
        markers = [IRMarkerMethod(receiver=obj.name, name=marker_name(u)) for u in union_names]
        return [IRStruct(name=obj.name, fields=fields), *markers]

    def generate_root_operation(self, obj: ObjectSchema) -> list[IRDeclaration]:
        methods = [
            IRMethod(name=title_case(name), returns=self.resolver.object_field(field))
            for name, field in obj.fields.items()
        ]
        return [IRInterface(name=obj.name, methods=methods)]

    def generate_input(self, input_schema: InputSchema) -> list[IRDeclaration]:
        fields = [
            IRStructField(
                name=title_case(name),
                type=self.resolver.input_field(field),
                json_key=name,
                omit_empty=field.nullable,
            )
            for name, field in input_schema.fields.items()
        ]
        return [IRStruct(name=input_schema.name, fields=fields)]
