"""GraphQL schema parser using graphql-core.

Parses .graphql/.graphqls/.gql files and produces the server schema document
(the same JSON shape the decoder in ``schema`` reads).
"""

import logging
import os
from typing import Any

from graphql import (
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    FieldDefinitionNode,
    GraphQLError,
    InputObjectTypeDefinitionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    TypeNode,
    UnionTypeDefinitionNode,
    parse,
)

from .errors import SchemaLoadError, SchemaParseError
from .schema import DirectiveLocation

logger = logging.getLogger(__name__)

SDL_SUFFIXES = (".graphql", ".graphqls", ".gql")

BUILTIN_SCALARS = ("String", "Int", "Float", "Boolean", "ID")

# Kinds a type reference may have in input position (arguments, input fields).
INPUT_KINDS = ("InputType", "Enum", "Scalar")


class SchemaParser:
    """Parses GraphQL schema files into a server schema document.

    Example:
        document = SchemaParser("./schema").parse_document()
        schema = decode_schema(document)
    """

    def __init__(self, schema_path: str):
        """Initialize a parser with a path to a schema file or directory."""
        self.schema_path = schema_path
        self.current_file = ""
        self.kinds: dict[str, str] = {name: "Scalar" for name in BUILTIN_SCALARS}
        self.server: dict[str, Any] = {
            "objects": {},
            "interfaces": {},
            "directives": {},
            "unions": {},
            "enums": {},
            "scalars": [],
            "inputs": {},
        }

    def parse_document(self) -> dict[str, Any]:
        """Parse all schema files and return the complete document.

        Raises:
            SchemaLoadError: If no schema file can be read.
            SchemaParseError: If a file is not valid SDL or does not describe
                a schema the generator supports.
        """
        documents: list[tuple[str, DocumentNode]] = []
        for file_path in self._collect_schema_files():
            self.current_file = os.path.basename(file_path)
            try:
                with open(file_path) as f:
                    content = f.read()
            except OSError as exc:
                raise SchemaLoadError(f"Couldn't read schema file {file_path}: {exc}") from exc
            try:
                documents.append((file_path, parse(content)))
            except GraphQLError as exc:
                logger.error("Error parsing %s: %s", self.current_file, exc.message)
                raise SchemaParseError(f"Error parsing {self.current_file}: {exc.message}") from exc

        # Names are registered first so that fields may reference types
        # declared later or in another file.
        for _, ast in documents:
            self._register_types(ast)
        for file_path, ast in documents:
            self.current_file = os.path.basename(file_path)
            self._process_ast(ast)

        logger.debug(
            "Parsed %d object(s), %d input(s), %d enum(s), %d union(s)",
            len(self.server["objects"]), len(self.server["inputs"]),
            len(self.server["enums"]), len(self.server["unions"]),
        )
        return {"server": self.server}

    def _collect_schema_files(self) -> list[str]:
        """Collect all SDL files from path."""
        if not os.path.exists(self.schema_path):
            raise SchemaLoadError(f"Schema path {self.schema_path} does not exist")
        files = []
        if os.path.isfile(self.schema_path):
            files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SDL_SUFFIXES):
                        files.append(os.path.join(root, filename))
        if not files:
            raise SchemaLoadError(f"No GraphQL schema files found in {self.schema_path}")
        return sorted(files)

    def _register_types(self, ast: DocumentNode):
        for definition in ast.definitions:
            if isinstance(definition, ScalarTypeDefinitionNode):
                self.kinds[definition.name.value] = "Scalar"
            elif isinstance(definition, EnumTypeDefinitionNode):
                self.kinds[definition.name.value] = "Enum"
            elif isinstance(definition, InterfaceTypeDefinitionNode):
                self.kinds[definition.name.value] = "InterfaceType"
            elif isinstance(definition, (ObjectTypeDefinitionNode, ObjectTypeExtensionNode)):
                self.kinds[definition.name.value] = "ObjectType"
            elif isinstance(definition, UnionTypeDefinitionNode):
                self.kinds[definition.name.value] = "Union"
            elif isinstance(definition, InputObjectTypeDefinitionNode):
                self.kinds[definition.name.value] = "InputType"

    def _process_ast(self, ast: DocumentNode):
        """Process GraphQL AST and populate the document."""
        for definition in ast.definitions:
            if isinstance(definition, ScalarTypeDefinitionNode):
                self._process_scalar(definition)
            elif isinstance(definition, EnumTypeDefinitionNode):
                self._process_enum(definition)
            elif isinstance(definition, InterfaceTypeDefinitionNode):
                self._process_interface(definition)
            elif isinstance(definition, (ObjectTypeDefinitionNode, ObjectTypeExtensionNode)):
                # 'extend type' and repeated definitions merge into one object
                self._process_object_type(definition)
            elif isinstance(definition, UnionTypeDefinitionNode):
                self._process_union(definition)
            elif isinstance(definition, InputObjectTypeDefinitionNode):
                self._process_input_type(definition)
            elif isinstance(definition, DirectiveDefinitionNode):
                self._process_directive(definition)
            elif isinstance(definition, SchemaDefinitionNode):
                logger.debug("Ignoring schema definition in %s", self.current_file)
            else:
                logger.warning(
                    "Ignoring unsupported %s in %s",
                    type(definition).__name__, self.current_file,
                )

    def _process_scalar(self, node: ScalarTypeDefinitionNode):
        name = node.name.value
        if name not in self.server["scalars"]:
            self.server["scalars"].append(name)

    def _process_enum(self, node: EnumTypeDefinitionNode):
        name = node.name.value
        self.server["enums"][name] = {
            "name": name,
            "values": [v.name.value for v in node.values],
        }

    def _process_interface(self, node: InterfaceTypeDefinitionNode):
        name = node.name.value
        self.server["interfaces"][name] = {
            "name": name,
            "fields": self._object_fields(node.fields),
        }

    def _process_object_type(self, node: ObjectTypeDefinitionNode | ObjectTypeExtensionNode):
        name = node.name.value
        existing = self.server["objects"].setdefault(
            name, {"name": name, "implements": {}, "fields": {}}
        )
        for interface in node.interfaces or ():
            interface_name = interface.name.value
            existing["implements"][interface_name] = {
                "name": interface_name,
                "$ref": f"#/server/interfaces/{interface_name}",
            }
        # Fields declared first win; extensions only add new ones
        for field_name, field in self._object_fields(node.fields).items():
            existing["fields"].setdefault(field_name, field)

    def _process_union(self, node: UnionTypeDefinitionNode):
        name = node.name.value
        items = {}
        for member in node.types:
            member_name = member.name.value
            if self.kinds.get(member_name) != "ObjectType":
                raise SchemaParseError(
                    f"Union {name} in {self.current_file} has member {member_name}, "
                    f"which is not an object type"
                )
            items[member_name] = f"#/server/objects/{member_name}"
        self.server["unions"][name] = {"name": name, "items": items}

    def _process_input_type(self, node: InputObjectTypeDefinitionNode):
        name = node.name.value
        self.server["inputs"][name] = {
            "name": name,
            "fields": self._input_fields(node.fields),
        }

    def _process_directive(self, node: DirectiveDefinitionNode):
        name = node.name.value
        locations = []
        for location in node.locations:
            if location.value not in DirectiveLocation.__members__:
                raise SchemaParseError(
                    f"Directive @{name} in {self.current_file} uses unsupported "
                    f"location {location.value}"
                )
            locations.append(location.value)
        self.server["directives"][name] = {
            "name": name,
            "locations": locations,
            "arguments": self._input_fields(node.arguments),
        }

    # -- fields -------------------------------------------------------------

    def _object_fields(self, field_nodes: tuple[FieldDefinitionNode, ...] | None) -> dict[str, Any]:
        """Process field definitions; fields with arguments become callables."""
        fields = {}
        for node in field_nodes or ():
            nullable, shape = self._get_type_info(node.type, input_position=False)
            if node.arguments:
                spec = {
                    "_type": "callable",
                    "returnType": shape,
                    "arguments": self._input_fields(node.arguments),
                }
            else:
                spec = shape
            fields[node.name.value] = {"nullable": nullable, "spec": spec}
        return fields

    def _input_fields(self, value_nodes: tuple[InputValueDefinitionNode, ...] | None) -> dict[str, Any]:
        fields = {}
        for node in value_nodes or ():
            nullable, shape = self._get_type_info(node.type, input_position=True)
            fields[node.name.value] = {"nullable": nullable, "spec": shape}
        return fields

    def _get_type_info(self, type_node: TypeNode, input_position: bool) -> tuple[bool, dict[str, Any]]:
        """Return the field's nullability and its literal or array spec."""
        nullable = True
        # NonNull wrapper means not nullable
        if isinstance(type_node, NonNullTypeNode):
            nullable = False
            type_node = type_node.type

        if not isinstance(type_node, ListTypeNode):
            return nullable, {"_type": "literal", "type": self._type_ref(type_node, input_position)}

        element = type_node.type
        element_nullable = True
        if isinstance(element, NonNullTypeNode):
            element_nullable = False
            element = element.type
        if isinstance(element, ListTypeNode):
            raise SchemaParseError(f"Nested lists are not supported (in {self.current_file})")
        return nullable, {
            "_type": "array",
            "type": self._type_ref(element, input_position),
            "nullable": element_nullable,
        }

    def _type_ref(self, node: NamedTypeNode, input_position: bool) -> dict[str, str]:
        name = node.name.value
        kind = self.kinds.get(name)
        if kind is None:
            raise SchemaParseError(f"Unknown type {name} in {self.current_file}")
        if input_position and kind not in INPUT_KINDS:
            raise SchemaParseError(
                f"Type {name} cannot be used as an input type (in {self.current_file})"
            )
        if not input_position and kind == "InputType":
            raise SchemaParseError(
                f"Input type {name} cannot be used as a field type (in {self.current_file})"
            )
        return {"_type": kind, "name": name}
