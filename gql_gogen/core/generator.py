"""Go code generator for GraphQL server schemas.

Renders Jinja2 templates to produce a Go source file from the declarations
built by DefinitionGenerator.

Supports custom templates via GenerationConfig.template_dir:
    config = GenerationConfig(package_name="api", template_dir="./my_templates")
    CodeGenerator(schema, "./api/graphql.go", config).generate()

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .definitions import DefinitionGenerator, GenerationResult
from .ir import GoType, IRDeclaration, IREnum, IRInterface, IRStruct, IRStructField, NamedType, PointerType, packages_of
from .scalars import ScalarRegistry, default_registry
from .schema import Schema

logger = logging.getLogger(__name__)

# Imports used by the JSON decoder generated for every enum.
ENUM_IMPORTS = ("encoding/json", "fmt", "slices")

_GO_PACKAGE_NAME = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")
_MAJOR_VERSION = re.compile(r"^v[0-9]+$")
_IDENTIFIER_HEAD = re.compile(r"[_0-9A-Za-z]*")


def guess_package_name(import_path: str) -> str:
    """Guess the package name of an import path, as goimports does.

    A trailing major version element is skipped (``github.com/x/y/v2`` -> ``y``),
    a ``go-`` prefix is dropped and the name is cut at the first character
    that cannot appear in an identifier (``gopkg.in/yaml.v3`` -> ``yaml``).
    """
    elements = [e for e in import_path.split("/") if e]
    base = elements[-1] if elements else ""
    if _MAJOR_VERSION.match(base) and len(elements) > 1:
        base = elements[-2]
    base = base.removeprefix("go-")
    base = _IDENTIFIER_HEAD.match(base).group(0).lstrip("0123456789")
    return base or "pkg"


def go_type(value: GoType) -> str:
    """Render a type descriptor as a Go type expression.

    Qualified types use the guessed package name of their import path
    (``encoding/json.RawMessage`` -> ``json.RawMessage``).
    """
    if isinstance(value, PointerType):
        return "*" + go_type(value.elem)
    if isinstance(value, NamedType):
        if value.package:
            return f"{guess_package_name(value.package)}.{value.name}"
        return value.name
    return "[]" + go_type(value.elem)


def go_string(value: str) -> str:
    """Quote text as a Go interpreted string literal."""
    return json.dumps(value, ensure_ascii=False)


def align_columns(rows: list[list[str]]) -> list[str]:
    """Pad every cell but the last to its column width, as gofmt does."""
    widths: list[int] = []
    for row in rows:
        for index, cell in enumerate(row[:-1]):
            if index == len(widths):
                widths.append(0)
            widths[index] = max(widths[index], len(cell))
    lines = []
    for row in rows:
        cells = [cell.ljust(widths[index]) for index, cell in enumerate(row[:-1])]
        lines.append(" ".join(cells + row[-1:]))
    return lines


def struct_lines(fields: list[IRStructField]) -> list[str]:
    return align_columns([[f.name, go_type(f.type), f"`{f.tag}`"] for f in fields])


def const_lines(decl: IREnum) -> list[str]:
    return align_columns([
        [c.name, f"{decl.name} = {go_string(c.value)}"] for c in decl.constants
    ])


def collect_imports(declarations: list[IRDeclaration]) -> list[str]:
    """Sorted import paths referenced by ``declarations``."""
    imports: set[str] = set()
    for decl in declarations:
        if isinstance(decl, IREnum):
            imports.update(ENUM_IMPORTS)
        elif isinstance(decl, IRStruct):
            for f in decl.fields:
                imports |= packages_of(f.type)
        elif isinstance(decl, IRInterface):
            for method in decl.methods:
                imports |= packages_of(method.returns)
    return sorted(imports)


@dataclass
class GenerationConfig:
    """Settings for one generated Go file.

    Attributes:
        package_name: Go package clause of the generated file
        scalars: Scalar handlers used to resolve scalar types
        template_dir: Optional directory with templates overriding the
            built-in ones
    """
    package_name: str = "graphql"
    scalars: ScalarRegistry = field(default_factory=default_registry)
    template_dir: str | None = None

    def __post_init__(self):
        if not _GO_PACKAGE_NAME.match(self.package_name):
            raise ValueError(f"Invalid Go package name: {self.package_name!r}")


class CodeGenerator:
    """Generates a Go source file from a decoded schema.

    Available templates to override:
        - file.go.j2 - File header, package clause and imports
        - enum.go.j2 - Enum type, constants, known values and decoder
        - union.go.j2 - Union marker interface
        - struct.go.j2 - Object and input data types
        - marker.go.j2 - Union marker implementation on an object
        - interface.go.j2 - Query, Mutation and Subscription interfaces

    Example:
        generator = CodeGenerator(schema, "./generated/graphql.go")
        result = generator.generate()
        if not result.ok:
            for failure in result.failures:
                print(failure)
    """

    def __init__(
        self,
        schema: Schema,
        output_path: str,
        config: GenerationConfig | None = None,
    ):
        """Initialize the code generator.

        Args:
            schema: The decoded server schema
            output_path: Path of the Go file to write
            config: Package name, scalar handlers and template overrides
        """
        self.schema = schema
        self.output_path = output_path
        self.config = config or GenerationConfig()

        # Build template loader - custom templates take precedence
        loaders = []
        if self.config.template_dir:
            template_path = Path(self.config.template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
            else:
                logger.warning("Template directory %s does not exist, using built-in templates", template_path)
        loaders.append(PackageLoader("gql_gogen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        # Register custom filters
        self.env.filters["go_type"] = go_type
        self.env.filters["go_string"] = go_string
        self.env.filters["struct_lines"] = struct_lines
        self.env.filters["const_lines"] = const_lines

    def generate(self) -> GenerationResult:
        """Generate declarations and write every successful one to the output file."""
        result = DefinitionGenerator(self.config.scalars).generate(self.schema)
        content = self.render(result.declarations)

        directory = os.path.dirname(self.output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.output_path, "w") as f:
            f.write(content)
        logger.info("Wrote %s", self.output_path)
        return result

    def render(self, declarations: list[IRDeclaration]) -> str:
        """Render declarations as the content of one Go file."""
        blocks = [self._render_declaration(decl) for decl in declarations]
        template = self.env.get_template("file.go.j2")
        return template.render(
            package_name=self.config.package_name,
            imports=collect_imports(declarations),
            blocks=blocks,
        )

    def _render_declaration(self, decl: IRDeclaration) -> str:
        template = self.env.get_template(f"{decl.kind}.go.j2")
        return template.render(decl=decl).rstrip("\n")
