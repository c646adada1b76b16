"""Tests for Go code rendering."""

import pytest

from gql_gogen.core.generator import (
    CodeGenerator,
    GenerationConfig,
    align_columns,
    collect_imports,
    go_string,
    go_type,
    guess_package_name,
)
from gql_gogen.core.ir import (
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
from gql_gogen.core.scalars import GoScalar, default_registry, parse_scalar_override
from gql_gogen.core.schema import decode_schema

HEADER = "// Code generated by gql-gogen. DO NOT EDIT.\n\npackage graphql\n"

COLOR_ENUM = '''type Color string

const (
	ColorRED   Color = "RED"
	ColorGREEN Color = "GREEN"
)

var allValuesOfColor = []Color{ColorRED, ColorGREEN}

func (self *Color) UnmarshalJSON(data []byte) error {
	var value string
	err := json.Unmarshal(data, &value)
	if err != nil {
		return err
	}
	if !slices.Contains(allValuesOfColor, Color(value)) {
		return fmt.Errorf("Invalid Color value: %s", value)
	}
	*self = Color(value)
	return nil
}
'''

ENUM_IMPORTS = '''
import (
	"encoding/json"
	"fmt"
	"slices"
)
'''


def literal(kind, name):
    return {"_type": "literal", "type": {"_type": kind, "name": name}}


@pytest.fixture
def empty_schema():
    return decode_schema({"server": {}})


@pytest.fixture
def generator(empty_schema, tmp_path):
    return CodeGenerator(empty_schema, str(tmp_path / "schema.go"))


# =============================================================================
# Helpers
# =============================================================================


class TestGoType:
    """Tests for rendering type descriptors."""

    def test_named(self):
        assert go_type(NamedType("int32")) == "int32"

    def test_qualified_uses_last_path_element(self):
        assert go_type(NamedType("Time", "time")) == "time.Time"
        assert go_type(NamedType("RawMessage", "encoding/json")) == "json.RawMessage"

    def test_nested(self):
        assert go_type(PointerType(SliceType(PointerType(NamedType("User"))))) == "*[]*User"

    def test_versioned_import_paths(self):
        _, node = parse_scalar_override("Node=gopkg.in/yaml.v3.Node")
        assert go_type(node.on_input_type()) == "yaml.Node"
        _, value = parse_scalar_override("Value=github.com/x/y/v2.T")
        assert go_type(PointerType(value.on_input_type())) == "*y.T"


class TestPackageName:
    """Tests for guessing the package name of an import path."""

    @pytest.mark.parametrize(
        "import_path, expected",
        [
            ("time", "time"),
            ("encoding/json", "json"),
            ("gopkg.in/yaml.v3", "yaml"),
            ("github.com/x/y/v2", "y"),
            ("github.com/mattn/go-sqlite3", "sqlite3"),
            ("github.com/google/uuid/", "uuid"),
            ("example.com/my-lib", "my"),
            ("example.com/2fa", "fa"),
            ("example.com/123", "pkg"),
        ],
    )
    def test_guess_package_name(self, import_path, expected):
        assert guess_package_name(import_path) == expected


class TestGoString:
    def test_quotes_and_escapes(self):
        assert go_string("RED") == '"RED"'
        assert go_string('say "hi"') == '"say \\"hi\\""'


class TestAlignColumns:
    def test_pads_all_but_last_column(self):
        assert align_columns([["Id", "string", "`a`"], ["FirstName", "*int32", "`b`"]]) == [
            "Id        string `a`",
            "FirstName *int32 `b`",
        ]

    def test_empty(self):
        assert align_columns([]) == []


class TestCollectImports:
    def test_enum_imports(self):
        assert collect_imports([IREnum(name="Color")]) == ["encoding/json", "fmt", "slices"]

    def test_scalar_packages_sorted_and_deduplicated(self):
        decls = [
            IRStruct(name="Event", fields=[
                IRStructField("At", NamedType("Time", "time"), "at"),
                IRStructField("Until", PointerType(NamedType("Time", "time")), "until"),
                IRStructField("Raw", SliceType(NamedType("RawMessage", "encoding/json")), "raw"),
            ]),
            IRInterface(name="Query", methods=[IRMethod("Now", NamedType("Time", "time"))]),
        ]
        assert collect_imports(decls) == ["encoding/json", "time"]

    def test_no_imports(self):
        assert collect_imports([IRStruct(name="User", fields=[IRStructField("Id", NamedType("string"), "id")])]) == []


# =============================================================================
# Rendering
# =============================================================================


class TestRender:
    """Tests for the rendered Go file."""

    def test_empty_file(self, generator):
        assert generator.render([]) == HEADER

    def test_enum(self, generator):
        decl = IREnum(
            name="Color",
            constants=[IRConstant("ColorRED", "RED"), IRConstant("ColorGREEN", "GREEN")],
        )
        assert generator.render([decl]) == HEADER + ENUM_IMPORTS + "\n" + COLOR_ENUM

    def test_empty_enum(self, generator):
        content = generator.render([IREnum(name="Nothing")])
        assert "const ()\n" in content
        assert "var allValuesOfNothing = []Nothing{}\n" in content

    def test_union_and_marker(self, generator):
        content = generator.render([
            IRUnion(name="SearchResult", marker="IsSearchResult"),
            IRStruct(name="User"),
            IRMarkerMethod(receiver="User", name="IsSearchResult"),
        ])
        assert content == HEADER + (
            "\n"
            "type SearchResult interface {\n"
            "\tIsSearchResult()\n"
            "}\n"
            "\n"
            "type User struct{}\n"
            "\n"
            "func (User) IsSearchResult() {}\n"
        )

    def test_struct(self, generator):
        decl = IRStruct(name="Stats", fields=[
            IRStructField("Id", NamedType("string"), "id"),
            IRStructField("Counts", PointerType(SliceType(NamedType("int32"))), "counts", omit_empty=True),
        ])
        assert generator.render([decl]) == HEADER + (
            "\n"
            "type Stats struct {\n"
            '\tId     string   `json:"id"`\n'
            '\tCounts *[]int32 `json:"counts,omitempty"`\n'
            "}\n"
        )

    def test_root_operation_interface(self, generator):
        decl = IRInterface(name="Query", methods=[IRMethod("User", PointerType(NamedType("User")))])
        assert generator.render([decl]) == HEADER + (
            "\n"
            "type Query interface {\n"
            "\tUser() *User\n"
            "}\n"
        )

    def test_empty_interface(self, generator):
        assert generator.render([IRInterface(name="Mutation")]).endswith("type Mutation interface{}\n")

    def test_package_name(self, empty_schema, tmp_path):
        generator = CodeGenerator(empty_schema, str(tmp_path / "a.go"), GenerationConfig(package_name="api"))
        assert "\npackage api\n" in generator.render([])


class TestGenerate:
    """Tests for generating and writing a file."""

    @pytest.fixture
    def schema(self):
        return decode_schema({
            "server": {
                "enums": {"Color": {"name": "Color", "values": ["RED", "GREEN"]}},
                "objects": {
                    "Event": {
                        "name": "Event",
                        "fields": {
                            "at": {"nullable": False, "spec": literal("Scalar", "DateTime")},
                            "color": {"nullable": True, "spec": literal("Enum", "Color")},
                        },
                    },
                },
            }
        })

    def test_writes_file(self, schema, tmp_path):
        output = tmp_path / "nested" / "schema.go"
        config = GenerationConfig(scalars=default_registry().merge({"DateTime": GoScalar("Time", package="time")}))
        result = CodeGenerator(schema, str(output), config).generate()

        assert result.ok
        content = output.read_text()
        assert '\t"slices"\n\t"time"\n)' in content
        assert "type Event struct {\n" in content
        assert '\tAt    time.Time `json:"at"`\n' in content
        assert '\tColor *Color    `json:"color,omitempty"`\n' in content

    def test_failures_still_write_the_rest(self, schema, tmp_path):
        output = tmp_path / "schema.go"
        result = CodeGenerator(schema, str(output)).generate()

        assert not result.ok
        content = output.read_text()
        assert "type Color string" in content
        assert "Event" not in content

    def test_idempotent(self, schema, tmp_path):
        config = GenerationConfig(scalars=default_registry().merge({"DateTime": GoScalar("Time", package="time")}))
        first = tmp_path / "first.go"
        second = tmp_path / "second.go"
        CodeGenerator(schema, str(first), config).generate()
        CodeGenerator(schema, str(second), config).generate()
        assert first.read_text() == second.read_text()

    def test_custom_template_dir(self, schema, tmp_path):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "enum.go.j2").write_text("// enum {{ decl.name }}\n")
        output = tmp_path / "schema.go"
        config = GenerationConfig(
            scalars=default_registry().merge({"DateTime": GoScalar("Time", package="time")}),
            template_dir=str(templates),
        )
        CodeGenerator(schema, str(output), config).generate()
        content = output.read_text()
        assert "\n// enum Color\n" in content
        assert "type Event struct {" in content

    def test_missing_template_dir_falls_back(self, schema, tmp_path):
        config = GenerationConfig(template_dir=str(tmp_path / "missing"))
        generator = CodeGenerator(schema, str(tmp_path / "schema.go"), config)
        assert "type Color string" in generator.render([IREnum(name="Color")])


class TestGenerationConfig:
    def test_defaults(self):
        config = GenerationConfig()
        assert config.package_name == "graphql"
        assert "Int" in config.scalars
        assert config.template_dir is None

    def test_invalid_package_name(self):
        with pytest.raises(ValueError):
            GenerationConfig(package_name="my-package")
