"""Command-line interface for gql-gogen."""

import json
import logging
from pathlib import Path

import click

from . import __version__
from .core.errors import CodegenError
from .core.generator import CodeGenerator, GenerationConfig
from .core.loader import load_schema
from .core.parser import SchemaParser
from .core.scalars import default_registry, parse_scalar_override
from .core.schema import decode_schema


def _configure_logging(verbose: bool):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _parse_scalar_options(ctx, param, values):
    overrides = {}
    for value in values:
        try:
            name, scalar = parse_scalar_override(value)
        except ValueError as e:
            raise click.BadParameter(str(e), ctx=ctx, param=param) from e
        overrides[name] = scalar
    return overrides


@click.group()
@click.version_option(__version__, prog_name="gql-gogen")
def main():
    """GraphQL to Go code generator.

    Generate Go type declarations from GraphQL server schemas.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to a schema JSON document, a GraphQL SDL file, or a directory of SDL files.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="Output Go file (e.g., ./graphql/schema.go).",
)
@click.option(
    "--package",
    "-p",
    "package_name",
    default="graphql",
    show_default=True,
    help="Go package name of the generated file.",
)
@click.option(
    "--scalar",
    "scalars",
    multiple=True,
    metavar="NAME=TYPE",
    callback=_parse_scalar_options,
    help="Map a scalar to a Go type, e.g. DateTime=time.Time. Repeatable.",
)
@click.option(
    "--template-dir",
    "-t",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with templates overriding the built-in ones.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(schema: str, output: str, package_name: str, scalars: dict, template_dir: str | None, verbose: bool):
    """Generate Go code from a GraphQL schema.

    Examples:

        gql-gogen generate --schema ./schema.json --output ./graphql/schema.go

        gql-gogen generate -s ./schema -o ./api/types.go -p api --scalar DateTime=time.Time
    """
    _configure_logging(verbose)
    schema_path = Path(schema).resolve()
    output_path = Path(output).resolve()

    try:
        config = GenerationConfig(
            package_name=package_name,
            scalars=default_registry().merge(scalars),
            template_dir=template_dir,
        )
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="'--package'") from e

    if verbose:
        click.echo(f"Schema: {schema_path}")
        click.echo(f"Output: {output_path}")

    click.echo("Loading schema...")
    try:
        parsed = load_schema(schema_path)
    except CodegenError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        server = parsed.server
        click.echo(f"  Enums: {len(server.enums)}")
        click.echo(f"  Unions: {len(server.unions)}")
        click.echo(f"  Objects: {len(server.objects)}")
        click.echo(f"  Inputs: {len(server.inputs)}")
        click.echo(f"  Scalars: {len(server.scalars)}")

    click.echo("Generating code...")
    result = CodeGenerator(parsed, str(output_path), config).generate()

    if not result.ok:
        for failure in result.failures:
            click.echo(f"  {failure}", err=True)
        raise click.ClickException(
            f"{len(result.failures)} definition(s) could not be generated; "
            f"the others were written to {output_path}"
        )
    click.echo(f"Done! Generated {len(result.declarations)} declarations in {output_path}")


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to a GraphQL SDL file or a directory of SDL files.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="Output file for the schema JSON document.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def parse(schema: str, output: str, verbose: bool):
    """Convert GraphQL SDL into a schema JSON document.

    The document can be fed back to the generate command.

    Example:

        gql-gogen parse -s ./schema -o ./schema.json
    """
    _configure_logging(verbose)
    output_path = Path(output).resolve()

    click.echo("Parsing schema...")
    try:
        document = SchemaParser(schema).parse_document()
        decode_schema(document)
    except CodegenError as e:
        raise click.ClickException(str(e)) from e

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(document, f, indent=2)
        f.write("\n")
    click.echo(f"Done! Wrote schema document to {output_path}")


if __name__ == "__main__":
    main()
