"""Command-line interface for gql-texttransform."""

import asyncio
import json
import logging
from pathlib import Path

import click
from graphql import GraphQLError, graphql, print_schema
from pydantic import ValidationError

from .core.composer import SchemaComposerError
from .core.config import TransformConfig
from .core.middleware import inject_string_transform_middleware
from .core.parser import SchemaParser


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _make_config(enum_name: str, argument_name: str) -> TransformConfig:
    try:
        return TransformConfig(enum_name=enum_name, argument_name=argument_name)
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e


def _build(schema: str, config: TransformConfig, verbose: bool):
    """Parse, augment and build the schema, reporting errors for the terminal."""
    schema_path = Path(schema).resolve()
    if verbose:
        click.echo(f"Schema: {schema_path}", err=True)
    try:
        composer = SchemaParser(str(schema_path)).parse_all()
        augmented = inject_string_transform_middleware(composer, config)
        built = composer.build_schema()
    except (SchemaComposerError, GraphQLError) as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"  Types: {len(composer.types)}", err=True)
        click.echo(f"  Augmented fields: {len(augmented)}", err=True)
        for coordinate in augmented:
            click.echo(f"    {coordinate}", err=True)
    return built


schema_option = click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to a GraphQL schema file or a directory of .graphql/.graphqls files.",
)
enum_name_option = click.option(
    "--enum-name",
    default="TextTransform",
    show_default=True,
    help="Name of the injected enum type.",
)
argument_name_option = click.option(
    "--argument-name",
    default="textTransform",
    show_default=True,
    help="Name of the injected field argument.",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)


@click.group()
@click.version_option(package_name="gql-texttransform")
def main():
    """Add text transform arguments to GraphQL string fields.

    Every field whose type ends in String gains an optional
    textTransform argument (UPPERCASE, lowercase, TitleCase).
    """
    pass


@main.command("print-schema")
@schema_option
@enum_name_option
@argument_name_option
@verbose_option
def print_schema_command(schema: str, enum_name: str, argument_name: str, verbose: bool):
    """Print the augmented schema as SDL.

    Examples:

        gql-texttransform print-schema --schema ./schema.graphql

        gql-texttransform print-schema -s ./schema --argument-name case
    """
    _configure_logging(verbose)
    config = _make_config(enum_name, argument_name)
    click.echo(print_schema(_build(schema, config, verbose)))


@main.command()
@schema_option
@click.option(
    "--query",
    "-q",
    "query_text",
    required=True,
    help="Query text, or @path to read it from a file.",
)
@click.option(
    "--root-value",
    "-r",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file used as the root value; fields read same-named keys.",
)
@click.option(
    "--variables",
    default=None,
    help="Query variables as a JSON object.",
)
@enum_name_option
@argument_name_option
@verbose_option
@click.pass_context
def query(
    ctx: click.Context,
    schema: str,
    query_text: str,
    root_value: str | None,
    variables: str | None,
    enum_name: str,
    argument_name: str,
    verbose: bool,
):
    """Execute a query against the augmented schema.

    Fields without resolvers read same-named keys from the root value,
    so a JSON document is enough to try transforms out.

    Examples:

        gql-texttransform query -s schema.graphql -r data.json \\
            -q '{ user { name(textTransform: UPPERCASE) } }'
    """
    _configure_logging(verbose)
    config = _make_config(enum_name, argument_name)
    built = _build(schema, config, verbose)

    if query_text.startswith("@"):
        query_text = Path(query_text[1:]).read_text()

    root = None
    if root_value:
        with open(root_value) as f:
            root = json.load(f)

    variable_values = None
    if variables:
        try:
            variable_values = json.loads(variables)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--variables") from e

    result = asyncio.run(
        graphql(built, query_text, root_value=root, variable_values=variable_values)
    )
    click.echo(json.dumps(result.formatted, indent=2))
    if result.errors:
        ctx.exit(1)


if __name__ == "__main__":
    main()
