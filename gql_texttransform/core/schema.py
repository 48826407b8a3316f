"""Build executable schemas with the text transform middleware applied."""

from collections.abc import Mapping
from typing import Any, Callable

from graphql import GraphQLSchema

from .composer import SchemaComposer
from .config import TransformConfig
from .middleware import inject_string_transform_middleware
from .parser import SchemaParser

Resolvers = Mapping[str, Mapping[str, Callable[..., Any]]]


def _finish(composer: SchemaComposer, resolvers: Resolvers | None, config: TransformConfig | None) -> GraphQLSchema:
    if resolvers:
        composer.bind_resolvers(resolvers)
    inject_string_transform_middleware(composer, config)
    return composer.build_schema()


def make_executable_schema(
    type_defs: str,
    resolvers: Resolvers | None = None,
    config: TransformConfig | None = None,
) -> GraphQLSchema:
    """Build a schema from SDL text and a resolver map.

    Example:
        schema = make_executable_schema(
            "type Query { hello: String }",
            {"Query": {"hello": lambda obj, info: "hello world"}},
        )
    """
    composer = SchemaComposer()
    composer.add_type_defs(type_defs)
    return _finish(composer, resolvers, config)


def load_schema(
    schema_path: str,
    resolvers: Resolvers | None = None,
    config: TransformConfig | None = None,
) -> GraphQLSchema:
    """Build a schema from a schema file or directory and a resolver map."""
    composer = SchemaParser(schema_path).parse_all()
    return _finish(composer, resolvers, config)
