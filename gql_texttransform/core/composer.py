"""Mutable schema graph and its conversion into an executable schema.

The composer keeps every named type as IR so it can be rewritten in place
(e.g. by the text transform middleware) before being frozen into
graphql-core types with ``build_schema()``.

Example usage:
    composer = SchemaComposer()
    composer.add_type_defs("type Query { hello: String }")
    composer.bind_resolvers({"Query": {"hello": lambda obj, info: "world"}})
    schema = composer.build_schema()
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable

from graphql import (
    GraphQLArgument,
    GraphQLBoolean,
    GraphQLEnumType,
    GraphQLEnumValue,
    GraphQLField,
    GraphQLFloat,
    GraphQLID,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInt,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLString,
    GraphQLUnionType,
    TypeDefinitionNode,
    Undefined,
    ValueNode,
    parse,
    validate_schema,
    value_from_ast,
)

from .ir import (
    NAMED_TYPES,
    IRDeferred,
    IREnum,
    IRField,
    IRInputType,
    IRInterface,
    IRList,
    IRNamedType,
    IRNonNull,
    IRObjectType,
    IRScalar,
    IRTypeExpr,
    IRUnion,
)

logger = logging.getLogger(__name__)

BUILTIN_SCALARS: dict[str, GraphQLScalarType] = {
    scalar.name: scalar
    for scalar in (GraphQLString, GraphQLInt, GraphQLFloat, GraphQLBoolean, GraphQLID)
}


class SchemaComposerError(Exception):
    """Raised when the schema graph is malformed or cannot be built."""


class SchemaComposer:
    """Holds a mutable GraphQL schema graph keyed by type name."""

    def __init__(self):
        self.types: dict[str, IRNamedType] = {}
        self.root_types: dict[str, str] = {
            "query": "Query",
            "mutation": "Mutation",
            "subscription": "Subscription",
        }
        for name, scalar in BUILTIN_SCALARS.items():
            self.types[name] = IRScalar(name=name, description=scalar.description)

    def add(self, definition: str | IRNamedType) -> IRNamedType:
        """Register one named type from SDL text or an IR object.

        Raises:
            SchemaComposerError: If the name is already registered, or the
                SDL does not contain exactly one type definition
        """
        if isinstance(definition, str):
            from .parser import SchemaParser

            document = parse(definition)
            definitions = document.definitions
            if len(definitions) != 1 or not isinstance(definitions[0], TypeDefinitionNode):
                raise SchemaComposerError(
                    f"Expected exactly one type definition, got {len(definitions)} definition(s)"
                )
            return SchemaParser(composer=self).parse_document(document)[0]

        if not isinstance(definition, NAMED_TYPES):
            raise SchemaComposerError(f"Cannot register {definition!r} as a named type")
        if definition.name in self.types:
            raise SchemaComposerError(f"Type '{definition.name}' is already registered")
        self.types[definition.name] = definition
        return definition

    def add_type_defs(self, type_defs: str) -> list[IRNamedType]:
        """Register every definition found in an SDL document."""
        from .parser import SchemaParser

        return SchemaParser(composer=self).parse_sdl(type_defs)

    def has(self, name: str) -> bool:
        return name in self.types

    def get(self, name: str) -> IRNamedType:
        """Look up a registered type by name."""
        try:
            return self.types[name]
        except KeyError:
            raise SchemaComposerError(f"Unknown type '{name}'") from None

    def get_enum(self, name: str) -> IREnum:
        """Look up a registered enum by name."""
        named = self.get(name)
        if not isinstance(named, IREnum):
            raise SchemaComposerError(f"Type '{name}' is not an enum")
        return named

    def reference(self, name: str) -> IRDeferred:
        """Return a deferred reference to a type that may not exist yet."""
        return IRDeferred(lambda: self.get(name), name=name)

    def object_types(self) -> list[IRObjectType]:
        """Return a snapshot of all concrete object types."""
        return [t for t in self.types.values() if isinstance(t, IRObjectType)]

    def bind_resolvers(self, resolvers: Mapping[str, Mapping[str, Callable[..., Any]]]):
        """Attach a resolver map of the form ``{"Type": {"field": fn}}``.

        ``__resolveType`` binds an interface/union type resolver and
        ``__isTypeOf`` binds an object type check.
        """
        for type_name, field_map in resolvers.items():
            named = self.get(type_name)
            for key, fn in field_map.items():
                if key == "__resolveType":
                    if not isinstance(named, (IRInterface, IRUnion)):
                        raise SchemaComposerError(
                            f"__resolveType given for '{type_name}', which is not abstract"
                        )
                    named.resolve_type = fn
                elif key == "__isTypeOf":
                    if not isinstance(named, IRObjectType):
                        raise SchemaComposerError(
                            f"__isTypeOf given for '{type_name}', which is not an object type"
                        )
                    named.is_type_of = fn
                else:
                    fields = getattr(named, "fields", None)
                    if not fields or key not in fields:
                        raise SchemaComposerError(
                            f"{type_name}.{key} defined in resolvers, but not in schema"
                        )
                    fields[key].resolve = fn
                    logger.debug("Bound resolver for %s.%s", type_name, key)

    def build_schema(self) -> GraphQLSchema:
        """Freeze the graph into a validated graphql-core schema.

        Raises:
            SchemaComposerError: If the graph does not form a valid schema
        """
        builder = _GraphQLTypeBuilder(self)
        roots = {
            operation: builder.named(self.get(name)) if self.has(name) else None
            for operation, name in self.root_types.items()
        }
        if roots["query"] is None:
            raise SchemaComposerError(f"Query root type '{self.root_types['query']}' is missing")

        try:
            schema = GraphQLSchema(
                query=roots["query"],
                mutation=roots["mutation"],
                subscription=roots["subscription"],
                types=[
                    builder.named(t) for name, t in self.types.items()
                    if name not in BUILTIN_SCALARS
                ],
            )
        except TypeError as e:
            raise SchemaComposerError(f"Invalid schema: {e}") from e

        errors = validate_schema(schema)
        if errors:
            messages = "; ".join(error.message for error in errors)
            raise SchemaComposerError(f"Invalid schema: {messages}")
        return schema


class _GraphQLTypeBuilder:
    """Converts IR types to graphql-core types, one instance per name."""

    def __init__(self, composer: SchemaComposer):
        self.composer = composer
        self._cache: dict[str, GraphQLNamedType] = {}

    def named(self, ir_type: IRNamedType) -> GraphQLNamedType:
        if ir_type.name not in self._cache:
            self._cache[ir_type.name] = self._make_named(ir_type)
        return self._cache[ir_type.name]

    def _make_named(self, ir_type: IRNamedType) -> GraphQLNamedType:
        if isinstance(ir_type, IRScalar):
            if ir_type.name in BUILTIN_SCALARS:
                return BUILTIN_SCALARS[ir_type.name]
            return GraphQLScalarType(ir_type.name, description=ir_type.description)

        if isinstance(ir_type, IREnum):
            return GraphQLEnumType(
                ir_type.name,
                {
                    v.name: GraphQLEnumValue(
                        v.value,
                        description=v.description,
                        deprecation_reason=v.deprecation_reason,
                    )
                    for v in ir_type.values
                },
                description=ir_type.description,
            )

        if isinstance(ir_type, IRObjectType):
            return GraphQLObjectType(
                ir_type.name,
                fields=lambda: self._fields(ir_type),
                interfaces=lambda: self._interfaces(ir_type.interfaces),
                is_type_of=ir_type.is_type_of,
                description=ir_type.description,
            )

        if isinstance(ir_type, IRInterface):
            return GraphQLInterfaceType(
                ir_type.name,
                fields=lambda: self._fields(ir_type),
                interfaces=lambda: self._interfaces(ir_type.interfaces),
                resolve_type=ir_type.resolve_type,
                description=ir_type.description,
            )

        if isinstance(ir_type, IRUnion):
            return GraphQLUnionType(
                ir_type.name,
                types=lambda: [self.named(self.composer.get(name)) for name in ir_type.types],
                resolve_type=ir_type.resolve_type,
                description=ir_type.description,
            )

        if isinstance(ir_type, IRInputType):
            return GraphQLInputObjectType(
                ir_type.name,
                fields=lambda: {
                    name: self._input_field(f) for name, f in ir_type.fields.items()
                },
                description=ir_type.description,
            )

        raise SchemaComposerError(f"Unsupported type definition {ir_type!r}")

    def _interfaces(self, names: list[str]) -> list[GraphQLInterfaceType]:
        return [self.named(self.composer.get(name)) for name in names]

    def _fields(self, ir_type: IRObjectType | IRInterface) -> dict[str, GraphQLField]:
        return {name: self._field(f) for name, f in ir_type.fields.items()}

    def _field(self, ir_field: IRField) -> GraphQLField:
        args = {}
        for name, arg in ir_field.arguments.items():
            arg_type = self.type_expr(arg.type)
            args[name] = GraphQLArgument(
                arg_type,
                default_value=self._default(arg.default_value, arg_type),
                description=arg.description,
            )
        return GraphQLField(
            self.type_expr(ir_field.type),
            args=args,
            resolve=ir_field.resolve,
            description=ir_field.description,
            deprecation_reason=ir_field.deprecation_reason,
        )

    def _input_field(self, ir_field: IRField) -> GraphQLInputField:
        field_type = self.type_expr(ir_field.type)
        return GraphQLInputField(
            field_type,
            default_value=self._default(ir_field.default_value, field_type),
            description=ir_field.description,
            deprecation_reason=ir_field.deprecation_reason,
        )

    @staticmethod
    def _default(default_value: Any, gql_type) -> Any:
        """Coerce an SDL literal default into its internal value."""
        if not isinstance(default_value, ValueNode):
            return default_value
        value = value_from_ast(default_value, gql_type)
        if value is Undefined:
            raise SchemaComposerError(f"Invalid default value for type {gql_type}")
        return value

    def type_expr(self, type_expr: IRTypeExpr):
        if isinstance(type_expr, IRNonNull):
            return GraphQLNonNull(self.type_expr(type_expr.of_type))
        if isinstance(type_expr, IRList):
            return GraphQLList(self.type_expr(type_expr.of_type))
        if isinstance(type_expr, IRDeferred):
            return self.type_expr(type_expr.resolve())
        return self.named(type_expr)
