"""Intermediate Representation (IR) for a mutable GraphQL schema graph.

This module defines dataclasses that represent GraphQL schema constructs
before they are frozen into graphql-core types. Field output types are
expressed as a small tagged union:

    IRNamedType | IRNonNull(inner) | IRList(inner) | IRDeferred(thunk)

IRDeferred is resolved lazily so that forward and circular references
between types can be declared in any order.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Union

from graphql import Undefined


@dataclass
class IRScalar:
    """Represents a GraphQL scalar type."""
    name: str
    description: str | None = None


@dataclass
class IREnumValue:
    """Represents a single value in a GraphQL enum."""
    name: str
    # Internal value handed to resolvers; defaults to the name
    value: Any = None
    description: str | None = None
    deprecation_reason: str | None = None

    def __post_init__(self):
        if self.value is None:
            self.value = self.name


@dataclass
class IREnum:
    """Represents a GraphQL enum type."""
    name: str
    values: list[IREnumValue]
    description: str | None = None


@dataclass
class IRArgument:
    """Represents an argument to a field."""
    name: str
    type: "IRTypeExpr"
    # Literal default from SDL (a graphql ValueNode) or a Python value
    default_value: Any = Undefined
    description: str | None = None


@dataclass
class IRField:
    """Represents a field on an object, interface or input type.

    ``resolve`` is None when the field reads the same-named property off
    its parent value.
    """
    name: str
    type: "IRTypeExpr"
    arguments: dict[str, IRArgument] = field(default_factory=dict)
    resolve: Callable[..., Any] | None = None
    description: str | None = None
    deprecation_reason: str | None = None
    # Input fields only
    default_value: Any = Undefined


@dataclass
class IRObjectType:
    """Represents a concrete GraphQL object type."""
    name: str
    fields: dict[str, IRField] = field(default_factory=dict)
    interfaces: list[str] = field(default_factory=list)
    description: str | None = None
    is_type_of: Callable[..., Any] | None = None


@dataclass
class IRInterface:
    """Represents a GraphQL interface type."""
    name: str
    fields: dict[str, IRField] = field(default_factory=dict)
    interfaces: list[str] = field(default_factory=list)
    description: str | None = None
    resolve_type: Callable[..., Any] | None = None


@dataclass
class IRUnion:
    """Represents a GraphQL union type."""
    name: str
    types: list[str] = field(default_factory=list)
    description: str | None = None
    resolve_type: Callable[..., Any] | None = None


@dataclass
class IRInputType:
    """Represents a GraphQL input object type."""
    name: str
    fields: dict[str, IRField] = field(default_factory=dict)
    description: str | None = None


IRNamedType = Union[IRScalar, IREnum, IRObjectType, IRInterface, IRUnion, IRInputType]


@dataclass(eq=False)
class IRNonNull:
    """Non-null modifier around an inner type expression."""
    of_type: "IRTypeExpr"


@dataclass(eq=False)
class IRList:
    """List modifier around an inner type expression."""
    of_type: "IRTypeExpr"


@dataclass(eq=False)
class IRDeferred:
    """Lazily resolved type reference.

    The thunk is only called through ``resolve()``, never at declaration
    time, so the referenced type may be registered later.
    """
    thunk: Callable[[], "IRTypeExpr"]
    name: str | None = None

    def resolve(self) -> "IRTypeExpr":
        return self.thunk()


IRTypeExpr = Union[IRNamedType, IRNonNull, IRList, IRDeferred]

NAMED_TYPES = (IRScalar, IREnum, IRObjectType, IRInterface, IRUnion, IRInputType)


def type_expr_to_string(type_expr: IRTypeExpr) -> str:
    """Render a type expression in SDL notation, e.g. ``[String!]!``."""
    if isinstance(type_expr, IRNonNull):
        return f"{type_expr_to_string(type_expr.of_type)}!"
    if isinstance(type_expr, IRList):
        return f"[{type_expr_to_string(type_expr.of_type)}]"
    if isinstance(type_expr, IRDeferred):
        # Do not force the thunk just to print a name
        if type_expr.name:
            return type_expr.name
        return type_expr_to_string(type_expr.resolve())
    return type_expr.name
