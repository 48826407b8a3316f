"""Core modules for the GraphQL text transform middleware."""

from .composer import SchemaComposer, SchemaComposerError
from .config import TransformConfig
from .ir import (
    IRArgument,
    IRDeferred,
    IREnum,
    IREnumValue,
    IRField,
    IRInputType,
    IRInterface,
    IRList,
    IRNonNull,
    IRObjectType,
    IRScalar,
    IRUnion,
)
from .middleware import (
    TextTransformResolver,
    default_resolver,
    inject_args,
    inject_string_transform_middleware,
    inject_text_transform_enum,
    maybe_inject_transform,
)
from .parser import SchemaParser
from .schema import load_schema, make_executable_schema
from .transforms import (
    InvalidArgument,
    TextTransform,
    base_transform,
    build_transform,
    to_title_case,
)

__all__ = [
    # IR types
    "IRArgument",
    "IRDeferred",
    "IREnum",
    "IREnumValue",
    "IRField",
    "IRInputType",
    "IRInterface",
    "IRList",
    "IRNonNull",
    "IRObjectType",
    "IRScalar",
    "IRUnion",
    # Composer
    "SchemaComposer",
    "SchemaComposerError",
    # Parser
    "SchemaParser",
    # Config
    "TransformConfig",
    # Transforms
    "InvalidArgument",
    "TextTransform",
    "base_transform",
    "build_transform",
    "to_title_case",
    # Middleware
    "TextTransformResolver",
    "default_resolver",
    "inject_args",
    "inject_string_transform_middleware",
    "inject_text_transform_enum",
    "maybe_inject_transform",
    # Schema
    "load_schema",
    "make_executable_schema",
]
