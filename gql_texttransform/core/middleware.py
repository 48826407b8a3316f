"""Middleware that adds a ``textTransform`` argument to text fields.

Every field of every object type whose output type terminates in String
(through any mix of non-null, list and deferred wrappers) gets an optional
``textTransform: TextTransform`` argument, and its resolver is replaced by a
TextTransformResolver that applies the transform to the resolved value.

Example usage:
    composer = SchemaParser("schema.graphql").parse_all()
    inject_string_transform_middleware(composer)
    schema = composer.build_schema()

    # query { user { name(textTransform: UPPERCASE) } }
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from graphql import default_field_resolver
from graphql.pyutils import is_awaitable

from .composer import SchemaComposer, SchemaComposerError
from .config import DEFAULT_CONFIG, TransformConfig
from .ir import IRArgument, IREnum, IREnumValue, IRField, type_expr_to_string
from .transforms import TextTransform, TransformFn, build_transform

logger = logging.getLogger(__name__)

PRIMITIVES = (str, bytes, int, float, bool)


def default_resolver(field_name: str) -> Callable[..., Any]:
    """Resolver reading ``field_name`` off a structured parent value."""

    def resolve(source, info, **args):
        if source is None or isinstance(source, PRIMITIVES):
            return None
        return default_field_resolver(source, info, **args)

    resolve.__name__ = f"resolve_{field_name}"
    return resolve


@dataclass(frozen=True)
class TextTransformResolver:
    """Replacement resolver composed of the original resolver and a transform.

    The transform argument is removed before the original resolver is
    called, so it sees exactly the arguments it saw before augmentation.
    """
    original: Callable[..., Any]
    transform: TransformFn
    argument_name: str

    def __call__(self, source, info, **args):
        mode = args.pop(self.argument_name, None)
        value = self.original(source, info, **args)
        if is_awaitable(value):
            return self._transform_awaited(value, mode)
        return self.transform(value, mode)

    async def _transform_awaited(self, pending, mode):
        return self.transform(await pending, mode)


def inject_text_transform_enum(composer: SchemaComposer, config: TransformConfig = DEFAULT_CONFIG) -> IREnum:
    """Register the TextTransform enum.

    Raises:
        SchemaComposerError: If the enum name is already registered
    """
    return composer.add(
        IREnum(
            name=config.enum_name,
            values=[IREnumValue(name=mode.value, value=mode) for mode in TextTransform],
            description="Text formatting applied to string results",
        )
    )


def inject_args(field: IRField, composer: SchemaComposer, config: TransformConfig = DEFAULT_CONFIG):
    """Add the optional transform argument to a field."""
    field.arguments[config.argument_name] = IRArgument(
        name=config.argument_name,
        type=composer.get_enum(config.enum_name),
        description=config.argument_description,
    )


def maybe_inject_transform(
    field_name: str,
    field: IRField,
    composer: SchemaComposer,
    config: TransformConfig = DEFAULT_CONFIG,
) -> bool:
    """Augment one field if its output type terminates in text.

    Returns:
        True if the field was augmented, False if it was left untouched

    Raises:
        SchemaComposerError: If the field already declares an argument with
            the transform argument's name
    """
    if isinstance(field.resolve, TextTransformResolver):
        return False

    transform = build_transform(field.type, config.text_types)
    if transform is None:
        return False

    if config.argument_name in field.arguments:
        raise SchemaComposerError(
            f"Field '{field_name}' already has an argument named '{config.argument_name}'"
        )
    inject_args(field, composer, config)

    original = field.resolve or default_resolver(field_name)
    field.resolve = TextTransformResolver(
        original=original,
        transform=transform,
        argument_name=config.argument_name,
    )
    return True


def inject_string_transform_middleware(
    composer: SchemaComposer,
    config: TransformConfig | None = None,
) -> list[str]:
    """Register the enum and augment every text field on object types.

    Interfaces, unions, enums, scalars and input types are not visited.

    Returns:
        Coordinates ("Type.field") of the augmented fields
    """
    if config is None:
        config = DEFAULT_CONFIG
    inject_text_transform_enum(composer, config)

    augmented = []
    for object_type in composer.object_types():
        for field_name, field in object_type.fields.items():
            if maybe_inject_transform(field_name, field, composer, config):
                coordinate = f"{object_type.name}.{field_name}"
                logger.debug(
                    "Added %s to %s: %s",
                    config.argument_name,
                    coordinate,
                    type_expr_to_string(field.type),
                )
                augmented.append(coordinate)

    logger.info("Text transform added to %d field(s)", len(augmented))
    return augmented
