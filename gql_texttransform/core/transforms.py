"""Text transforms and the type unwrapper that builds them.

``build_transform`` walks a field's output type once, at rewrite time, and
returns a function shaped like the type's nesting:

    String       -> base_transform
    String!      -> base_transform (non-null carries no semantics)
    [String]     -> element-wise base_transform
    [[String!]]! -> element-wise (element-wise base_transform)

If the terminal type is not text the result is None and the field is left
alone.
"""

import re
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, Callable

from graphql import GraphQLError

from .composer import SchemaComposerError
from .ir import IRDeferred, IRList, IRNonNull, IRScalar, IRTypeExpr


class TextTransform(Enum):
    """Formatting modes; the values are the GraphQL enum value names."""
    UPPERCASE = "UPPERCASE"
    LOWERCASE = "lowercase"
    TITLE_CASE = "TitleCase"


TransformFn = Callable[[Any, "TextTransform | str | None"], Any]


class InvalidArgument(GraphQLError):
    """Raised when a transform mode outside TextTransform reaches a resolver."""

    def __init__(self, message: str):
        super().__init__(message, extensions={"code": "BAD_USER_INPUT"})


_WORD = re.compile(r"\w+")


def to_title_case(value: str) -> str:
    """Capitalize each run of word characters, lower-casing the rest of it."""
    return _WORD.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), value)


def base_transform(value: Any, mode: TextTransform | str | None = None) -> Any:
    """Apply a transform mode to a single text value.

    Non-text values and a missing mode pass through unchanged.

    Raises:
        InvalidArgument: If mode is not one of the TextTransform values
    """
    if not mode or not isinstance(value, str):
        return value
    try:
        mode = TextTransform(mode)
    except ValueError:
        raise InvalidArgument(f"Value out of range: {mode!r}") from None

    if mode is TextTransform.UPPERCASE:
        return value.upper()
    if mode is TextTransform.LOWERCASE:
        return value.lower()
    return to_title_case(value)


def _is_list_value(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping))


def build_transform(
    output_type: IRTypeExpr,
    text_types: Iterable[str] = ("String",),
) -> TransformFn | None:
    """Build the transform for an output type, or None if it is not text.

    Args:
        output_type: The field's declared output type expression
        text_types: Scalar names treated as text

    Raises:
        SchemaComposerError: If a deferred reference resolves back to itself
    """
    return _build(output_type, frozenset(text_types), ())


def _build(
    output_type: IRTypeExpr,
    text_types: frozenset[str],
    seen: tuple[IRDeferred, ...],
) -> TransformFn | None:
    if isinstance(output_type, IRScalar) and output_type.name in text_types:
        return base_transform

    if isinstance(output_type, IRNonNull):
        return _build(output_type.of_type, text_types, seen)

    if isinstance(output_type, IRList):
        # Built here, once, and captured by the closure below
        subtransform = _build(output_type.of_type, text_types, seen)
        if subtransform is None:
            return None

        def list_transform(value, mode=None):
            if not mode or not _is_list_value(value):
                return value
            return [subtransform(item, mode) for item in value]

        return list_transform

    if isinstance(output_type, IRDeferred):
        if any(ref is output_type for ref in seen):
            label = f"'{output_type.name}'" if output_type.name else repr(output_type)
            raise SchemaComposerError(f"Circular type reference {label}")
        return _build(output_type.resolve(), text_types, seen + (output_type,))

    # Object, interface, union, enum, input or non-text scalar
    return None
