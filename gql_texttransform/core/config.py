"""Configuration for the text transform middleware."""

import re

from pydantic import BaseModel, ConfigDict, field_validator

GRAPHQL_NAME = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


class TransformConfig(BaseModel):
    """Names used when augmenting a schema.

    Example:
        config = TransformConfig(argument_name="case")
        inject_string_transform_middleware(composer, config)
    """

    model_config = ConfigDict(frozen=True)

    enum_name: str = "TextTransform"
    argument_name: str = "textTransform"
    argument_description: str = "Transforms string results into different forms"
    # Scalars whose values are treated as text
    text_types: tuple[str, ...] = ("String",)

    @field_validator("enum_name", "argument_name")
    @classmethod
    def _check_graphql_name(cls, value: str) -> str:
        if not GRAPHQL_NAME.match(value) or value.startswith("__"):
            raise ValueError(f"'{value}' is not a valid GraphQL name")
        return value

    @field_validator("text_types")
    @classmethod
    def _check_text_types(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("At least one text type is required")
        for name in value:
            if not GRAPHQL_NAME.match(name):
                raise ValueError(f"'{name}' is not a valid GraphQL name")
        return value


DEFAULT_CONFIG = TransformConfig()
