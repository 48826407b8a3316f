"""GraphQL schema parser using graphql-core.

Parses .graphql/.graphqls files (or SDL text) into a SchemaComposer.
"""

import logging
import os

from graphql import (
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    GraphQLDeprecatedDirective,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    TypeNode,
    UnionTypeDefinitionNode,
    Undefined,
    parse,
)
from graphql.execution.values import get_directive_values

from .composer import SchemaComposer, SchemaComposerError
from .ir import (
    IRArgument,
    IREnum,
    IREnumValue,
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

SCHEMA_FILE_EXTENSIONS = (".graphql", ".graphqls")


def _description(node) -> str | None:
    return node.description.value if node.description else None


def _default_value(node):
    return node.default_value if node.default_value is not None else Undefined


def _deprecation_reason(node) -> str | None:
    deprecated = get_directive_values(GraphQLDeprecatedDirective, node)
    return deprecated["reason"] if deprecated else None


class SchemaParser:
    """Parses GraphQL SDL into a SchemaComposer."""

    def __init__(self, schema_path: str | None = None, composer: SchemaComposer | None = None):
        """Initialize a parser with a path to a schema file or directory."""
        self.schema_path = schema_path
        self.composer = composer if composer is not None else SchemaComposer()
        self.current_file = ""
        # Types created by "extend type" and not yet defined
        self._extension_only: set[str] = set()

    def parse_all(self) -> SchemaComposer:
        """Parse all schema files and return the populated composer."""
        if self.schema_path is None:
            raise SchemaComposerError("No schema path given")
        schema_files = self._collect_schema_files()
        if not schema_files:
            raise SchemaComposerError(f"No schema files found at {self.schema_path}")

        for file_path in schema_files:
            self.current_file = os.path.basename(file_path)
            with open(file_path) as f:
                content = f.read()
            try:
                self.parse_sdl(content)
            except Exception:
                logger.error("Error parsing %s", self.current_file)
                raise
        return self.composer

    def _collect_schema_files(self) -> list[str]:
        """Collect all schema files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            if self.schema_path.endswith(SCHEMA_FILE_EXTENSIONS):
                files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_FILE_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)

    def parse_sdl(self, content: str) -> list[IRNamedType]:
        """Parse SDL text and register its definitions.

        Returns:
            The named types registered by this document (extensions of
            existing types are merged and not returned)
        """
        return self.parse_document(parse(content))

    def parse_document(self, document: DocumentNode) -> list[IRNamedType]:
        """Register the definitions of an already parsed SDL document."""
        added = []
        for definition in document.definitions:
            if isinstance(definition, ScalarTypeDefinitionNode):
                added.append(self._process_scalar(definition))
            elif isinstance(definition, EnumTypeDefinitionNode):
                added.append(self._process_enum(definition))
            elif isinstance(definition, InterfaceTypeDefinitionNode):
                added.append(self._process_interface(definition))
            elif isinstance(definition, ObjectTypeDefinitionNode):
                ir_type = self._process_object_type(definition)
                if ir_type is not None:
                    added.append(ir_type)
            elif isinstance(definition, ObjectTypeExtensionNode):
                ir_type = self._process_object_extension(definition)
                if ir_type is not None:
                    added.append(ir_type)
            elif isinstance(definition, UnionTypeDefinitionNode):
                added.append(self._process_union(definition))
            elif isinstance(definition, InputObjectTypeDefinitionNode):
                added.append(self._process_input_type(definition))
            elif isinstance(definition, SchemaDefinitionNode):
                self._process_schema_definition(definition)
            elif isinstance(definition, DirectiveDefinitionNode):
                logger.warning(
                    "Ignoring directive definition @%s in %s",
                    definition.name.value,
                    self.current_file or "<sdl>",
                )
            else:
                raise SchemaComposerError(
                    f"Unsupported definition {definition.kind} in {self.current_file or '<sdl>'}"
                )
        return added

    def _process_scalar(self, node: ScalarTypeDefinitionNode) -> IRScalar:
        return self.composer.add(
            IRScalar(name=node.name.value, description=_description(node))
        )

    def _process_enum(self, node: EnumTypeDefinitionNode) -> IREnum:
        values = [
            IREnumValue(
                name=v.name.value,
                description=_description(v),
                deprecation_reason=_deprecation_reason(v),
            )
            for v in node.values or ()
        ]
        return self.composer.add(
            IREnum(name=node.name.value, values=values, description=_description(node))
        )

    def _process_interface(self, node: InterfaceTypeDefinitionNode) -> IRInterface:
        return self.composer.add(
            IRInterface(
                name=node.name.value,
                fields=self._process_fields(node.fields or ()),
                interfaces=[i.name.value for i in node.interfaces or ()],
                description=_description(node),
            )
        )

    def _process_object_type(self, node: ObjectTypeDefinitionNode) -> IRObjectType | None:
        name = node.name.value
        fields = self._process_fields(node.fields or ())
        interfaces = [i.name.value for i in node.interfaces or ()]

        # The type may already exist from an earlier 'extend type'
        if name in self._extension_only:
            self._extension_only.discard(name)
            existing = self.composer.get(name)
            duplicates = sorted(fields.keys() & existing.fields.keys())
            if duplicates:
                raise SchemaComposerError(f"Field '{name}.{duplicates[0]}' already exists")
            # Merge: base fields first, keep extension fields
            existing.fields = {**fields, **existing.fields}
            existing.interfaces = interfaces + [
                i for i in existing.interfaces if i not in interfaces
            ]
            if node.description:
                existing.description = node.description.value
            return None

        return self.composer.add(
            IRObjectType(
                name=name,
                fields=fields,
                interfaces=interfaces,
                description=_description(node),
            )
        )

    def _process_object_extension(self, node: ObjectTypeExtensionNode) -> IRObjectType | None:
        """Merge 'extend type' fields into the existing type definition."""
        name = node.name.value
        extension_fields = self._process_fields(node.fields or ())
        interfaces = [i.name.value for i in node.interfaces or ()]

        existing = self.composer.types.get(name)
        if existing is None:
            # Type doesn't exist yet, create it
            self._extension_only.add(name)
            return self.composer.add(
                IRObjectType(name=name, fields=extension_fields, interfaces=interfaces)
            )
        if not isinstance(existing, IRObjectType):
            raise SchemaComposerError(f"Cannot extend '{name}': not an object type")

        for field_name, ir_field in extension_fields.items():
            if field_name in existing.fields:
                raise SchemaComposerError(f"Field '{name}.{field_name}' already exists")
            existing.fields[field_name] = ir_field
        existing.interfaces.extend(i for i in interfaces if i not in existing.interfaces)
        return None

    def _process_union(self, node: UnionTypeDefinitionNode) -> IRUnion:
        return self.composer.add(
            IRUnion(
                name=node.name.value,
                types=[t.name.value for t in node.types or ()],
                description=_description(node),
            )
        )

    def _process_input_type(self, node: InputObjectTypeDefinitionNode) -> IRInputType:
        fields = {}
        for field_node in node.fields or ():
            fields[field_node.name.value] = IRField(
                name=field_node.name.value,
                type=self._type_expr(field_node.type),
                description=_description(field_node),
                deprecation_reason=_deprecation_reason(field_node),
                default_value=_default_value(field_node),
            )
        return self.composer.add(
            IRInputType(name=node.name.value, fields=fields, description=_description(node))
        )

    def _process_schema_definition(self, node: SchemaDefinitionNode):
        for operation_type in node.operation_types or ():
            self.composer.root_types[operation_type.operation.value] = (
                operation_type.type.name.value
            )

    def _process_fields(self, field_nodes) -> dict[str, IRField]:
        """Process field definitions into an IRField mapping."""
        fields = {}
        for node in field_nodes:
            arguments = {}
            for arg_node in node.arguments or ():
                arguments[arg_node.name.value] = IRArgument(
                    name=arg_node.name.value,
                    type=self._type_expr(arg_node.type),
                    default_value=_default_value(arg_node),
                    description=_description(arg_node),
                )
            fields[node.name.value] = IRField(
                name=node.name.value,
                type=self._type_expr(node.type),
                arguments=arguments,
                description=_description(node),
                deprecation_reason=_deprecation_reason(node),
            )
        return fields

    def _type_expr(self, type_node: TypeNode) -> IRTypeExpr:
        """Convert a type node into a type expression.

        Named references become deferred so types can be declared in any
        order, including self references.
        """
        if isinstance(type_node, NonNullTypeNode):
            return IRNonNull(self._type_expr(type_node.type))
        if isinstance(type_node, ListTypeNode):
            return IRList(self._type_expr(type_node.type))
        assert isinstance(type_node, NamedTypeNode), f"Expected NamedTypeNode, got {type(type_node)}"
        return self.composer.reference(type_node.name.value)
