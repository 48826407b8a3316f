"""Tests for the SDL schema parser."""

import pytest
from graphql import GraphQLSyntaxError

from gql_texttransform.core.composer import SchemaComposerError
from gql_texttransform.core.ir import (
    IRDeferred,
    IRInputType,
    IRList,
    IRNonNull,
    IRObjectType,
    IRUnion,
    type_expr_to_string,
)
from gql_texttransform.core.parser import SchemaParser
from gql_texttransform.core.schema import load_schema


@pytest.fixture
def schema_dir(tmp_path):
    """A directory of schema files split across modules."""
    (tmp_path / "query.graphql").write_text(
        """
        type Query {
          book(id: ID!): Book
          search(term: String!, limit: Int = 5): [SearchResult!]!
        }
        """
    )
    nested = tmp_path / "library"
    nested.mkdir()
    (nested / "book.graphqls").write_text(
        '''
        """A printed book"""
        type Book {
          title: String!
          isbn: String @deprecated(reason: "Use identifiers")
          authors: [Author!]!
        }

        type Author {
          name: String
          books: [Book]
        }

        union SearchResult = Book | Author
        '''
    )
    (tmp_path / "notes.txt").write_text("not a schema")
    return tmp_path


class TestSchemaParser:
    """Tests for SchemaParser."""

    def test_collects_schema_files(self, schema_dir):
        parser = SchemaParser(str(schema_dir))
        files = parser._collect_schema_files()
        assert [f.rsplit("/", 1)[-1] for f in files] == ["book.graphqls", "query.graphql"]

    def test_parse_all(self, schema_dir):
        composer = SchemaParser(str(schema_dir)).parse_all()
        book = composer.get("Book")
        assert isinstance(book, IRObjectType)
        assert book.description == "A printed book"
        assert list(book.fields) == ["title", "isbn", "authors"]
        assert isinstance(composer.get("SearchResult"), IRUnion)
        assert composer.get("SearchResult").types == ["Book", "Author"]

    def test_single_file(self, schema_dir):
        composer = SchemaParser(str(schema_dir / "query.graphql")).parse_all()
        assert composer.has("Query")
        assert not composer.has("Book")

    def test_no_schema_files(self, tmp_path):
        with pytest.raises(SchemaComposerError, match="No schema files"):
            SchemaParser(str(tmp_path)).parse_all()

    def test_type_expressions(self, schema_dir):
        composer = SchemaParser(str(schema_dir)).parse_all()
        search = composer.get("Query").fields["search"]
        assert isinstance(search.type, IRNonNull)
        assert isinstance(search.type.of_type, IRList)
        assert isinstance(search.type.of_type.of_type.of_type, IRDeferred)
        assert type_expr_to_string(search.type) == "[SearchResult!]!"
        assert list(search.arguments) == ["term", "limit"]

    def test_named_references_are_deferred(self, schema_dir):
        composer = SchemaParser(str(schema_dir)).parse_all()
        title = composer.get("Book").fields["title"]
        assert title.type.of_type.resolve() is composer.get("String")

    def test_deprecation_reason(self, schema_dir):
        composer = SchemaParser(str(schema_dir)).parse_all()
        assert composer.get("Book").fields["isbn"].deprecation_reason == "Use identifiers"
        assert composer.get("Book").fields["title"].deprecation_reason is None

    def test_extension_merges_fields(self):
        parser = SchemaParser()
        parser.parse_sdl(
            """
            extend type Query { late: String }
            type Query { early: Int }
            extend type Query { later: Boolean }
            """
        )
        assert list(parser.composer.get("Query").fields) == ["early", "late", "later"]

    def test_extension_duplicate_field(self):
        parser = SchemaParser()
        with pytest.raises(SchemaComposerError, match="already exists"):
            parser.parse_sdl("type Query { a: String } extend type Query { a: String }")

    def test_duplicate_type_definition(self):
        parser = SchemaParser()
        with pytest.raises(SchemaComposerError, match="Type 'Query' is already registered"):
            parser.parse_sdl("type Query { a: String } type Query { b: Int }")
        assert list(parser.composer.get("Query").fields) == ["a"]

    def test_definition_after_extension_rejects_duplicate_field(self):
        parser = SchemaParser()
        with pytest.raises(SchemaComposerError, match="Field 'Query.a' already exists"):
            parser.parse_sdl("extend type Query { a: String } type Query { a: Int }")

    def test_only_one_definition_merges_into_extension(self):
        parser = SchemaParser()
        with pytest.raises(SchemaComposerError, match="already registered"):
            parser.parse_sdl(
                """
                extend type Query { late: String }
                type Query { early: Int }
                type Query { again: Int }
                """
            )

    def test_types_without_optional_clauses(self):
        parser = SchemaParser()
        parser.parse_sdl(
            """
            type Query { name: String }
            type Empty
            interface Node
            enum Nothing
            union Nobody
            input NoFilter
            """
        )
        query = parser.composer.get("Query")
        assert query.interfaces == []
        assert list(query.fields) == ["name"]
        assert parser.composer.get("Empty").fields == {}
        assert parser.composer.get("Node").fields == {}
        assert parser.composer.get("Nothing").values == []
        assert parser.composer.get("Nobody").types == []
        assert parser.composer.get("NoFilter").fields == {}

    def test_input_types(self):
        parser = SchemaParser()
        parser.parse_sdl("input BookFilter { title: String, limit: Int = 10 }")
        book_filter = parser.composer.get("BookFilter")
        assert isinstance(book_filter, IRInputType)
        assert list(book_filter.fields) == ["title", "limit"]

    def test_syntax_error(self):
        with pytest.raises(GraphQLSyntaxError):
            SchemaParser().parse_sdl("type Query {")


class TestLoadSchema:
    """Tests for load_schema."""

    def test_loads_and_augments(self, schema_dir):
        schema = load_schema(str(schema_dir))
        assert "textTransform" in schema.get_type("Book").fields["title"].args
        assert "textTransform" in schema.get_type("Author").fields["name"].args
        assert "textTransform" not in schema.get_type("Book").fields["authors"].args
        assert schema.get_type("TextTransform") is not None
