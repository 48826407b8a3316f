"""Tests for text transforms and the type unwrapper."""

import pytest

from gql_texttransform.core.composer import SchemaComposerError
from gql_texttransform.core.ir import (
    IRDeferred,
    IREnum,
    IREnumValue,
    IRList,
    IRNonNull,
    IRObjectType,
    IRScalar,
)
from gql_texttransform.core.transforms import (
    InvalidArgument,
    TextTransform,
    base_transform,
    build_transform,
    to_title_case,
)

STRING = IRScalar(name="String")
INT = IRScalar(name="Int")


class TestBaseTransform:
    """Tests for base_transform."""

    def test_uppercase(self):
        assert base_transform("hello", TextTransform.UPPERCASE) == "HELLO"

    def test_lowercase(self):
        assert base_transform("HELLO", TextTransform.LOWERCASE) == "hello"

    def test_title_case(self):
        assert base_transform("the quick fox", TextTransform.TITLE_CASE) == "The Quick Fox"

    def test_accepts_enum_value_names(self):
        assert base_transform("hello", "UPPERCASE") == "HELLO"
        assert base_transform("HELLO", "lowercase") == "hello"
        assert base_transform("hello world", "TitleCase") == "Hello World"

    def test_no_mode_is_identity(self):
        assert base_transform("MiXeD") == "MiXeD"
        assert base_transform("MiXeD", None) == "MiXeD"

    def test_non_text_value_passes_through(self):
        assert base_transform(42, TextTransform.UPPERCASE) == 42
        assert base_transform(None, TextTransform.UPPERCASE) is None

    def test_out_of_range_mode_raises(self):
        value = "hello"
        with pytest.raises(InvalidArgument, match="Value out of range"):
            base_transform(value, "SHOUT")
        assert value == "hello"

    def test_invalid_argument_is_user_input_error(self):
        error = InvalidArgument("Value out of range: 'SHOUT'")
        assert error.message == "Value out of range: 'SHOUT'"
        assert error.extensions == {"code": "BAD_USER_INPUT"}


class TestToTitleCase:
    """Tests for to_title_case."""

    def test_lowers_rest_of_word(self):
        assert to_title_case("hELLO wORLD") == "Hello World"

    def test_word_runs_split_on_punctuation(self):
        assert to_title_case("foo-bar baz_qux") == "Foo-Bar Baz_qux"

    def test_keeps_whitespace(self):
        assert to_title_case("  two  spaces ") == "  Two  Spaces "

    def test_empty_string(self):
        assert to_title_case("") == ""


class TestBuildTransform:
    """Tests for build_transform."""

    def test_string_returns_base_transform(self):
        assert build_transform(STRING) is base_transform

    def test_non_null_carries_no_semantics(self):
        assert build_transform(IRNonNull(STRING)) is base_transform

    def test_double_non_null_terminates(self):
        assert build_transform(IRNonNull(IRNonNull(STRING))) is base_transform

    def test_non_text_types(self):
        assert build_transform(INT) is None
        assert build_transform(IRNonNull(IRList(INT))) is None
        assert build_transform(IREnum(name="Role", values=[IREnumValue(name="ADMIN")])) is None
        assert build_transform(IRObjectType(name="User")) is None

    def test_custom_text_types(self):
        email = IRScalar(name="Email")
        assert build_transform(email) is None
        assert build_transform(email, text_types=("String", "Email")) is base_transform

    def test_list_of_nullable_strings(self):
        transform = build_transform(IRNonNull(IRList(STRING)))
        result = transform(["ann", None, "BOB"], TextTransform.LOWERCASE)
        assert result == ["ann", None, "bob"]

    def test_list_preserves_order_and_length(self):
        transform = build_transform(IRList(STRING))
        value = ["c", "b", "a", "b"]
        assert transform(value, TextTransform.UPPERCASE) == ["C", "B", "A", "B"]

    def test_list_without_mode_is_identity(self):
        transform = build_transform(IRList(STRING))
        value = ["ann"]
        assert transform(value, None) is value

    def test_list_with_non_list_value_passes_through(self):
        transform = build_transform(IRList(STRING))
        assert transform("ann", TextTransform.UPPERCASE) == "ann"
        assert transform(None, TextTransform.UPPERCASE) is None

    def test_non_text_list_elements_pass_through(self):
        transform = build_transform(IRList(STRING))
        assert transform(["a", 1, {"b": 2}], TextTransform.UPPERCASE) == ["A", 1, {"b": 2}]

    def test_tuple_value_becomes_list(self):
        transform = build_transform(IRList(STRING))
        assert transform(("a", "b"), TextTransform.UPPERCASE) == ["A", "B"]

    def test_nested_lists(self):
        transform = build_transform(IRList(IRNonNull(IRList(IRNonNull(STRING)))))
        result = transform([["ab", "Cd"], ["EF"]], TextTransform.TITLE_CASE)
        assert result == [["Ab", "Cd"], ["Ef"]]

    def test_deferred_resolved_once_at_build_time(self):
        calls = []

        def thunk():
            calls.append(1)
            return STRING

        transform = build_transform(IRList(IRDeferred(thunk, name="String")))
        assert len(calls) == 1

        transform(["a"], TextTransform.UPPERCASE)
        transform(["b"], TextTransform.UPPERCASE)
        assert len(calls) == 1

    def test_deferred_to_object_is_not_text(self):
        user = IRObjectType(name="User")
        user_ref = IRDeferred(lambda: user, name="User")
        assert build_transform(IRList(user_ref)) is None

    def test_self_referencing_deferred_raises(self):
        ref = IRDeferred(lambda: ref, name="Loop")
        with pytest.raises(SchemaComposerError, match="Circular type reference 'Loop'"):
            build_transform(ref)

    def test_unnamed_deferred_cycle_raises(self):
        ref = IRDeferred(lambda: IRNonNull(ref))
        with pytest.raises(SchemaComposerError, match="Circular type reference IRDeferred"):
            build_transform(ref)

    def test_indirect_deferred_cycle_raises(self):
        first = IRDeferred(lambda: IRList(second), name="First")
        second = IRDeferred(lambda: IRNonNull(first), name="Second")
        with pytest.raises(SchemaComposerError, match="Circular type reference"):
            build_transform(first)

    def test_same_deferred_in_separate_branches_is_not_a_cycle(self):
        ref = IRDeferred(lambda: STRING, name="String")
        assert build_transform(IRList(ref)) is not None
        assert build_transform(IRNonNull(ref)) is base_transform
