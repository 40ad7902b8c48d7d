#!/usr/bin/env python3
"""
Tests for structural dispatch: pattern matching, first-match method
selection and the keyword shortcut.
"""

import pytest

from pnt.runtime.dispatch import keyword_shortcut, match_pattern, method_matches, select_method
from pnt.runtime.values import (
    ANY, ExactLiteral, KeywordValue, Method, RecordShape, StringValue, construct,
)
from pnt.shared.errors import PntImplementationError


@pytest.fixture
def point_class(context):
    return context.registry.declare("Point")


@pytest.fixture
def point(point_class, context):
    return construct(point_class, {"x": context.make_int(1), "y": context.make_int(2)})


class TestMatchPattern:
    def test_identifier_matches_anything(self, context, point):
        for value in (point, StringValue("s"), context.keyword("k"), context.operator("+")):
            assert match_pattern(ANY, value)

    def test_keywords_match_by_identity(self, context):
        pattern = ExactLiteral(context.keyword("x"))
        assert match_pattern(pattern, context.keyword("x"))
        assert not match_pattern(pattern, context.keyword("y"))
        assert not match_pattern(pattern, KeywordValue("x"))

    def test_operators_match_by_identity(self, context):
        assert match_pattern(ExactLiteral(context.operator("+")), context.operator("+"))
        assert not match_pattern(ExactLiteral(context.operator("+")), context.operator("-"))

    def test_strings_match_by_value(self):
        assert match_pattern(ExactLiteral(StringValue("go")), StringValue("go"))
        assert not match_pattern(ExactLiteral(StringValue("go")), StringValue("stop"))

    def test_int_literal_matches_equal_int(self, context):
        pattern = ExactLiteral(context.make_int(3))
        assert match_pattern(pattern, context.make_int(3))
        assert not match_pattern(pattern, context.make_int(4))

    def test_record_shape(self, context, point_class, point):
        shape = RecordShape("Point", ("x", "y"))
        assert match_pattern(shape, point)
        assert match_pattern(RecordShape("Point", ("x",)), point)

        other_class = context.registry.declare("Other")
        assert not match_pattern(shape, construct(other_class, {"x": point, "y": point}))
        assert not match_pattern(shape, construct(point_class, {"x": context.make_int(1)}))
        assert not match_pattern(shape, StringValue("Point"))

    def test_unknown_pattern_variant(self):
        with pytest.raises(PntImplementationError):
            match_pattern(object(), StringValue("x"))


class TestMethodSelection:
    def test_arity_must_agree(self, context):
        method = Method(patterns=(ANY, ANY), bindings=("a", "b"))
        assert method_matches(method, [StringValue("1"), StringValue("2")])
        assert not method_matches(method, [StringValue("1")])

    def test_first_match_in_declaration_order(self, point_class, context):
        first = Method(patterns=(ANY,), bindings=("a",))
        second = Method(patterns=(ANY,), bindings=("b",))
        point_class.methods.extend([first, second])
        assert select_method(point_class, [context.keyword("anything")]) is first

    def test_skips_non_matching_methods(self, point_class, context):
        by_keyword = Method(patterns=(ExactLiteral(context.keyword("a")),), bindings=("_a",))
        fallback = Method(patterns=(ANY,), bindings=("x",))
        point_class.methods.extend([by_keyword, fallback])
        assert select_method(point_class, [context.keyword("a")]) is by_keyword
        assert select_method(point_class, [context.keyword("b")]) is fallback

    def test_no_match(self, point_class, context):
        point_class.methods.append(Method(patterns=(ExactLiteral(context.keyword("a")),), bindings=("_a",)))
        assert select_method(point_class, [context.keyword("b")]) is None
        assert select_method(None, [context.keyword("a")]) is None


class TestKeywordShortcut:
    def test_returns_property(self, context, point):
        assert keyword_shortcut(point, [context.keyword("x")]) == context.make_int(1)

    def test_missing_property(self, context, point):
        assert keyword_shortcut(point, [context.keyword("z")]) is None

    def test_only_single_keyword_argument(self, context, point):
        assert keyword_shortcut(point, [context.keyword("x"), context.keyword("y")]) is None
        assert keyword_shortcut(point, [StringValue("x")]) is None

    def test_non_instance_receiver(self, context):
        assert keyword_shortcut(context.keyword("x"), [context.keyword("name")]) is None
