#!/usr/bin/env python3
"""
Tests for the lexer: rule priorities, same-position chaining, line tracking
and lexing errors.
"""

import pytest

from pnt.frontend.lexer import tokenize
from pnt.frontend.tokens import TokenKind
from pnt.shared.errors import LexError


def kinds(source: str):
    return [token.kind for token in tokenize(source)]


def texts(source: str):
    return [token.text for token in tokenize(source)]


class TestLexerRules:
    def test_digits_then_identifier_split_in_one_pass(self):
        tokens = tokenize("1abc")
        assert [(t.kind, t.text) for t in tokens] == [
            (TokenKind.INT, "1"),
            (TokenKind.ID, "abc"),
        ]

    def test_arrow_beats_minus(self):
        assert kinds("a -> b") == [TokenKind.ID, TokenKind.ARROW, TokenKind.ID]
        assert kinds("-") == [TokenKind.MINUS]

    def test_pow_beats_star(self):
        assert kinds("**") == [TokenKind.POW]
        assert kinds("* *") == [TokenKind.STAR, TokenKind.STAR]

    def test_operators(self):
        assert kinds("&& || + - / %") == [
            TokenKind.AND, TokenKind.OR, TokenKind.PLUS,
            TokenKind.MINUS, TokenKind.SLASH, TokenKind.PERCENT,
        ]

    def test_class_and_def_need_word_boundary(self):
        assert kinds("class Point") == [TokenKind.CLASS, TokenKind.ID]
        assert kinds("classy") == [TokenKind.ID]
        assert kinds("def definitely") == [TokenKind.DEF, TokenKind.ID]

    def test_keyword_versus_colon(self):
        assert kinds(":name") == [TokenKind.KEYWORD]
        assert kinds("x: 1") == [TokenKind.ID, TokenKind.COLON, TokenKind.INT]

    def test_keyword_text_keeps_colon(self):
        assert texts("obj :x.") == ["obj", ":x", "."]

    def test_string_literal(self):
        tokens = tokenize('"hello world".')
        assert tokens[0].kind is TokenKind.STRING
        assert tokens[0].text == '"hello world"'
        assert tokens[1].kind is TokenKind.DOT

    def test_record_construction(self):
        assert kinds("Point{x: 1, y: 2}") == [
            TokenKind.ID, TokenKind.LBRACE,
            TokenKind.ID, TokenKind.COLON, TokenKind.INT, TokenKind.COMMA,
            TokenKind.ID, TokenKind.COLON, TokenKind.INT,
            TokenKind.RBRACE,
        ]

    def test_whitespace_only_and_empty(self):
        assert tokenize("") == []
        assert tokenize("  \n\t ") == []


class TestLexerLocations:
    def test_line_numbers(self):
        tokens = tokenize("a\nb\n\nc")
        assert [t.line for t in tokens] == [1, 2, 4]

    def test_columns_are_one_based_per_line(self):
        tokens = tokenize("ab cd\n  ef")
        assert [(t.location.line, t.location.column) for t in tokens] == [
            (1, 1), (1, 4), (2, 3),
        ]

    def test_source_file_recorded(self):
        token = tokenize("x", source_file="prog.pnt")[0]
        assert token.location.file == "prog.pnt"
        assert str(token.location) == "prog.pnt:1:1"


class TestLexerErrors:
    def test_unrecognized_character(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("a @")
        error = exc_info.value
        assert error.location.line == 1
        assert error.location.column == 3
        assert error.source_code == "a @"

    def test_error_on_later_line(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("a.\nb $.")
        assert exc_info.value.location.line == 2
