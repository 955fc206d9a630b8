"""Tests for the lossless SQL tokenizer."""

from __future__ import annotations

import pytest

from dbconnect.errors import SqlSyntaxError
from dbconnect.sql.dialects import Dialect
from dbconnect.sql.tokenizer import Token, TokenKind, render, tokenize


def _kinds(tokens: list[Token]) -> list[TokenKind]:
    return [token.kind for token in tokens if token.kind != TokenKind.WHITESPACE]


class TestTokenize:
    """Tokenizer output must reproduce its input exactly."""

    @pytest.mark.parametrize(
        "sql",
        [
            "SELECT a FROM test",
            "  SELECT\ta ,b\nFROM   t  ",
            "SELECT 'it''s ?' AS \"odd?name\" FROM t WHERE x <> ?",
            "SELECT 1 -- trailing comment?\n",
            "SELECT /* inline ? */ a::text FROM t",
            "INSERT INTO test (a, b) VALUES (?,?)",
            "",
        ],
    )
    def test_render_is_lossless(self, sql: str) -> None:
        """Concatenated token texts equal the source text."""

        assert render(tokenize(sql, Dialect.POSTGRES)) == sql

    def test_placeholder_tokens(self) -> None:
        """Standalone ? is classified as a placeholder."""

        tokens = tokenize("SELECT a FROM t WHERE b = ?", Dialect.POSTGRES)

        placeholders = [token for token in tokens if token.kind == TokenKind.PLACEHOLDER]
        assert placeholders == [Token(TokenKind.PLACEHOLDER, "?")]

    def test_question_mark_inside_literals_is_not_placeholder(self) -> None:
        """? inside quoted strings and identifiers stays part of the literal."""

        tokens = tokenize("SELECT '?', \"c?\" FROM t", Dialect.POSTGRES)

        assert TokenKind.PLACEHOLDER not in _kinds(tokens)
        assert Token(TokenKind.QUOTED_LITERAL, "'?'") in tokens
        assert Token(TokenKind.QUOTED_IDENTIFIER, '"c?"') in tokens

    @pytest.mark.parametrize(
        ("sql", "markers"),
        [
            ("SELECT ?::int", 1),
            ("SELECT ?||'?'", 1),
            ("SELECT ?|?", 2),
            ("SELECT ?&?", 2),
            ("SELECT ?-1", 1),
            ("SELECT ?>1, '?::x'", 1),
        ],
    )
    def test_markers_glued_to_operators(self, sql: str, markers: int) -> None:
        """Each ? outside literals yields one placeholder token, losslessly."""

        tokens = tokenize(sql, Dialect.POSTGRES)

        placeholders = [token for token in tokens if token.kind == TokenKind.PLACEHOLDER]
        assert len(placeholders) == markers
        assert all(token.text == "?" for token in placeholders)
        assert render(tokens) == sql

    def test_comments_are_kept_as_comment_tokens(self) -> None:
        """Comment text is emitted verbatim and never holds a placeholder."""

        tokens = tokenize("SELECT 1 /* ? */", Dialect.POSTGRES)

        comments = [token for token in tokens if token.kind == TokenKind.COMMENT]
        assert len(comments) == 1
        assert "/* ? */" in comments[0].text
        assert TokenKind.PLACEHOLDER not in _kinds(tokens)

    def test_word_and_number_kinds(self) -> None:
        """Keywords and identifiers are words, numerals are numbers."""

        tokens = tokenize("SELECT a FROM t LIMIT 10", Dialect.POSTGRES)

        assert _kinds(tokens) == [
            TokenKind.WORD,
            TokenKind.WORD,
            TokenKind.WORD,
            TokenKind.WORD,
            TokenKind.WORD,
            TokenKind.NUMBER,
        ]

    def test_unterminated_quote_raises_syntax_error(self) -> None:
        """Tokenization failures surface as SqlSyntaxError carrying the SQL."""

        sql = "SELECT 'unterminated FROM t WHERE a = ?"

        with pytest.raises(SqlSyntaxError) as exc_info:
            tokenize(sql, Dialect.POSTGRES)

        assert exc_info.value.sql == sql
