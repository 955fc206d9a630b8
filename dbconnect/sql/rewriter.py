"""Rewrite driver-neutral ``?`` markers into native positional placeholders."""
from __future__ import annotations

from dataclasses import dataclass

from .dialects import Dialect
from .tokenizer import Token, TokenKind, render, tokenize


@dataclass(frozen=True)
class RewrittenSql:
    """Rewritten SQL text and the number of placeholders it contains."""
    sql: str
    parameter_count: int


def rewrite_tokens(tokens: list[Token], dialect: Dialect) -> tuple[list[Token], int]:
    """Replace each placeholder token with the dialect's native placeholder.

    Ordinals are assigned left to right starting at 1. Every other token is
    passed through untouched.

    Returns:
        Tuple of (rewritten tokens, number of placeholders replaced)
    """
    rewritten: list[Token] = []
    ordinal = 0
    for token in tokens:
        if token.kind == TokenKind.PLACEHOLDER:
            ordinal += 1
            token = Token(TokenKind.PLACEHOLDER, dialect.native_placeholder(ordinal))
        rewritten.append(token)
    return rewritten, ordinal


def rewrite_with_count(sql: str, dialect: Dialect = Dialect.POSTGRES) -> RewrittenSql:
    """Rewrite ``sql`` and report how many placeholders were numbered.

    Raises:
        SqlSyntaxError: If the text cannot be tokenized; nothing is rewritten
    """
    tokens, count = rewrite_tokens(tokenize(sql, dialect), dialect)
    return RewrittenSql(sql=render(tokens), parameter_count=count)


def rewrite(sql: str, dialect: Dialect = Dialect.POSTGRES) -> str:
    """Rewrite neutral ``?`` placeholders into native positional ones.

    Example:
        >>> rewrite("SELECT '?' FROM t WHERE c = ?")
        "SELECT '?' FROM t WHERE c = $1"

    Callers must pass parameters in the same left-to-right order as the
    markers appear in ``sql``.
    """
    return rewrite_with_count(sql, dialect).sql
