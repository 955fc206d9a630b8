"""Lossless SQL tokenizer built on sqlglot's dialect tokenizers.

sqlglot drops whitespace and attaches comments to neighbouring tokens, but
every token it emits records its ``start``/``end`` offsets in the source. The
adapter slices the original text with those offsets and re-emits the gaps as
``WHITESPACE``/``COMMENT`` tokens, so concatenating the output always yields
the input unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Iterable

from sqlglot.dialects.dialect import Dialect as SqlglotDialect
from sqlglot.errors import TokenError
from sqlglot.tokens import TokenType

from ..errors import SqlSyntaxError
from .dialects import Dialect

NEUTRAL_PLACEHOLDER = "?"

_QUOTED_LITERAL_TYPES = frozenset(
    {
        TokenType.STRING,
        TokenType.NATIONAL_STRING,
        TokenType.BIT_STRING,
        TokenType.HEX_STRING,
        TokenType.BYTE_STRING,
        TokenType.RAW_STRING,
        TokenType.HEREDOC_STRING,
        TokenType.UNICODE_STRING,
    }
)


class TokenKind(str, Enum):
    """Lexical category of a :class:`Token`."""
    WORD = "word"
    NUMBER = "number"
    QUOTED_LITERAL = "quoted_literal"
    QUOTED_IDENTIFIER = "quoted_identifier"
    PLACEHOLDER = "placeholder"
    OPERATOR = "operator"
    WHITESPACE = "whitespace"
    COMMENT = "comment"


@dataclass(frozen=True)
class Token:
    """A lexical token and its exact source text."""
    kind: TokenKind
    text: str


@lru_cache(maxsize=None)
def _sqlglot_dialect(dialect: Dialect) -> SqlglotDialect:
    return SqlglotDialect.get_or_raise(dialect.value)


def _classify(token_type: TokenType, raw: str) -> TokenKind:
    # a bare ? outside literals is the neutral marker whatever type sqlglot gives it
    if raw == NEUTRAL_PLACEHOLDER:
        return TokenKind.PLACEHOLDER
    if token_type in _QUOTED_LITERAL_TYPES:
        return TokenKind.QUOTED_LITERAL
    if token_type == TokenType.IDENTIFIER:
        return TokenKind.QUOTED_IDENTIFIER
    if token_type == TokenType.NUMBER:
        return TokenKind.NUMBER
    if raw[:1].isalpha() or raw[:1] == "_":
        return TokenKind.WORD
    return TokenKind.OPERATOR


def _split_markers(token_type: TokenType, raw: str) -> list[Token]:
    """Classify a lexical token, peeling leading markers off compound operators.

    Dialects with JSON operators lex text such as ``?::``, ``?|`` or ``?&`` as a
    single token; each leading ``?`` is still a placeholder of its own.
    """
    if token_type in _QUOTED_LITERAL_TYPES or token_type == TokenType.IDENTIFIER:
        return [Token(_classify(token_type, raw), raw)]

    tokens: list[Token] = []
    rest = raw
    while len(rest) > 1 and rest.startswith(NEUTRAL_PLACEHOLDER):
        tokens.append(Token(TokenKind.PLACEHOLDER, NEUTRAL_PLACEHOLDER))
        rest = rest[1:]
    if tokens:
        kind = TokenKind.PLACEHOLDER if rest == NEUTRAL_PLACEHOLDER else TokenKind.OPERATOR
        tokens.append(Token(kind, rest))
        return tokens
    return [Token(_classify(token_type, raw), raw)]


def _gap(text: str) -> Token:
    kind = TokenKind.WHITESPACE if text.isspace() else TokenKind.COMMENT
    return Token(kind, text)


def tokenize(sql: str, dialect: Dialect = Dialect.POSTGRES) -> list[Token]:
    """Split SQL into an ordered, lossless token sequence.

    A ``?`` inside a quoted string or quoted identifier belongs to that
    literal's token and is never reported as a placeholder.

    Args:
        sql: Raw SQL text
        dialect: Lexical rules to apply

    Returns:
        Tokens whose texts concatenate back to ``sql``

    Raises:
        SqlSyntaxError: If the text cannot be tokenized (e.g. unterminated quote)
    """
    try:
        raw_tokens = _sqlglot_dialect(dialect).tokenize(sql)
    except TokenError as exc:
        raise SqlSyntaxError(f"Failed to tokenize SQL: {exc}", sql=sql) from exc

    tokens: list[Token] = []
    position = 0
    for raw_token in raw_tokens:
        start = max(raw_token.start, position)
        end = raw_token.end + 1
        if end <= start:
            continue
        if start > position:
            tokens.append(_gap(sql[position:start]))
        raw = sql[start:end]
        tokens.extend(_split_markers(raw_token.token_type, raw))
        position = end

    if position < len(sql):
        tokens.append(_gap(sql[position:]))

    return tokens


def render(tokens: Iterable[Token]) -> str:
    """Reassemble SQL text from tokens."""
    return "".join(token.text for token in tokens)
