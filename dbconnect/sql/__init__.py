"""SQL text handling: dialects, tokenization and placeholder rewriting."""
from .dialects import Dialect
from .rewriter import RewrittenSql, rewrite, rewrite_with_count
from .tokenizer import Token, TokenKind, render, tokenize

__all__ = [
    "Dialect",
    "RewrittenSql",
    "Token",
    "TokenKind",
    "render",
    "rewrite",
    "rewrite_with_count",
    "tokenize",
]
