"""Whitespace splitting of expanded words and small quote helpers."""

from __future__ import annotations

import re
from collections.abc import Iterable

from minishell.ast import Token

_WHITESPACE = " \t\n\r"
_WORD_RE = re.compile(r"[^ \t\n\r]+")


def is_whitespace(c: str) -> bool:
    """True for space, tab, newline and carriage return."""
    return len(c) == 1 and c in _WHITESPACE


def count_words(text: str) -> int:
    """Number of whitespace-separated words in ``text``."""
    return len(_WORD_RE.findall(text))


def split_whitespace(text: str | None) -> list[str] | None:
    """Split ``text`` on whitespace.

    A string containing any quote character is kept whole.
    """
    if text is None:
        return None
    if '"' in text or "'" in text:
        return [text]
    return _WORD_RE.findall(text)


def remove_surrounding_quotes(text: str | None) -> str:
    """Strip one pair of matching outer quotes, if present."""
    if text is None:
        return ""
    if len(text) < 2:
        return text
    if text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return text


def has_paired_quotes(text: str) -> bool:
    """True when the text holds a non-zero, even count of either quote kind."""
    doubles = text.count('"')
    singles = text.count("'")
    return (doubles > 0 and doubles % 2 == 0) or (singles > 0 and singles % 2 == 0)


def split_unquoted_token(token: Token) -> list[Token]:
    """Split an unquoted token containing spaces into several tokens."""
    if token.quoted or " " not in token.text:
        return [token]
    words = split_whitespace(token.text)
    if not words:
        return [token]
    return [Token(word, quoted=False) for word in words]


def apply_word_splitting(tokens: Iterable[Token]) -> list[Token]:
    """Apply :func:`split_unquoted_token` to every token, flattening the result."""
    return [piece for token in tokens for piece in split_unquoted_token(token)]