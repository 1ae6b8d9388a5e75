"""Splitting a command line into expanded word and operator tokens."""

from __future__ import annotations

from minishell.ast import Token
from minishell.expansion import expand_vars
from minishell.shell import Shell

_SPACES = " \t\n\v\f\r"
_OPERATORS = "><|&;"
_DOUBLE_OPS = ("<<", ">>", "||", "&&")
_SINGLE_OPS = "<>|;"


def is_space(c: str) -> bool:
    """True for the characters that separate words."""
    return len(c) == 1 and c in _SPACES


def is_operator(c: str) -> bool:
    """True for characters that start an operator token."""
    return len(c) == 1 and c in _OPERATORS


def op_len(text: str) -> int:
    """Length of the operator at the start of ``text``, or 0 if none."""
    if text[:2] in _DOUBLE_OPS:
        return 2
    if text[:1] and text[0] in _SINGLE_OPS:
        return 1
    return 0


def skip_quotes(text: str, pos: int) -> int:
    """Index just past the quoted section starting at ``pos``.

    Inside double quotes a backslash skips the following character.
    """
    quote = text[pos]
    pos += 1
    while pos < len(text) and text[pos] != quote:
        if quote == '"' and text[pos] == "\\" and pos + 1 < len(text):
            pos += 2
        else:
            pos += 1
    if pos < len(text) and text[pos] == quote:
        pos += 1
    return pos


def advance_word(text: str, pos: int) -> int:
    """Index just past the word starting at ``pos``."""
    while pos < len(text) and not is_space(text[pos]) and not is_operator(text[pos]):
        ch = text[pos]
        if ch in ("'", '"'):
            pos = skip_quotes(text, pos)
        elif ch == "\\" and pos + 1 < len(text):
            pos += 2
        else:
            pos += 1
    return pos


def _is_wrapped_in_quotes(raw: str) -> bool:
    return len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in ("'", '"')


def process_token_content(shell: Shell, raw: str, is_heredoc_delim: bool) -> str:
    """Expanded text of a raw token.

    A quoted here-document delimiter is not expanded; it is stripped of
    its quotes and marked with a leading single quote.
    """
    if is_heredoc_delim and _is_wrapped_in_quotes(raw):
        return "'" + raw[1:-1]
    return expand_vars(shell, raw)


def _add_token(tokens: list[Token], shell: Shell, raw: str) -> None:
    is_heredoc_delim = bool(tokens) and tokens[-1].text == "<<"
    was_quoted = _is_wrapped_in_quotes(raw)
    has_expansion = not was_quoted and "$" in raw
    text = process_token_content(shell, raw, is_heredoc_delim)
    if not text and not was_quoted:
        return
    tokens.append(Token(text, quoted=was_quoted or not has_expansion))


def tokenize(line: str, shell: Shell) -> list[Token]:
    """Split ``line`` into tokens, expanding each word as it is read."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(line):
        ch = line[pos]
        if is_space(ch):
            pos += 1
            continue
        if is_operator(ch):
            end = pos + max(op_len(line[pos:]), 1)
        else:
            end = advance_word(line, pos)
        _add_token(tokens, shell, line[pos:end])
        pos = end
    return tokens