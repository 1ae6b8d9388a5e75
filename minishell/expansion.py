"""Variable, quote and escape expansion of words and here-document lines."""

from __future__ import annotations

import os
import string

from minishell.shell import Shell

EXIT_STATUS_MARKER = "$$EXIT_STATUS$$"

_ALPHA = frozenset(string.ascii_letters)
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")


def _is_name_char(ch: str) -> bool:
    return ch in _NAME_CHARS


def _name_length(text: str, start: int) -> int:
    """Index just past the run of name characters beginning at ``start``."""
    end = start
    while end < len(text) and _is_name_char(text[end]):
        end += 1
    return end


def lookup_env_var(shell: Shell, name: str) -> str:
    """Value of ``name`` in the shell's environment, or an empty string."""
    value = shell.get_env(name)
    return "" if value is None else value


def expand_one(shell: Shell, text: str) -> tuple[str, int]:
    """Expand the variable reference that follows a ``$``.

    ``text`` is what comes after the ``$``. Returns the replacement and
    how many characters of ``text`` it consumed.
    """
    first = text[:1]
    if first in ('"', ""):
        return "$", 0
    if first == "?":
        return EXIT_STATUS_MARKER, 1
    if first in string.digits:
        return "", 1
    if first not in _ALPHA and first != "_":
        return "$" + first, 1
    end = _name_length(text, 1)
    return lookup_env_var(shell, text[:end]), end


def _scan_until(text: str, start: int, stop: str) -> tuple[str, int]:
    """Raw text from ``start`` to ``stop`` and the index just past ``stop``."""
    end = text.find(stop, start)
    if end < 0:
        return text[start:], len(text)
    return text[start:end], end + 1


def _expand_dollar(
    shell: Shell, text: str, i: int, in_single: bool, in_double: bool
) -> tuple[str, int]:
    nxt = text[i + 1:i + 2]
    if not in_single and not in_double:
        if nxt == '"':
            return _scan_until(text, i + 2, '"')
        if nxt == "'":
            return _scan_until(text, i + 2, "'")
    if nxt == "$":
        return str(os.getpid()), i + 2
    value, advance = expand_one(shell, text[i + 1:])
    return value, i + advance + 1


def expand_vars(shell: Shell, text: str) -> str:
    """Expand variables, remove quotes and resolve backslash escapes."""
    parts: list[str] = []
    in_single = False
    in_double = False
    i = 0
    while i < len(text):
        ch = text[i]
        if (ch == "'" and not in_double) or (ch == '"' and not in_single):
            if ch == "'":
                in_single = not in_single
            else:
                in_double = not in_double
            i += 1
        elif ch == "\\" and i + 1 < len(text) and not in_single:
            parts.append(text[i + 1])
            i += 2
        elif ch == "$" and not in_single:
            value, i = _expand_dollar(shell, text, i, in_single, in_double)
            parts.append(value)
        else:
            parts.append(ch)
            i += 1
    return "".join(parts)


def expand_vars_heredoc(shell: Shell, text: str) -> str:
    """Expand ``$NAME`` references in a here-document line.

    Quotes are kept; ``\\$`` yields a literal dollar; a ``$`` not followed
    by a name is dropped.
    """
    parts: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\" and text[i + 1:i + 2] == "$":
            parts.append("$")
            i += 2
        elif ch == "$":
            start = i + 1
            i = _name_length(text, start)
            if i > start:
                value = shell.get_env(text[start:i])
                if value is not None:
                    parts.append(value)
        else:
            parts.append(ch)
            i += 1
    return "".join(parts)


def should_process_escape(next_char: str, in_single: bool, in_double: bool) -> bool:
    """Whether a backslash before ``next_char`` escapes it in this quoting state."""
    if in_single:
        return False
    if in_double:
        return next_char in ('"', "\\", "$") and next_char != ""
    return True


def process_token_escapes(text: str) -> str:
    """Resolve backslash escapes while leaving quote characters in place."""
    parts: list[str] = []
    in_single = False
    in_double = False
    i = 0
    while i < len(text):
        ch = text[i]
        nxt = text[i + 1:i + 2]
        if ch == "\\" and nxt and should_process_escape(nxt, in_single, in_double):
            i += 1
            parts.append(text[i])
        else:
            if ch == "'" and not in_double:
                in_single = not in_single
            elif ch == '"' and not in_single:
                in_double = not in_double
            parts.append(ch)
        i += 1
    return "".join(parts)