"""Building command trees from lexed words: redirections, here-documents, pipes."""

from __future__ import annotations

from collections.abc import Iterable

from minishell.ast import AstNode, RedirOp
from minishell.lexer import tokenize
from minishell.shell import Shell
from minishell.words import apply_word_splitting

_REDIRECTIONS = frozenset({"<", ">", ">>", "<<"})
_SEMICOLONS = frozenset({";", ";;"})
_PIPE = "|"
_SYNTAX_EXIT = 2


class ParseError(Exception):
    """A syntax error; ``token`` is the token reported as unexpected."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"minishell: syntax error near unexpected token `{token}'")


def _fail(shell: Shell | None, token: str) -> ParseError:
    if shell is not None:
        shell.last_exit = _SYNTAX_EXIT
    return ParseError(token)


def is_redir(token: str) -> bool:
    """True for the redirection operators ``<``, ``>``, ``>>`` and ``<<``."""
    return token in _REDIRECTIONS


def is_semicolon_error(token: str) -> bool:
    """True for ``;`` and ``;;``, which the shell does not accept."""
    return token in _SEMICOLONS


def count_args(tokens: Iterable[str]) -> int:
    """Number of command arguments in a segment, skipping redirections.

    Raises ParseError, naming the segment's last token, when a semicolon
    appears or a redirection lacks its target.
    """
    tokens = list(tokens)
    error_token = tokens[-1] if tokens else "newline"
    count = 0
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if is_semicolon_error(tok):
            raise ParseError(error_token)
        if is_redir(tok):
            if i + 1 >= len(tokens) or is_redir(tokens[i + 1]):
                raise ParseError(error_token)
            i += 2
        else:
            count += 1
            i += 1
    return count


def count_till_pipe(words: Iterable[str]) -> int:
    """Number of words before the first ``|``."""
    count = 0
    for word in words:
        if word == _PIPE:
            break
        count += 1
    return count


def quotes_balanced(text: str | None) -> bool:
    """True when every single and double quote in ``text`` is closed."""
    if text is None:
        return True
    in_single = False
    in_double = False
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == "\\" and i + 1 < len(text) and not in_single:
            i += 1
        i += 1
    return not in_single and not in_double


def remove_quotes(text: str) -> str:
    """Drop a matching pair of outer quotes, if present."""
    if not text:
        return text
    if text[0] in ("'", '"') and text[-1] == text[0]:
        return text[1:-1]
    return text


def is_quoted_delimiter(text: str | None) -> bool:
    """True when ``text`` is wrapped in a matching pair of quotes."""
    if not text or len(text) < 2:
        return False
    return text[0] == text[-1] and text[0] in ("'", '"')


def _heredoc_delimiter(token: str) -> str:
    if is_quoted_delimiter(token):
        return "'" + remove_quotes(token)
    return token


def _apply_redirection(
    node: AstNode, op: str, target: str | None, shell: Shell | None
) -> None:
    if target is None or is_redir(target):
        raise _fail(shell, "newline" if target is None else target)
    if op == "<":
        node.add_redir(RedirOp.INPUT, target)
    elif op == "<<":
        if node.heredoc_delims is None:
            node.heredoc_delims = []
        node.heredoc_delims.append(_heredoc_delimiter(target))
        node.is_heredoc = True
    else:
        is_append = op == ">>"
        node.output_file = target
        if is_append:
            node.append = True
        node.add_redir(RedirOp.APPEND if is_append else RedirOp.OUTPUT, target)


def parse_segment(tokens: Iterable[str], shell: Shell | None = None) -> AstNode | None:
    """Parse one command with its redirections.

    Returns None when the segment holds no command words.
    """
    tokens = list(tokens)
    try:
        argc = count_args(tokens)
    except ParseError as exc:
        raise _fail(shell, exc.token) from None
    if argc == 0:
        return None
    node = AstNode()
    args: list[str] = []
    stream = iter(tokens)
    for tok in stream:
        if tok == _PIPE:
            break
        if is_redir(tok):
            _apply_redirection(node, tok, next(stream, None), shell)
        else:
            args.append(tok)
    node.cmd = args
    return node


def _segment_at(words: list[str], start: int) -> list[str]:
    rest = words[start:]
    return rest[:count_till_pipe(rest)]


def _validate_segments(words: list[str], shell: Shell | None) -> None:
    start = 0
    for i, word in enumerate(words):
        if word == _PIPE:
            if i + 1 >= len(words) or words[i + 1] == _PIPE:
                raise _fail(shell, _PIPE)
            start = i + 1
        elif i == start and parse_segment(_segment_at(words, start), shell) is None:
            raise _fail(shell, _PIPE)


def parse_pipeline(words: Iterable[str], shell: Shell | None = None) -> AstNode | None:
    """Parse words into a left-nested tree of pipes over commands."""
    words = list(words)
    if words and words[0] == _PIPE:
        raise _fail(shell, _PIPE)
    _validate_segments(words, shell)
    node: AstNode | None = None
    for i, word in enumerate(words):
        if word != _PIPE:
            continue
        if node is None:
            node = parse_segment(words[:i], shell)
        right = parse_segment(_segment_at(words, i + 1), shell)
        if node is None or right is None:
            raise _fail(shell, _PIPE)
        node = AstNode(left=node, right=right)
    if node is None:
        node = parse_segment(words, shell)
    return node


def parse_line(line: str, shell: Shell) -> AstNode | None:
    """Tokenize, expand, word-split and parse a command line."""
    tokens = tokenize(line, shell)
    if not tokens:
        return None
    words = [token.text for token in apply_word_splitting(tokens)]
    return parse_pipeline(words, shell)