"""Syntax tree nodes, tokens and redirections produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RedirOp(str, Enum):
    """Kinds of file redirection attached to a command."""

    INPUT = "<"
    OUTPUT = ">"
    APPEND = "+"


@dataclass
class Token:
    """A lexed word.

    ``quoted`` is true when the word must not be split on whitespace.
    """

    text: str
    quoted: bool = False


@dataclass
class Redir:
    """A single redirection: an operator and the file it targets."""

    op: RedirOp
    file: str


@dataclass
class AstNode:
    """A command (when ``cmd`` is set) or a pipe joining ``left`` and ``right``."""

    cmd: list[str] | None = None
    input_file: str | None = None
    output_file: str | None = None
    heredoc_fd: int = -1
    heredoc_delims: list[str] | None = None
    append: bool = False
    is_heredoc: bool = False
    redirs: list[Redir] = field(default_factory=list)
    left: AstNode | None = None
    right: AstNode | None = None

    def add_redir(self, op: RedirOp | str, file: str) -> Redir:
        """Append a redirection, keeping the order in which they were written."""
        redir = Redir(RedirOp(op), file)
        self.redirs.append(redir)
        return redir

    @property
    def is_command(self) -> bool:
        """True when this node holds a non-empty command."""
        return bool(self.cmd)