"""Reading here-document bodies and buffered line input."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Sequence
from typing import IO, BinaryIO, Union

from minishell.expansion import expand_vars_heredoc
from minishell.shell import Shell

BUFFER_SIZE = 1024
HEREDOC_PROMPT = "> "

ReadLine = Callable[[], Union[str, None]]


class HeredocError(Exception):
    """A here-document could not be read to its delimiter."""


class LineReader:
    """Reads newline-terminated lines from a file descriptor or binary stream.

    Each line keeps its trailing newline; the last line may lack one.
    """

    def __init__(self, source: int | BinaryIO, buffer_size: int = BUFFER_SIZE) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._source = source
        self._buffer_size = buffer_size
        self._pending = b""
        self._eof = False

    def _read_chunk(self) -> bytes:
        if isinstance(self._source, int):
            return os.read(self._source, self._buffer_size)
        return self._source.read(self._buffer_size) or b""

    def read_line(self) -> str | None:
        """Next line, or None once the input is exhausted or unreadable."""
        while not self._eof and b"\n" not in self._pending:
            try:
                chunk = self._read_chunk()
            except OSError:
                self._pending = b""
                self._eof = True
                return None
            if not chunk:
                self._eof = True
            self._pending += chunk
        if not self._pending:
            return None
        head, sep, rest = self._pending.partition(b"\n")
        self._pending = rest
        return (head + sep).decode("utf-8", errors="surrogateescape")

    def __iter__(self):
        while (line := self.read_line()) is not None:
            yield line


def is_originally_quoted(delimiter: str | None) -> bool:
    """True when the delimiter carries the leading quote marker."""
    return bool(delimiter) and delimiter[0] == "'"


def check_delimiter_match(line: str | None, delimiter: str | None) -> bool:
    """True when ``line`` is the delimiter, optionally followed by a newline."""
    if line is None or delimiter is None:
        return False
    if not line.startswith(delimiter):
        return False
    rest = line[len(delimiter):]
    return rest in ("", "\n") or rest.startswith("\n")


def extract_line(text: str | None) -> tuple[str | None, str | None]:
    """Split off the first line of ``text``.

    Returns the line without its newline and the remaining text, which is
    None when ``text`` held no newline.
    """
    if text is None:
        return None, None
    line, sep, rest = text.partition("\n")
    if not sep:
        return line, None
    return line, rest


def find_last_delimiter_index(delimiters: Sequence[str] | None) -> int:
    """Index of the last delimiter, or -1 when there are none."""
    if delimiters is None:
        return -1
    return len(delimiters) - 1


def read_heredoc_line(stream: IO[str] | None = None, is_piped: bool = True) -> str | None:
    """Read one here-document line without its newline; None at end of input.

    Piped input is read from ``stream``; otherwise the user is prompted.
    """
    if is_piped:
        source = stream if stream is not None else sys.stdin
        line = source.readline()
        if not line:
            return None
        return line[:-1] if line.endswith("\n") else line
    try:
        return input(HEREDOC_PROMPT)
    except EOFError:
        return None


def _read_body(delimiter: str, read_line: ReadLine) -> list[str]:
    lines: list[str] = []
    while True:
        line = read_line()
        if line is None:
            raise HeredocError(
                f"here-document delimited by end-of-file (wanted `{delimiter}')"
            )
        if check_delimiter_match(line, delimiter):
            return lines
        lines.append(line)


def collect_heredocs(shell: Shell, delimiters: Sequence[str], read_line: ReadLine) -> str:
    """Read every here-document in turn and return the body of the last one.

    Lines of an unquoted here-document have variables expanded; each line
    is terminated with a newline.
    """
    last_index = find_last_delimiter_index(delimiters)
    if last_index < 0:
        raise HeredocError("no here-document delimiter")
    content: list[str] = []
    for index, delimiter in enumerate(delimiters):
        quoted = is_originally_quoted(delimiter)
        clean = delimiter[1:] if quoted else delimiter
        body = _read_body(clean, read_line)
        if index != last_index:
            continue
        for line in body:
            text = line if quoted else expand_vars_heredoc(shell, line)
            content.append(text + "\n")
    return "".join(content)