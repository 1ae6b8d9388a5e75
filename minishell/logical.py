"""Splitting a command line on a top-level ``||`` or ``&&``."""

from __future__ import annotations

from collections.abc import Callable

from minishell.shell import Shell

_OR = " || "
_AND = " && "


def _inside_quotes(line: str, pos: int) -> bool:
    in_single = False
    in_double = False
    i = 0
    while i < pos:
        ch = line[i]
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == "\\" and i + 1 < len(line) and not in_single:
            i += 1
        i += 1
    return in_single or in_double


def find_logical_operator(line: str) -> tuple[int, bool] | None:
    """Position of the first `` || `` or `` && `` and whether it is ``||``.

    Returns None when neither appears or the first one is inside quotes.
    """
    or_pos = line.find(_OR)
    and_pos = line.find(_AND)
    if or_pos < 0 and and_pos < 0:
        return None
    if or_pos >= 0 and (and_pos < 0 or or_pos < and_pos):
        pos, is_or = or_pos, True
    else:
        pos, is_or = and_pos, False
    if _inside_quotes(line, pos):
        return None
    return pos, is_or


def process_logical_operators(
    shell: Shell, line: str, run_line: Callable[[str], object]
) -> bool:
    """Run both sides of a logical operator through ``run_line``.

    The right side runs only when the left side's exit status allows it.
    Returns False, running nothing, when the line has no operator.
    """
    found = find_logical_operator(line)
    if found is None:
        return False
    pos, is_or = found
    first, second = line[:pos], line[pos + len(_OR):]
    run_line(first)
    if (is_or and shell.last_exit != 0) or (not is_or and shell.last_exit == 0):
        run_line(second)
    return True