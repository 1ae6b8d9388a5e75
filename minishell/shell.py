"""Shell state, environment handling and prompt construction."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

FALLBACK_PROMPT = "🐚 mini-shell ➤ "
_PROMPT_HEAD = "\033[1;36m🐚 \033[1;35mmini-shell\033[0m \033[1;33m"
_PROMPT_TAIL = "\033[1;32m ➤ \033[0m"
_MAX_SHLVL = 1000


@dataclass
class Shell:
    """Mutable state shared by every stage of the shell."""

    env: list[str] = field(default_factory=list)
    last_exit: int = 0
    is_interactive: bool = False
    child_pid: int = -1
    heredoc_active: bool = False
    cleaned_up: bool = False

    def _index_of(self, key: str) -> int | None:
        prefix = key + "="
        for index, entry in enumerate(self.env):
            if entry.startswith(prefix):
                return index
        return None

    def get_env(self, key: str) -> str | None:
        """Value of ``key`` in the environment, or None when unset."""
        index = self._index_of(key)
        if index is None:
            return None
        return self.env[index][len(key) + 1:]

    def set_env(self, entry: str) -> None:
        """Set a ``KEY=VALUE`` entry, replacing any entry with the same key."""
        key, sep, _ = entry.partition("=")
        if not sep or not key:
            raise ValueError(f"not a KEY=VALUE entry: {entry!r}")
        index = self._index_of(key)
        if index is None:
            self.env.append(entry)
        else:
            self.env[index] = entry


def _env_entries(envp: Mapping[str, str] | Iterable[str]) -> list[str]:
    if isinstance(envp, Mapping):
        return [f"{key}={value}" for key, value in envp.items()]
    return list(envp)


def set_initial_env_vars(shell: Shell, cwd: str | None = None) -> None:
    """Set ``PWD`` to the working directory and ``_`` to the env binary."""
    if cwd is None:
        try:
            cwd = os.getcwd()
        except OSError:
            cwd = None
    if cwd is not None:
        shell.set_env("PWD=" + cwd)
    shell.set_env("_=/usr/bin/env")


def _atoi(text: str) -> int:
    """Leading integer of ``text`` in the manner of C's atoi; 0 if none."""
    stripped = text.lstrip(" \t\n\v\f\r")
    sign = 1
    if stripped[:1] in ("+", "-"):
        if stripped[0] == "-":
            sign = -1
        stripped = stripped[1:]
    digits = ""
    for ch in stripped:
        if not ch.isdigit():
            break
        digits += ch
    return sign * int(digits) if digits else 0


def bump_shlvl(shell: Shell) -> None:
    """Increment ``SHLVL``, resetting it to 1 when negative or too high."""
    current = shell.get_env("SHLVL")
    if current is None:
        shell.set_env("SHLVL=1")
        return
    level = _atoi(current) + 1
    if level < 0:
        level = 1
    elif level > _MAX_SHLVL:
        sys.stderr.write("minishell: shlvl too high, resetting to 1\n")
        level = 1
    shell.set_env(f"SHLVL={level}")


def init_shell(
    envp: Mapping[str, str] | Iterable[str] | None = None,
    interactive: bool | None = None,
    cwd: str | None = None,
) -> Shell:
    """Create a shell from an environment and prepare its initial variables."""
    if envp is None:
        envp = os.environ
    if interactive is None:
        interactive = sys.stdin.isatty()
    shell = Shell(env=_env_entries(envp), is_interactive=bool(interactive))
    set_initial_env_vars(shell, cwd)
    bump_shlvl(shell)
    return shell


def colored_prompt(
    shell: Shell, cwd: str | None = None, home: str | None = None
) -> str:
    """Coloured prompt showing the working directory, with ``~`` for home."""
    if cwd is None:
        try:
            cwd = os.getcwd()
        except OSError:
            return FALLBACK_PROMPT
    if home is None:
        home = os.environ.get("HOME")
    if home is not None and cwd.startswith(home):
        display = "~" + cwd[len(home):]
    else:
        display = cwd
    return _PROMPT_HEAD + display + _PROMPT_TAIL


def status_code(wstatus: int) -> int:
    """Exit code of a raw wait status; 128 plus the signal if killed."""
    low = wstatus & 0x7F
    if low == 0:
        return (wstatus >> 8) & 0xFF
    if low != 0x7F:
        return 128 + low
    return wstatus