import os

import pytest

from minishell.shell import (
    FALLBACK_PROMPT,
    Shell,
    bump_shlvl,
    colored_prompt,
    init_shell,
    set_initial_env_vars,
    status_code,
)


def test_get_env_returns_value_or_none():
    shell = Shell(env=["A=1", "PATH=/bin:/usr/bin"])
    assert shell.get_env("PATH") == "/bin:/usr/bin"
    assert shell.get_env("A") == "1"
    assert shell.get_env("MISSING") is None


def test_get_env_does_not_match_prefix_of_key():
    shell = Shell(env=["PATHX=a"])
    assert shell.get_env("PATH") is None


def test_set_env_replaces_in_place_and_appends():
    shell = Shell(env=["A=1", "B=2"])
    shell.set_env("A=9")
    shell.set_env("C=3")
    assert shell.env == ["A=9", "B=2", "C=3"]


def test_set_env_rejects_entry_without_equals():
    shell = Shell()
    with pytest.raises(ValueError):
        shell.set_env("NOEQUALS")


def test_set_initial_env_vars_sets_pwd_and_underscore():
    shell = Shell()
    set_initial_env_vars(shell, "/tmp/work")
    assert shell.get_env("PWD") == "/tmp/work"
    assert shell.get_env("_") == "/usr/bin/env"


def test_set_initial_env_vars_skips_pwd_when_cwd_unavailable(monkeypatch):
    def boom():
        raise OSError("gone")

    monkeypatch.setattr(os, "getcwd", boom)
    shell = Shell()
    set_initial_env_vars(shell)
    assert shell.get_env("PWD") is None
    assert shell.get_env("_") == "/usr/bin/env"


def test_bump_shlvl_sets_one_when_missing():
    shell = Shell()
    bump_shlvl(shell)
    assert shell.get_env("SHLVL") == "1"


@pytest.mark.parametrize("level", [0, 1, 5, 999])
def test_bump_shlvl_increments(level):
    shell = Shell(env=[f"SHLVL={level}"])
    bump_shlvl(shell)
    assert int(shell.get_env("SHLVL")) == level + 1


def test_bump_shlvl_resets_when_too_high(capsys):
    shell = Shell(env=["SHLVL=1000"])
    bump_shlvl(shell)
    assert shell.get_env("SHLVL") == "1"
    assert "shlvl too high" in capsys.readouterr().err


def test_bump_shlvl_resets_negative():
    shell = Shell(env=["SHLVL=-7"])
    bump_shlvl(shell)
    assert shell.get_env("SHLVL") == "1"


def test_bump_shlvl_non_numeric_counts_as_zero():
    shell = Shell(env=["SHLVL=abc"])
    bump_shlvl(shell)
    assert shell.get_env("SHLVL") == "1"


def test_init_shell_from_mapping():
    shell = init_shell({"HOME": "/home/u", "SHLVL": "3"}, interactive=True, cwd="/srv")
    assert shell.get_env("HOME") == "/home/u"
    assert shell.get_env("PWD") == "/srv"
    assert int(shell.get_env("SHLVL")) == 3 + 1
    assert shell.is_interactive is True
    assert shell.last_exit == 0
    assert shell.child_pid == -1


def test_init_shell_from_entries_keeps_order():
    shell = init_shell(["X=1", "Y=2"], interactive=False, cwd="/srv")
    assert shell.env[:2] == ["X=1", "Y=2"]
    assert shell.get_env("SHLVL") == "1"


def test_colored_prompt_abbreviates_home():
    prompt = colored_prompt(Shell(), "/home/u/projects", "/home/u")
    assert prompt.startswith("\033[1;36m🐚 \033[1;35mmini-shell\033[0m \033[1;33m")
    assert "~/projects" in prompt
    assert prompt.endswith("\033[1;32m ➤ \033[0m")


def test_colored_prompt_outside_home_shows_full_path():
    prompt = colored_prompt(Shell(), "/var/log", "/home/u")
    assert "/var/log" in prompt
    assert "~" not in prompt


def test_colored_prompt_falls_back_without_cwd(monkeypatch):
    def boom():
        raise OSError("gone")

    monkeypatch.setattr(os, "getcwd", boom)
    assert colored_prompt(Shell()) == FALLBACK_PROMPT


@pytest.mark.parametrize("code", [0, 1, 2, 42, 255])
def test_status_code_exited(code):
    assert status_code(code << 8) == code


@pytest.mark.parametrize("sig", [1, 2, 9, 15])
def test_status_code_signaled(sig):
    assert status_code(sig) == 128 + sig


def test_status_code_stopped_returns_raw():
    raw = 0x7F | (19 << 8)
    assert status_code(raw) == raw