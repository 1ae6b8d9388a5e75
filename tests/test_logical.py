import pytest

from minishell.logical import find_logical_operator, process_logical_operators
from minishell.shell import Shell


def test_no_operator():
    assert find_logical_operator("echo hi | cat") is None


def test_finds_or():
    line = "false || echo ok"
    assert find_logical_operator(line) == (line.index(" || "), True)


def test_finds_and():
    line = "true && echo ok"
    assert find_logical_operator(line) == (line.index(" && "), False)


def test_earliest_operator_wins():
    line = "a && b || c"
    assert find_logical_operator(line) == (line.index(" && "), False)
    line2 = "a || b && c"
    assert find_logical_operator(line2) == (line2.index(" || "), True)


def test_operator_without_spaces_is_ignored():
    assert find_logical_operator("a||b") is None


def test_operator_inside_quotes_is_ignored():
    assert find_logical_operator("echo 'x || y'") is None
    assert find_logical_operator('echo "x && y"') is None


def test_escaped_quote_does_not_open_quotes():
    line = 'echo \\" && true'
    assert find_logical_operator(line) == (line.index(" && "), False)


def _runner(shell, statuses):
    ran = []

    def run(cmd):
        ran.append(cmd)
        shell.last_exit = statuses.get(cmd, 0)

    return ran, run


@pytest.mark.parametrize(
    "line,first_status,expected",
    [
        ("a || b", 1, ["a", "b"]),
        ("a || b", 0, ["a"]),
        ("a && b", 0, ["a", "b"]),
        ("a && b", 1, ["a"]),
    ],
)
def test_process_runs_second_by_status(line, first_status, expected):
    shell = Shell()
    ran, run = _runner(shell, {"a": first_status})
    assert process_logical_operators(shell, line, run) is True
    assert ran == expected


def test_process_passes_remaining_line_unsplit():
    shell = Shell()
    ran, run = _runner(shell, {})
    assert process_logical_operators(shell, "x && y || z", run) is True
    assert ran == ["x", "y || z"]


def test_process_without_operator_runs_nothing():
    shell = Shell()
    ran, run = _runner(shell, {})
    assert process_logical_operators(shell, "echo hi", run) is False
    assert ran == []