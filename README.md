# minishell

The front end of a small interactive shell, written as a plain Python
library. It keeps the shell's environment, turns a command line into a tree
of commands, and reads here-document bodies.

## Modules

- **`minishell.shell`**: `init_shell(envp, interactive, cwd)` builds a
  `Shell` from an environment (a mapping or a list of `KEY=value` strings),
  sets `PWD` and `_`, and raises `SHLVL` through `bump_shlvl`, which resets
  it to 1 when it is negative or above 1000. `Shell.get_env` and
  `Shell.set_env` read and write `KEY=value` entries. `colored_prompt`
  builds the coloured prompt, with the home directory shortened to `~`.
  `status_code` turns a raw wait status into an exit code, using 128 plus
  the signal number for a killed process.
- **`minishell.lexer`**: `tokenize(line, shell)` splits a line into `Token`s.
  It recognises `<`, `>`, `>>`, `<<`, `|`, `||`, `&&` and `;`, keeps quoted
  text together, and expands each word as it goes. A quoted here-document
  delimiter is not expanded. Its quotes are removed and it is marked with a
  leading `'`.
- **`minishell.expansion`**: `expand_vars` handles `$NAME`, `$?` (left as
  the marker `$$EXIT_STATUS$$`), `$$`, `$"..."`, `$'...'`, backslash escapes,
  and single and double quotes. `expand_vars_heredoc` does the simpler
  expansion used in here-document bodies. `process_token_escapes` resolves
  backslashes and leaves quotes in place.
- **`minishell.words`**: `apply_word_splitting` splits unquoted tokens whose
  expanded text contains spaces. It also has small helpers for whitespace
  and quotes.
- **`minishell.parser`**: `parse_line(line, shell)` and
  `parse_pipeline(words, shell)` produce an `AstNode` tree. A command node
  holds:
  - its arguments, in `cmd`;
  - its redirections, as `Redir` objects with a `RedirOp`, in `redirs`;
  - its here-document delimiters, in `heredoc_delims`.

  Pipe nodes join commands through `left` and `right`, nested to the left.
  A syntax error raises `ParseError`, whose `token` is the token it names,
  and sets the shell's `last_exit` to 2.
- **`minishell.logical`**: `find_logical_operator` finds the first unquoted
  ` || ` or ` && `. `process_logical_operators(shell, line, run_line)` calls
  `run_line` on the left side. It calls it on the right side only when
  `shell.last_exit` allows.
- **`minishell.heredoc`**: `collect_heredocs(shell, delimiters, read_line)`
  reads lines up to each delimiter in turn. It returns only the body of the
  last one, expanded unless that delimiter was quoted. End of input before a
  delimiter raises `HeredocError`. `read_heredoc_line` reads one line from a
  stream or from a prompt. `LineReader` reads newline-terminated lines from
  a file descriptor or a binary stream.

## Example

```python
from minishell.shell import init_shell
from minishell.parser import parse_line

shell = init_shell(["HOME=/home/user", "PATH=/usr/bin:/bin"], False, "/tmp")

tree = parse_line('echo "$HOME" | grep user > out.txt', shell)
print(tree.left.cmd)                                   # ['echo', '/home/user']
print(tree.right.cmd)                                  # ['grep', 'user']
print([(r.op.value, r.file) for r in tree.right.redirs])  # [('>', 'out.txt')]
```

## What it does not do

This package does not run anything:

- It does not start processes, search `PATH`, or provide built-in commands.
- It does not connect pipes or open redirection files.
- It has no read–eval loop and no command-line entry point.

It stops at the parsed tree, the environment and the here-document text. A
caller that wants to execute commands must supply that part itself.