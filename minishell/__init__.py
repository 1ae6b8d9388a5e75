"""Core of a small POSIX-style shell: environment, lexing, expansion, parsing and here-documents."""

__version__ = "0.1.0"