"""
errors.py — Exceptions raised by dbindgen.

Name collisions and undeclared structs are repaired silently by the
translator, so they never show up here.  Only failures that abort the
translation of a file are modelled as exceptions.
"""

from typing import List, Sequence


class DbindgenError(Exception):
    """Base class for every error dbindgen reports to its caller."""


class ProcessError(DbindgenError):
    """An external program (preprocessor or D compiler) exited non-zero."""

    def __init__(self, command: Sequence[str], output: str, returncode: int = 1):
        self.command = list(command)
        self.output = output
        self.returncode = returncode
        super().__init__(
            f"Could not execute `{' '.join(self.command)}`:\n{self.output}"
        )


class ParseError(DbindgenError):
    """libclang reported errors while parsing an included header."""

    def __init__(self, header: str, diagnostics: List[str]):
        self.header = header
        self.diagnostics = diagnostics
        details = "\n".join(f"\t{d}" for d in diagnostics)
        super().__init__(f"Could not parse {header}:\n{details}")
