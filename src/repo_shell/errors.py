"""Error types raised by the filesystem adapter and the command interpreter.

None of these escape the interpreter: each is turned into an error line
(and sometimes a tip line) on the output.
"""

from __future__ import annotations


class ShellError(Exception):
    """Base class for shell command failures."""


class NotFoundOrTransport(ShellError):
    """Remote path missing, not a directory, or the request itself failed."""


class NotAFile(ShellError):
    """A file read hit a directory or an object without content."""


class DecodeError(ShellError):
    """File content could not be decoded from its transport encoding."""


class UsageError(ShellError):
    """A command was called without a required argument."""

    def __init__(self, usage: str, tip: str | None = None):
        super().__init__(usage)
        self.tip = tip


class Unrecognized(ShellError):
    """No registered command matches the input."""

    def __init__(self, text: str):
        super().__init__(text)
        self.text = text
