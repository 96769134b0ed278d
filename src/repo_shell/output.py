"""Render sink: the append-only output surface the shell writes to.

The core only appends tagged lines, clears, shows transient completion
hints, and sets the live prompt. How lines look is the UI's business.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from repo_shell.debug_log import DebugLogger


class LineKind(Enum):
    PLAIN = auto()
    DIRECTORY = auto()
    ERROR = auto()
    TIP = auto()
    PROMPT = auto()


@dataclass(frozen=True)
class OutputLine:
    text: str
    kind: LineKind = LineKind.PLAIN


class RenderSink(Protocol):
    def append(self, text: str, kind: LineKind = LineKind.PLAIN) -> None: ...

    def clear(self) -> None: ...

    def show_hints(self, lines: list[OutputLine]) -> None: ...

    def clear_hints(self) -> None: ...

    def set_prompt(self, prompt: str) -> None: ...


class OutputBuffer:
    """In-memory sink the curses UI draws from.

    Multi-line text is split into one OutputLine per row. The oldest rows
    are dropped beyond `max_lines`.
    """

    def __init__(self, max_lines: int = 5000, logger: "DebugLogger | None" = None):
        self.max_lines = max_lines
        self.logger = logger
        self.lines: list[OutputLine] = []
        self.hints: list[OutputLine] = []
        self.prompt = ""

    def append(self, text: str, kind: LineKind = LineKind.PLAIN):
        for row in text.split("\n"):
            self.lines.append(OutputLine(row, kind))
        if len(self.lines) > self.max_lines:
            self.lines = self.lines[-self.max_lines :]
        if self.logger:
            self.logger.log_output(text)

    def clear(self):
        self.lines = []
        self.hints = []

    def show_hints(self, lines: list[OutputLine]):
        self.hints = list(lines)

    def clear_hints(self):
        self.hints = []

    def set_prompt(self, prompt: str):
        self.prompt = prompt

    def texts(self) -> list[str]:
        return [line.text for line in self.lines]
