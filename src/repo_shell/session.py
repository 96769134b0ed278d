from __future__ import annotations

from dataclasses import dataclass, field

from repo_shell.completion import CompletionState
from repo_shell.history import CommandHistory
from repo_shell.input_buffer import LineBuffer


@dataclass
class Session:
    """Per-run input state owned by the input controller.

    `epoch` changes whenever a pending completion request must be ignored:
    on every non-cycling key, on a fresh activation, and on reset.
    """

    history: CommandHistory = field(default_factory=CommandHistory)
    buffer: LineBuffer = field(default_factory=LineBuffer)
    completion: CompletionState | None = None
    epoch: int = 0

    @property
    def line(self) -> str:
        return self.buffer.text

    def invalidate(self):
        """Drop any completion session and outdate requests in flight."""
        self.completion = None
        self.epoch += 1

    def reset(self):
        """Forget history and completion. The buffer keeps any typed-ahead text."""
        self.history.clear()
        self.invalidate()
