class CommandHistory:
    """Append-only command log with up/down recall.

    `cursor` is -1 while not browsing ("live"); 0 is the most recent entry,
    len-1 the oldest.
    """

    def __init__(self):
        self._history: list[str] = []
        self.cursor = -1

    @property
    def entries(self) -> list[str]:
        return list(self._history)

    def add(self, cmd: str):
        """Record a submitted command and return to live."""
        self._history.append(cmd)
        self.reset()

    def reset(self):
        """Stop browsing."""
        self.cursor = -1

    def clear(self):
        self._history = []
        self.reset()

    @property
    def browsing(self) -> bool:
        return self.cursor != -1

    def _at_cursor(self) -> str:
        return self._history[len(self._history) - 1 - self.cursor]

    def navigate_up(self) -> str | None:
        """Step to an older entry. Returns its text, or None if already at the oldest."""
        if not self._history or self.cursor >= len(self._history) - 1:
            return None
        self.cursor += 1
        return self._at_cursor()

    def navigate_down(self) -> str | None:
        """Step to a newer entry. Returns its text, "" when back at live, None if not browsing."""
        if not self.browsing:
            return None
        self.cursor -= 1
        if self.cursor == -1:
            return ""
        return self._at_cursor()
