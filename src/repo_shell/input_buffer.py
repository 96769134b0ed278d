class LineBuffer:
    """Single-line input buffer. Editing always happens at the end of the line."""

    def __init__(self):
        self._text = ""

    @property
    def text(self) -> str:
        return self._text

    def insert(self, ch: str):
        self._text += ch

    def backspace(self):
        """Delete the last character."""
        self._text = self._text[:-1]

    def kill_word_back(self):
        """Delete the last word and any whitespace after it (Ctrl+W)."""
        pos = len(self._text)
        # Skip trailing whitespace
        while pos > 0 and self._text[pos - 1].isspace():
            pos -= 1
        while pos > 0 and not self._text[pos - 1].isspace():
            pos -= 1
        self._text = self._text[:pos]

    def set_text(self, text: str):
        self._text = text

    def clear(self) -> str:
        """Clear the buffer and return the previous content."""
        text = self._text
        self._text = ""
        return text
