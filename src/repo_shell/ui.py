from __future__ import annotations

import curses
from typing import TYPE_CHECKING

from repo_shell.controller import Key, KeyEvent
from repo_shell.output import LineKind
from repo_shell.types import safe_text

if TYPE_CHECKING:
    from repo_shell.debug_log import DebugLogger
    from repo_shell.output import OutputBuffer, OutputLine
    from repo_shell.session import Session
    from repo_shell.themes import Theme, ThemeRegistry

_COLOR_NAMES = {
    "black": curses.COLOR_BLACK,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
}

# Color pair id per render role
_ROLE_PAIRS = {
    "foreground": 1,
    "directory": 2,
    "error": 3,
    "tip": 4,
    "prompt": 5,
    "accent": 6,
}

_KIND_ROLES = {
    LineKind.PLAIN: "foreground",
    LineKind.DIRECTORY: "directory",
    LineKind.ERROR: "error",
    LineKind.TIP: "tip",
    LineKind.PROMPT: "prompt",
}

# Raw key codes decoded straight into controller events
_KEYMAP = {
    curses.KEY_ENTER: Key.SUBMIT,
    10: Key.SUBMIT,
    13: Key.SUBMIT,
    curses.KEY_UP: Key.HISTORY_PREV,
    curses.KEY_DOWN: Key.HISTORY_NEXT,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    127: Key.BACKSPACE,
    8: Key.BACKSPACE,
    9: Key.COMPLETE,    # Tab
    21: Key.COMPLETE,   # Ctrl+U
    23: Key.KILL_WORD,  # Ctrl+W
    12: Key.CLEAR_SCREEN,  # Ctrl+L
}


class ShellUI:
    """Curses view over an OutputBuffer plus the live input line."""

    def __init__(self, stdscr, output: "OutputBuffer", session: "Session",
                 themes: "ThemeRegistry", color: bool = True,
                 debug_logger: "DebugLogger | None" = None):
        self.stdscr = stdscr
        self.output = output
        self.session = session
        self.themes = themes
        self.color_enabled = color
        self.debug_logger = debug_logger

        # Scroll state: 0 = pinned to bottom, >0 = lines from bottom
        self._output_scroll = 0
        self._output_h = 1

        self.status = "Ctrl+U/Tab complete | Ctrl+L clear | PgUp/PgDn scroll | Ctrl+C quit"

        curses.curs_set(1)
        if color:
            curses.start_color()
            curses.use_default_colors()
            self.apply_theme(themes.active)
        self.stdscr.nodelay(True)
        self.stdscr.keypad(True)

    def apply_theme(self, theme: "Theme"):
        if not self.color_enabled:
            return
        for role, pair_id in _ROLE_PAIRS.items():
            fg = _COLOR_NAMES.get(theme.color(role), curses.COLOR_WHITE)
            try:
                curses.init_pair(pair_id, fg, -1)
            except curses.error:
                pass

    def _attr(self, role: str) -> int:
        if not self.color_enabled:
            return curses.A_BOLD if role in ("directory", "prompt") else 0
        attr = curses.color_pair(_ROLE_PAIRS[role])
        if role == "directory":
            attr |= curses.A_BOLD
        return attr

    def _layout(self):
        h, w = self.stdscr.getmaxyx()
        hint_h = min(len(self.output.hints), max(0, h - 3))
        out_h = max(1, h - 2 - hint_h)
        out_win = self.stdscr.derwin(out_h, w, 0, 0)
        hint_win = self.stdscr.derwin(hint_h, w, out_h, 0) if hint_h else None
        input_win = self.stdscr.derwin(1, w, h - 2, 0)
        status_win = self.stdscr.derwin(1, w, h - 1, 0)
        return out_win, hint_win, input_win, status_win

    def _draw_lines(self, win, lines: "list[OutputLine]", scroll_offset: int = 0):
        win.erase()
        h, w = win.getmaxyx()
        end = len(lines) - scroll_offset
        start = max(0, end - h)
        end = max(start, end)
        for i, line in enumerate(lines[start:end]):
            try:
                win.addnstr(i, 0, safe_text(line.text), w - 1, self._attr(_KIND_ROLES[line.kind]))
            except curses.error:
                pass
        win.noutrefresh()

    def draw(self):
        out_win, hint_win, input_win, status_win = self._layout()
        self._output_h = out_win.getmaxyx()[0]
        self._draw_lines(out_win, self.output.lines, self._output_scroll)
        if hint_win is not None:
            self._draw_lines(hint_win, self.output.hints)

        # Input line: prompt, then the buffer; slide so the end stays visible
        input_win.erase()
        _, w = input_win.getmaxyx()
        prompt = self.output.prompt + " "
        text = safe_text(self.session.line)
        max_visible = w - 1
        full_len = len(prompt) + len(text)
        scroll_off = max(0, full_len - max_visible + 1)
        try:
            if scroll_off < len(prompt):
                input_win.addnstr(0, 0, prompt[scroll_off:], max_visible, self._attr("prompt"))
                input_win.addnstr(0, len(prompt) - scroll_off, text,
                                  max(0, max_visible - len(prompt) + scroll_off))
            else:
                input_win.addnstr(0, 0, text[scroll_off - len(prompt):], max_visible)
        except curses.error:
            pass
        input_win.noutrefresh()

        status_win.erase()
        status_text = f"{self.status} | theme: {self.themes.active_key}"
        if self.debug_logger and self.debug_logger.enabled:
            status_text += " | DBG"
        if self._output_scroll > 0:
            status_text += f" | SCROLL +{self._output_scroll}"
        try:
            status_win.addnstr(0, 0, status_text, status_win.getmaxyx()[1] - 1,
                               self._attr("accent"))
        except curses.error:
            pass
        status_win.noutrefresh()

        cursor_x = min(full_len - scroll_off, max_visible)
        try:
            self.stdscr.move(self.stdscr.getmaxyx()[0] - 2, cursor_x)
        except curses.error:
            pass

        curses.doupdate()

    def _scroll_up(self):
        page = max(1, self._output_h - 2)
        max_scroll = max(0, len(self.output.lines) - self._output_h)
        self._output_scroll = min(self._output_scroll + page, max_scroll)

    def _scroll_down(self):
        page = max(1, self._output_h - 2)
        self._output_scroll = max(0, self._output_scroll - page)

    def handle_key(self, ch: int) -> KeyEvent | None:
        """Decode a curses key. Scrolling is handled here; the rest becomes a KeyEvent."""
        if ch == -1:
            return None

        if ch == curses.KEY_PPAGE:
            self._scroll_up()
            return None
        if ch == curses.KEY_NPAGE:
            self._scroll_down()
            return None
        if ch == curses.KEY_HOME:
            self._output_scroll = max(0, len(self.output.lines) - self._output_h)
            return None
        if ch == curses.KEY_END:
            self._output_scroll = 0
            return None

        key = _KEYMAP.get(ch)
        if key is not None:
            if key is Key.SUBMIT:
                self._output_scroll = 0
            return KeyEvent(key)

        if 0 <= ch < 256 and chr(ch).isprintable():
            return KeyEvent(Key.CHAR, chr(ch))
        return None
