"""Theme registry: theme keys, display metadata, and the active key."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

# Render roles a palette colors; values are curses color names
ROLES = ("foreground", "directory", "error", "tip", "prompt", "accent")


@dataclass(frozen=True)
class Theme:
    key: str
    name: str
    description: str
    palette: dict[str, str] = field(default_factory=dict)

    def color(self, role: str) -> str:
        return self.palette.get(role, "white")


DEFAULT_THEMES: tuple[Theme, ...] = (
    Theme(
        "catppuccin-mocha", "Catppuccin Mocha",
        "The darkest Catppuccin flavor with rich, deep colors",
        {"foreground": "white", "directory": "blue", "error": "red",
         "tip": "yellow", "prompt": "green", "accent": "magenta"},
    ),
    Theme(
        "gruvbox", "Gruvbox",
        "Retro groove colors with warm earth tones",
        {"foreground": "yellow", "directory": "cyan", "error": "red",
         "tip": "magenta", "prompt": "green", "accent": "yellow"},
    ),
    Theme(
        "matrix", "Matrix",
        "Green on black like the Matrix terminal",
        {"foreground": "green", "directory": "green", "error": "red",
         "tip": "green", "prompt": "green", "accent": "white"},
    ),
    Theme(
        "catppuccin-latte", "Catppuccin Latte",
        "A warm, light theme perfect for daytime coding",
        {"foreground": "black", "directory": "blue", "error": "red",
         "tip": "magenta", "prompt": "cyan", "accent": "blue"},
    ),
)


class ThemeRegistry:
    """Known themes in registration order plus the active key.

    `on_change` is called with the new Theme whenever the active key changes;
    the UI uses it to repaint, and persisting the choice is left to whoever
    installs the callback.
    """

    def __init__(self, themes=DEFAULT_THEMES, active: str | None = None,
                 on_change: Callable[[Theme], None] | None = None):
        self._themes = {t.key: t for t in themes}
        if not self._themes:
            raise ValueError("at least one theme is required")
        self.active_key = active if active in self._themes else next(iter(self._themes))
        self.on_change = on_change

    def __contains__(self, key: str) -> bool:
        return key in self._themes

    def keys(self) -> list[str]:
        return list(self._themes)

    def themes(self) -> list[Theme]:
        return list(self._themes.values())

    def get(self, key: str) -> Theme | None:
        return self._themes.get(key)

    @property
    def active(self) -> Theme:
        return self._themes[self.active_key]

    def matching(self, prefix: str) -> list[str]:
        return [k for k in self._themes if k.startswith(prefix)]

    def set_active(self, key: str) -> bool:
        """Switch themes. Returns False (and changes nothing) for unknown keys."""
        theme = self.get(key)
        if theme is None:
            return False
        self.active_key = key
        if self.on_change:
            self.on_change(theme)
        return True
