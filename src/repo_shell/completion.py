"""Autocompletion for command names and their first argument."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from repo_shell import paths
from repo_shell.commands import command_names
from repo_shell.errors import NotFoundOrTransport
from repo_shell.vfs import EntryKind

if TYPE_CHECKING:
    from repo_shell.themes import ThemeRegistry
    from repo_shell.vfs import RemoteFilesystem

# Commands whose first argument can be completed, and what it completes to
ARGUMENT_KINDS = {
    "cat": "file",
    "cd": "dir",
    "themes": "theme",
}


@dataclass
class CompletionState:
    """An active cycle through candidates; lives until a non-cycling key."""

    base_input: str
    candidates: list[str]
    index: int = 0

    @property
    def current(self) -> str:
        return self.candidates[self.index]

    def advance(self) -> str:
        self.index = (self.index + 1) % len(self.candidates)
        return self.current


def base_input(line: str) -> str:
    """Everything before the token being completed ("" for a command name)."""
    parts = line.split()
    if len(parts) <= 1:
        return ""
    return " ".join(parts[:-1])


def apply_completion(line: str, candidate: str) -> str:
    """Replace the last token with `candidate` and add a trailing space."""
    parts = line.split()
    if len(parts) <= 1:
        return candidate + " "
    parts[-1] = candidate
    return " ".join(parts) + " "


async def _entry_names(fs: "RemoteFilesystem", cwd: str, kind: EntryKind, partial: str) -> list[str]:
    try:
        entries = await fs.list_directory(cwd)
    except NotFoundOrTransport:
        return []
    return [e.name for e in entries if e.kind is kind and e.name.startswith(partial)]


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


async def suggest(line: str, cwd: str, fs: "RemoteFilesystem", themes: "ThemeRegistry") -> list[str]:
    """Ordered completion candidates for `line` typed in directory `cwd`."""
    parts = line.split()
    if len(parts) == 1:
        token = parts[0].lower()
        return [name for name in command_names() if name.startswith(token)]
    if len(parts) != 2:
        return []

    kind = ARGUMENT_KINDS.get(parts[0].lower())
    partial = parts[1]
    if kind == "file":
        return _dedupe(await _entry_names(fs, cwd, EntryKind.FILE, partial))
    if kind == "dir":
        names = await _entry_names(fs, cwd, EntryKind.DIRECTORY, partial)
        if cwd != paths.ROOT and "..".startswith(partial):
            names.insert(0, "..")
        return _dedupe(names)
    if kind == "theme":
        return themes.matching(partial)
    return []
