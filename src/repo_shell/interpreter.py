"""Command interpreter: runs one submitted line against the command table.

Handlers never touch the screen. Each one appends lines to an Outcome, which
the input controller renders. Every ShellError is turned into an error line
here; none escapes `execute`.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from repo_shell import paths
from repo_shell.commands import COMMANDS, find_command
from repo_shell.content import BANNER, WELCOME_LINES, fill_profile_text
from repo_shell.errors import ShellError, Unrecognized, UsageError
from repo_shell.output import LineKind, OutputLine
from repo_shell.remote import web_url

if TYPE_CHECKING:
    from repo_shell.config import Config
    from repo_shell.themes import ThemeRegistry
    from repo_shell.vfs import RemoteFilesystem

# Multi-word phrase with its own answer, matched before command lookup
ABOUT_ME = "about me"


@dataclass
class WorkingDirectory:
    path: str = paths.ROOT

    def reset(self):
        self.path = paths.ROOT


@dataclass
class Outcome:
    """Result of one command line."""

    cwd: str
    lines: list[OutputLine] = field(default_factory=list)
    reset: bool = False
    quit: bool = False
    open_url: str | None = None

    def emit(self, text: str, kind: LineKind = LineKind.PLAIN):
        self.lines.append(OutputLine(text, kind))

    def texts(self) -> list[str]:
        return [line.text for line in self.lines]


@dataclass
class CommandCall:
    args: list[str]
    state: WorkingDirectory
    out: Outcome
    history: Sequence[str]


_HANDLERS = {
    ".": "_cmd_open_repo",
    "about": "_cmd_about",
    "cat": "_cmd_cat",
    "cd": "_cmd_cd",
    "clear": "_cmd_clear",
    "echo": "_cmd_echo",
    "education": "_cmd_education",
    "email": "_cmd_email",
    "exit": "_cmd_exit",
    "github": "_cmd_github",
    "help": "_cmd_help",
    "history": "_cmd_history",
    "linkedin": "_cmd_linkedin",
    "ls": "_cmd_ls",
    "pwd": "_cmd_pwd",
    "themes": "_cmd_themes",
    "welcome": "_cmd_welcome",
    "whoami": "_cmd_whoami",
}


class CommandInterpreter:
    def __init__(self, fs: "RemoteFilesystem", themes: "ThemeRegistry", config: "Config"):
        self.fs = fs
        self.themes = themes
        self.config = config

    async def execute(self, line: str, state: WorkingDirectory,
                      history: Sequence[str] = ()) -> Outcome:
        """Run one command line. Never raises for command-level failures."""
        text = line.strip()
        out = Outcome(cwd=state.path)
        if not text:
            return out
        command, *args = text.split()
        try:
            await self._dispatch(text, command, CommandCall(args, state, out, history))
        except UsageError as e:
            out.emit(f"Usage: {e}", LineKind.ERROR)
            if e.tip:
                out.emit(e.tip, LineKind.TIP)
        except Unrecognized as e:
            out.emit(f"Command not found: {e.text}", LineKind.ERROR)
        except ShellError as e:
            out.emit(f"Error: {e}", LineKind.ERROR)
        out.cwd = state.path
        return out

    async def _dispatch(self, text: str, command: str, call: CommandCall):
        # "about" alone would otherwise take it
        if " ".join(text.lower().split()) == ABOUT_ME:
            self._cmd_about_me(call)
            return
        spec = find_command(command)
        if spec is None:
            raise Unrecognized(text)
        result = getattr(self, _HANDLERS[spec.name])(call)
        # Filesystem handlers are coroutines; the rest are plain methods
        if inspect.isawaitable(result):
            await result

    def welcome_lines(self) -> list[str]:
        return BANNER.split("\n") + [""] + WELCOME_LINES

    # --- Filesystem commands ---

    async def _cmd_ls(self, call: CommandCall):
        try:
            entries = await self.fs.list_directory(call.state.path)
        except ShellError:
            call.out.emit("Error: Could not list directory contents.", LineKind.ERROR)
            return
        for entry in entries:
            call.out.emit(entry.name, LineKind.DIRECTORY if entry.is_dir else LineKind.PLAIN)

    async def _cmd_cat(self, call: CommandCall):
        if not call.args:
            raise UsageError("cat <filename>", "Try: cat README.md or ls to see available files")
        filename = call.args[0]
        path = paths.resolve(call.state.path, filename)
        try:
            text = await self.fs.read_file(path)
        except ShellError:
            call.out.emit(f"File '{filename}' not found or cannot be read.", LineKind.ERROR)
            await self._suggest_files(call)
            return
        call.out.emit(text)

    async def _suggest_files(self, call: CommandCall):
        try:
            entries = await self.fs.list_directory(call.state.path)
        except ShellError:
            return
        files = [e.name for e in entries if not e.is_dir]
        if files:
            call.out.emit(f"Available files: {', '.join(files)}", LineKind.TIP)

    async def _cmd_cd(self, call: CommandCall):
        target = call.args[0] if call.args else ""
        candidate = paths.resolve(call.state.path, target)
        if candidate == paths.ROOT:
            call.state.path = candidate
            return
        name = paths.leaf(candidate)
        try:
            siblings = await self.fs.list_directory(paths.parent(candidate))
        except ShellError:
            siblings = []
        if any(e.name == name and e.is_dir for e in siblings):
            call.state.path = candidate
        else:
            call.out.emit(f"cd: no such file or directory: {target}", LineKind.ERROR)

    def _cmd_pwd(self, call: CommandCall):
        call.out.emit(paths.pwd_path(call.state.path, self.config.prompt.home))

    def _cmd_open_repo(self, call: CommandCall):
        call.out.emit(f"Opening directory '{call.state.path}' in repository...")
        call.out.open_url = web_url(self.config.remote, call.state.path)

    # --- Session commands ---

    def _cmd_clear(self, call: CommandCall):
        call.out.reset = True

    def _cmd_exit(self, call: CommandCall):
        call.out.quit = True

    def _cmd_history(self, call: CommandCall):
        for i, cmd in enumerate(call.history, start=1):
            call.out.emit(f"{i}  {cmd}")

    def _cmd_help(self, call: CommandCall):
        call.out.emit("Available commands:")
        call.out.emit("")
        width = max(len(c.name) for c in COMMANDS) + 2
        for c in COMMANDS:
            call.out.emit(f"{c.name:<{width}}* {c.description}")
        call.out.emit("")
        call.out.emit("Pro-Tip: Use Ctrl+L to clear the terminal screen.", LineKind.TIP)
        call.out.emit("Pro-Tip: Use Ctrl+U (or Tab) to autocomplete commands.", LineKind.TIP)

    def _cmd_themes(self, call: CommandCall):
        if call.args:
            key = call.args[0]
            if key in self.themes:
                self.themes.set_active(key)
                theme = self.themes.active
                call.out.emit(f"Theme changed to {theme.name}! {theme.description}")
            else:
                call.out.emit(f"Theme '{key}' not found.", LineKind.ERROR)
                call.out.emit("Use themes to see available themes.", LineKind.TIP)
            return

        call.out.emit(f"Available Themes (Current: {self.themes.active.name}):")
        call.out.emit("")
        width = max(len(k) for k in self.themes.keys()) + 4
        for theme in self.themes.themes():
            label = theme.key + (" ✓" if theme.key == self.themes.active_key else "")
            call.out.emit(f"{label:<{width}}{theme.description}")
        call.out.emit("")
        call.out.emit("Usage: themes <theme-name> to switch themes", LineKind.TIP)
        call.out.emit("Examples:", LineKind.TIP)
        for theme in self.themes.themes():
            call.out.emit(f"   • themes {theme.key} - Switch to {theme.name}", LineKind.TIP)

    # --- Static / informational commands ---

    def _cmd_echo(self, call: CommandCall):
        call.out.emit(" ".join(call.args))

    def _cmd_whoami(self, call: CommandCall):
        call.out.emit(self.config.prompt.user)

    def _cmd_welcome(self, call: CommandCall):
        for line in self.welcome_lines():
            call.out.emit(line)

    def _cmd_about(self, call: CommandCall):
        profile = self.config.profile
        call.out.emit(fill_profile_text(profile.about, profile.birth_date))

    def _cmd_about_me(self, call: CommandCall):
        profile = self.config.profile
        call.out.emit(fill_profile_text(profile.about_short, profile.birth_date))

    def _cmd_education(self, call: CommandCall):
        call.out.emit(self.config.profile.education)

    def _open_link(self, call: CommandCall, url: str | None, message: str, what: str):
        if not url:
            call.out.emit(f"No {what} configured.", LineKind.ERROR)
            return
        call.out.emit(message)
        call.out.open_url = url

    def _cmd_github(self, call: CommandCall):
        self._open_link(call, self.config.profile.github,
                        "Opening GitHub profile in a new window...", "GitHub profile")

    def _cmd_linkedin(self, call: CommandCall):
        self._open_link(call, self.config.profile.linkedin,
                        "Opening LinkedIn profile...", "LinkedIn profile")

    def _cmd_email(self, call: CommandCall):
        email = self.config.profile.email
        self._open_link(call, f"mailto:{email}" if email else None,
                        "Opening email client...", "email address")
