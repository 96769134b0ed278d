"""Registered shell commands, used for dispatch, help, and completion."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandSpec:
    name: str
    description: str


COMMANDS: tuple[CommandSpec, ...] = tuple(sorted(
    (
        CommandSpec(".", "Open the source code repository from current directory"),
        CommandSpec("about", "Learn about me and my background"),
        CommandSpec("cat", "Display content of a file (e.g., cat README.md)"),
        CommandSpec("cd", "Change directory (e.g., cd js, cd ..)"),
        CommandSpec("clear", "Clear the terminal and reset the session"),
        CommandSpec("echo", "Print text to the terminal"),
        CommandSpec("education", "Show my educational background"),
        CommandSpec("email", "Open your email client to contact me"),
        CommandSpec("exit", "Close the terminal"),
        CommandSpec("github", "Open my GitHub profile"),
        CommandSpec("help", "Show this help message"),
        CommandSpec("history", "Show command history"),
        CommandSpec("linkedin", "Open my LinkedIn profile"),
        CommandSpec("ls", "List directory contents"),
        CommandSpec("pwd", "Print current working directory"),
        CommandSpec("themes", "List themes, or switch with themes <name>"),
        CommandSpec("welcome", "Display the welcome message"),
        CommandSpec("whoami", "Display the current user"),
    ),
    key=lambda c: c.name,
))

_BY_NAME = {c.name: c for c in COMMANDS}


def command_names() -> list[str]:
    return [c.name for c in COMMANDS]


def find_command(name: str) -> CommandSpec | None:
    """Case-insensitive lookup of a registered command."""
    return _BY_NAME.get(name.lower())
