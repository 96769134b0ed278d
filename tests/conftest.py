"""Shared fakes: an in-memory contents provider standing in for GitHub."""

import asyncio
import base64
import copy

import pytest

from repo_shell.config import Config
from repo_shell.interpreter import CommandInterpreter
from repo_shell.remote import RemoteError
from repo_shell.themes import ThemeRegistry
from repo_shell.vfs import RemoteFilesystem


def file_descriptor(text: str) -> dict:
    return {"type": "file", "content": base64.b64encode(text.encode("utf-8")).decode("ascii")}


def dir_descriptor(*entries: tuple[str, str]) -> list[dict]:
    return [{"name": name, "type": kind} for name, kind in entries]


SAMPLE_TREE = {
    "/": dir_descriptor(("README.md", "file"), ("js", "dir"), ("notes.txt", "file")),
    "/README.md": file_descriptor("# Hello\nWelcome to the repo.\n"),
    "/notes.txt": file_descriptor("some notes"),
    "/js": dir_descriptor(("app.js", "file"), ("lib", "dir"), ("legacy", "dir")),
    "/js/app.js": file_descriptor("console.log('hi');"),
    "/js/lib": dir_descriptor(("util.js", "file")),
    "/js/legacy": dir_descriptor(),
}


class FakeProvider:
    """Serves descriptors from a dict and counts every request per path.

    When `gate` is set, every request waits on it before answering.
    """

    def __init__(self, tree=None):
        self.tree = copy.deepcopy(SAMPLE_TREE if tree is None else tree)
        self.calls: dict[str, int] = {}
        self.gate: asyncio.Event | None = None

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    async def get(self, path):
        self.calls[path] = self.calls.get(path, 0) + 1
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if path not in self.tree:
            raise RemoteError(path, "GitHub API error: 404", status=404)
        return copy.deepcopy(self.tree[path])


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def fs(provider):
    return RemoteFilesystem(provider)


@pytest.fixture
def themes():
    return ThemeRegistry()


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def interpreter(fs, themes, config):
    return CommandInterpreter(fs, themes, config)
