"""Lazily fetched, cached view of the remote repository.

Every path is fetched at most once per cache lifetime. A concurrent request
for a path that is already being fetched awaits the same in-flight task.
`clear()` starts a new lifetime; fetches still running from the previous one
finish, but their results are not stored.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import time
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from repo_shell.errors import DecodeError, NotAFile, NotFoundOrTransport
from repo_shell.remote import ContentProvider, RemoteError

if TYPE_CHECKING:
    from repo_shell.debug_log import DebugLogger


class EntryKind(Enum):
    FILE = "file"
    DIRECTORY = "dir"


@dataclass(frozen=True)
class Entry:
    name: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class DirectoryListing:
    entries: tuple[Entry, ...]


@dataclass(frozen=True)
class FileContents:
    text: str


CachedEntry = Union[DirectoryListing, FileContents]


def _entry_from(item: dict) -> Entry:
    kind = EntryKind.DIRECTORY if item.get("type") == "dir" else EntryKind.FILE
    return Entry(name=str(item["name"]), kind=kind)


def decode_content(content: str) -> str:
    """Decode base64 file content (GitHub wraps it at 60 columns)."""
    try:
        raw = base64.b64decode("".join(content.split()), validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise DecodeError(str(e)) from e


class RemoteFilesystem:
    def __init__(self, provider: ContentProvider, logger: "DebugLogger | None" = None):
        self.provider = provider
        self.logger = logger
        self.fetch_count = 0
        self._cache: dict[str, CachedEntry] = {}
        self._inflight: dict[str, asyncio.Task] = {}
        self._epoch = 0

    def cached(self, path: str) -> CachedEntry | None:
        return self._cache.get(path)

    def clear(self):
        self._cache.clear()
        self._inflight.clear()
        self._epoch += 1

    async def _fetch(self, path: str) -> Any:
        """Fetch a raw descriptor, sharing the request with concurrent callers."""
        task = self._inflight.get(path)
        if task is None:
            task = asyncio.ensure_future(self._get(path))
            self._inflight[path] = task
            task.add_done_callback(lambda t: self._forget(path, t))
        return await asyncio.shield(task)

    def _forget(self, path: str, task: asyncio.Task):
        if self._inflight.get(path) is task:
            del self._inflight[path]

    async def _get(self, path: str) -> Any:
        self.fetch_count += 1
        start = time.monotonic()
        try:
            data = await self.provider.get(path)
        except RemoteError as e:
            if self.logger:
                self.logger.log_fetch(path, False, e.reason, time.monotonic() - start)
            raise NotFoundOrTransport(str(e)) from e
        if self.logger:
            self.logger.log_fetch(path, True, type(data).__name__, time.monotonic() - start)
        return data

    def _store(self, path: str, entry: CachedEntry, epoch: int):
        if epoch == self._epoch:
            self._cache.setdefault(path, entry)

    async def list_directory(self, path: str) -> list[Entry]:
        """Return the entries of a directory, fetching it on first use.

        Raises:
            NotFoundOrTransport: the request failed or the path is not a directory.
        """
        cached = self.cached(path)
        if isinstance(cached, DirectoryListing):
            return list(cached.entries)
        if cached is not None:
            raise NotFoundOrTransport(f"{path}: not a directory")

        epoch = self._epoch
        data = await self._fetch(path)
        if not isinstance(data, list):
            raise NotFoundOrTransport(f"{path}: not a directory")
        listing = self._listing_from(path, data)
        self._store(path, listing, epoch)
        return list(listing.entries)

    @staticmethod
    def _listing_from(path: str, data: list) -> DirectoryListing:
        try:
            return DirectoryListing(tuple(_entry_from(item) for item in data))
        except (KeyError, TypeError, AttributeError) as e:
            raise NotFoundOrTransport(f"{path}: malformed listing") from e

    async def read_file(self, path: str) -> str:
        """Return the decoded text of a file, fetching it on first use.

        Raises:
            NotFoundOrTransport: the request failed.
            NotAFile: the path is a directory or has no content.
            DecodeError: the content is not valid base64 / UTF-8.
        """
        cached = self.cached(path)
        if isinstance(cached, FileContents):
            return cached.text
        if cached is not None:
            raise NotAFile(path)

        epoch = self._epoch
        data = await self._fetch(path)
        if isinstance(data, list):
            # Keep the listing so a later ls/cd on this path needs no fetch
            self._store(path, self._listing_from(path, data), epoch)
            raise NotAFile(path)
        if not isinstance(data, dict) or data.get("type") != "file":
            raise NotAFile(path)
        content = data.get("content")
        if not content or not isinstance(content, str):
            raise NotAFile(path)
        text = decode_content(content)
        self._store(path, FileContents(text), epoch)
        return text
