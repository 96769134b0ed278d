"""Remote content provider: the GitHub contents API.

`GET <path>` returns either a directory descriptor (a JSON list of
`{name, type, ...}` objects) or a file descriptor (`{type: "file",
content: <base64>}`). Anything else surfaces as `RemoteError`.
"""

from __future__ import annotations

import asyncio
import http.client
import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Protocol

from repo_shell import __version__
from repo_shell.config import RemoteConfig


class RemoteError(Exception):
    """The remote request failed or returned something unusable."""

    def __init__(self, path: str, reason: str, status: int | None = None):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
        self.status = status


class ContentProvider(Protocol):
    async def get(self, path: str) -> Any: ...


def web_url(config: RemoteConfig, path: str) -> str:
    """Browser URL for a directory of the repository."""
    suffix = "" if path == "/" else path
    return f"{config.web_base}/{config.owner}/{config.repo}/tree/{config.branch}{suffix}"


class GitHubContents:
    """Fetches repository paths from the GitHub contents API.

    The request itself uses blocking urllib, so `get` runs it on a worker
    thread and never stalls the event loop.
    """

    def __init__(self, config: RemoteConfig):
        self.config = config

    def url_for(self, path: str) -> str:
        c = self.config
        quoted = urllib.parse.quote(path if path.startswith("/") else f"/{path}")
        url = f"{c.api_base}/repos/{c.owner}/{c.repo}/contents{quoted}"
        if c.branch:
            url += "?" + urllib.parse.urlencode({"ref": c.branch})
        return url

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"repo-shell/{__version__}",
        }
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return headers

    def fetch(self, path: str) -> Any:
        """Blocking GET of one repository path. Returns the decoded JSON."""
        req = urllib.request.Request(self.url_for(path), headers=self._headers())
        kwargs = {} if self.config.timeout is None else {"timeout": self.config.timeout}
        try:
            with urllib.request.urlopen(req, **kwargs) as resp:
                body = resp.read()
        except urllib.error.HTTPError as e:
            raise RemoteError(path, f"GitHub API error: {e.code}", status=e.code) from e
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            raise RemoteError(path, f"request failed: {e}") from e
        try:
            return json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise RemoteError(path, "malformed response") from e

    async def get(self, path: str) -> Any:
        return await asyncio.to_thread(self.fetch, path)
