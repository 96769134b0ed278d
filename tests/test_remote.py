import http.client
import io
import json
import urllib.error

import pytest

from repo_shell.config import Config, RemoteConfig
from repo_shell.interpreter import CommandInterpreter, WorkingDirectory
from repo_shell.remote import GitHubContents, RemoteError, web_url
from repo_shell.themes import ThemeRegistry
from repo_shell.vfs import RemoteFilesystem


class FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class TruncatedResponse(FakeResponse):
    def read(self, *args):
        raise http.client.IncompleteRead(b"[{", 100)


@pytest.fixture
def captured(monkeypatch):
    """Patch urlopen; returns a dict holding the last request and the canned reply."""
    state = {"body": b"[]", "error": None, "response": None}

    def fake_urlopen(req, **kwargs):
        state["request"] = req
        state["kwargs"] = kwargs
        if state["error"] is not None:
            raise state["error"]
        if state["response"] is not None:
            return state["response"]
        return FakeResponse(state["body"])

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)
    return state


class TestUrls:
    def test_root_url(self):
        client = GitHubContents(RemoteConfig(owner="octo", repo="cat", branch="main"))
        assert client.url_for("/") == "https://api.github.com/repos/octo/cat/contents/?ref=main"

    def test_nested_url(self):
        client = GitHubContents(RemoteConfig(owner="octo", repo="cat", branch="dev"))
        assert client.url_for("/js/app.js") == "https://api.github.com/repos/octo/cat/contents/js/app.js?ref=dev"

    def test_spaces_are_quoted(self):
        client = GitHubContents(RemoteConfig(owner="octo", repo="cat"))
        assert "/contents/my%20notes.txt" in client.url_for("/my notes.txt")

    def test_web_url(self):
        config = RemoteConfig(owner="octo", repo="cat", branch="main")
        assert web_url(config, "/") == "https://github.com/octo/cat/tree/main"
        assert web_url(config, "/js") == "https://github.com/octo/cat/tree/main/js"


class TestFetch:
    def test_returns_decoded_json(self, captured):
        captured["body"] = json.dumps([{"name": "a", "type": "file"}]).encode()
        client = GitHubContents(RemoteConfig())
        assert client.fetch("/") == [{"name": "a", "type": "file"}]

    def test_headers(self, captured):
        client = GitHubContents(RemoteConfig(token="secret"))
        client.fetch("/")
        req = captured["request"]
        assert req.get_header("Accept") == "application/vnd.github+json"
        assert req.get_header("Authorization") == "Bearer secret"
        assert req.get_header("User-agent").startswith("repo-shell/")

    def test_no_token_no_auth_header(self, captured):
        GitHubContents(RemoteConfig()).fetch("/")
        assert captured["request"].get_header("Authorization") is None

    def test_timeout_passed_only_when_set(self, captured):
        GitHubContents(RemoteConfig()).fetch("/")
        assert captured["kwargs"] == {}
        GitHubContents(RemoteConfig(timeout=3.0)).fetch("/")
        assert captured["kwargs"] == {"timeout": 3.0}

    def test_http_error(self, captured):
        captured["error"] = urllib.error.HTTPError("u", 404, "Not Found", {}, None)
        with pytest.raises(RemoteError) as exc_info:
            GitHubContents(RemoteConfig()).fetch("/nope")
        assert exc_info.value.status == 404
        assert exc_info.value.path == "/nope"

    def test_network_error(self, captured):
        captured["error"] = urllib.error.URLError("no route")
        with pytest.raises(RemoteError) as exc_info:
            GitHubContents(RemoteConfig()).fetch("/")
        assert exc_info.value.status is None

    def test_truncated_body(self, captured):
        captured["response"] = TruncatedResponse()
        with pytest.raises(RemoteError) as exc_info:
            GitHubContents(RemoteConfig()).fetch("/")
        assert exc_info.value.status is None

    def test_bad_status_line(self, captured):
        captured["error"] = http.client.BadStatusLine("HTTP/9")
        with pytest.raises(RemoteError):
            GitHubContents(RemoteConfig()).fetch("/")

    def test_malformed_json(self, captured):
        captured["body"] = b"<html>rate limited</html>"
        with pytest.raises(RemoteError, match="malformed"):
            GitHubContents(RemoteConfig()).fetch("/")

    @pytest.mark.asyncio
    async def test_async_get(self, captured):
        captured["body"] = b'{"type": "file", "content": ""}'
        assert await GitHubContents(RemoteConfig()).get("/x") == {"type": "file", "content": ""}


class TestThroughInterpreter:
    @pytest.fixture
    def interpreter(self):
        config = Config()
        fs = RemoteFilesystem(GitHubContents(config.remote))
        return CommandInterpreter(fs, ThemeRegistry(), config)

    @pytest.mark.asyncio
    async def test_truncated_listing_reports_ls_error(self, captured, interpreter):
        captured["response"] = TruncatedResponse()
        out = await interpreter.execute("ls", WorkingDirectory())
        assert out.texts() == ["Error: Could not list directory contents."]

    @pytest.mark.asyncio
    async def test_truncated_file_reports_cat_error(self, captured, interpreter):
        captured["response"] = TruncatedResponse()
        out = await interpreter.execute("cat README.md", WorkingDirectory())
        assert out.texts()[0] == "File 'README.md' not found or cannot be read."
