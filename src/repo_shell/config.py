"""Shell configuration: which repository to browse, prompt identity, profile
text, theme and UI limits.

Config files are a small YAML subset read by `parse_simple_yaml`: scalars,
`- ` lists, indented mappings, `#` comments, and single or double quoted
strings (double quotes understand backslash escapes).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib.resources import as_file, files
from pathlib import Path
from typing import Callable

# --- YAML subset ---


def parse_simple_yaml(text: str) -> dict:
    """Parse a simple YAML document into a Python dict."""
    lines = text.split("\n")
    return _parse_block(lines, 0, 0)[0]


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip())


def _is_blank(line: str) -> bool:
    stripped = line.lstrip()
    return not stripped or stripped.startswith("#")


def _parse_block(lines: list[str], start: int, base_indent: int) -> tuple[dict | list, int]:
    """Parse lines from `start` while they stay at `base_indent` or deeper."""
    result: dict | list = {}
    i = start

    while i < len(lines):
        line = lines[i]
        if _is_blank(line):
            i += 1
            continue

        indent = _indent_of(line)
        if indent < base_indent:
            break
        stripped = line.lstrip()

        if stripped.startswith("- "):
            if not isinstance(result, list):
                result = []
            item, i = _parse_list_item(lines, i, indent)
            result.append(item)
            continue

        colon_pos = _find_unquoted_colon(stripped)
        if colon_pos <= 0 or isinstance(result, list):
            i += 1
            continue

        key = stripped[:colon_pos].strip()
        value_part = _remove_inline_comment(stripped[colon_pos + 1 :].strip())
        if value_part:
            result[key] = _parse_value(value_part)
            i += 1
            continue

        # Nested block: first non-blank line deeper than this key
        j = i + 1
        while j < len(lines) and _is_blank(lines[j]):
            j += 1
        if j < len(lines) and _indent_of(lines[j]) > indent:
            result[key], i = _parse_block(lines, j, _indent_of(lines[j]))
        else:
            result[key] = None
            i += 1

    return result, i


def _parse_list_item(lines: list[str], i: int, indent: int) -> tuple[object, int]:
    """Parse one '- ' item; an inline 'key: value' starts a dict item."""
    content = lines[i].lstrip()[2:].strip()
    colon_pos = _find_unquoted_colon(content) if not _is_quoted_string(content) else -1
    if colon_pos <= 0:
        return _parse_value(content), i + 1

    value_part = content[colon_pos + 1 :].strip()
    item = {content[:colon_pos].strip(): _parse_value(value_part) if value_part else None}
    i += 1
    content_indent = indent + 2
    while i < len(lines):
        if _is_blank(lines[i]):
            i += 1
            continue
        next_indent = _indent_of(lines[i])
        next_stripped = lines[i].lstrip()
        if next_indent < content_indent or next_stripped.startswith("- "):
            break
        next_colon = _find_unquoted_colon(next_stripped)
        if next_colon <= 0:
            break
        next_value = _remove_inline_comment(next_stripped[next_colon + 1 :].strip())
        item[next_stripped[:next_colon].strip()] = _parse_value(next_value) if next_value else None
        i += 1
    return item, i


def _scan_unquoted(s: str):
    """Yield (index, char) for characters outside single or double quotes."""
    in_single = in_double = False
    for i, c in enumerate(s):
        if c == "'" and not in_double:
            in_single = not in_single
        elif c == '"' and not in_single:
            in_double = not in_double
        elif not in_single and not in_double:
            yield i, c


def _find_unquoted_colon(s: str) -> int:
    """Index of the first key separator outside quotes, or -1."""
    for i, c in _scan_unquoted(s):
        if c == ":":
            return i
    return -1


def _is_quoted_string(s: str) -> bool:
    s = s.strip()
    return (s.startswith('"') and s.endswith('"')) or (s.startswith("'") and s.endswith("'"))


def _remove_inline_comment(s: str) -> str:
    """Remove an inline comment; only '#' preceded by a space counts."""
    for i, c in _scan_unquoted(s):
        if c == "#" and i > 0 and s[i - 1] == " ":
            return s[:i].rstrip()
    return s


def _parse_value(s: str) -> str | int | float | bool | None:
    """Scalar to None, bool, int, float or str."""
    s = s.strip()
    if not s or s.lower() in ("null", "~", "none"):
        return None
    if s.lower() in ("true", "yes", "on"):
        return True
    if s.lower() in ("false", "no", "off"):
        return False

    if len(s) >= 2:
        if s[0] == '"' and s[-1] == '"':
            return _unescape_double_quoted(s[1:-1])
        if s[0] == "'" and s[-1] == "'":
            return s[1:-1].replace("''", "'")

    try:
        if "." in s:
            return float(s)
        return int(s)
    except ValueError:
        return s


_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"',
    "/": "/", "b": "\b", "f": "\f", "0": "\0",
}


def _unescape_double_quoted(s: str) -> str:
    """Expand backslash escapes inside a double-quoted scalar."""
    result = []
    i = 0
    while i < len(s):
        if s[i] == "\\" and i + 1 < len(s):
            # Unknown escapes are kept as-is
            result.append(_ESCAPES.get(s[i + 1], s[i : i + 2]))
            i += 2
        else:
            result.append(s[i])
            i += 1
    return "".join(result)


# --- Settings ---


@dataclass
class RemoteConfig:
    """Where the virtual filesystem comes from (GitHub contents API)."""

    api_base: str = "https://api.github.com"
    web_base: str = "https://github.com"
    owner: str = "Peetzie"
    repo: str = "whoami.sh"
    branch: str = "main"
    token: str | None = None
    timeout: float | None = None


@dataclass
class PromptConfig:
    """Prompt identity: user@host:dir$"""

    user: str = "guest"
    host: str = "peetzie"
    home: str = "/home/guest"


@dataclass
class ProfileConfig:
    """Text and links behind the informational commands."""

    name: str = "guest"
    birth_date: str | None = None
    about: str = "Hi! This terminal browses a GitHub repository. Try ls, cd and cat."
    about_short: str = "A small terminal that browses a GitHub repository."
    education: str = "No education details configured."
    email: str | None = None
    github: str | None = None
    linkedin: str | None = None


@dataclass
class UIConfig:
    """UI settings."""

    max_output_lines: int = 5000
    open_delay: float = 0.7


@dataclass
class Config:
    """Everything the shell reads from a config file."""

    remote: RemoteConfig = field(default_factory=RemoteConfig)
    prompt: PromptConfig = field(default_factory=PromptConfig)
    profile: ProfileConfig = field(default_factory=ProfileConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    theme: str = "catppuccin-mocha"


# --- Lookup ---


def _get_user_data_dir() -> Path:
    """$HOME/.repo-shell"""
    return Path.home() / ".repo-shell"


def _is_path_like(name: str) -> bool:
    return "/" in name or "\\" in name or name.endswith(".yml")


def _candidates(name: str) -> list[tuple[str, Callable[[], Path | None]]]:
    """(label, resolver) per search location, user dir first, bundled last."""
    filename = f"{name}.yml"
    user_path = _get_user_data_dir() / "configs" / filename
    cwd_path = Path.cwd() / "configs" / filename

    def bundled() -> Path | None:
        try:
            with as_file(files("repo_shell.configs").joinpath(filename)) as p:
                return Path(p)
        except (ModuleNotFoundError, FileNotFoundError, TypeError):
            return None

    return [
        (str(user_path), lambda: user_path),
        (str(cwd_path), lambda: cwd_path),
        (f"repo_shell.configs/{filename} (bundled)", bundled),
    ]


def _find_config_file(config_name_or_path: str) -> Path | None:
    """Resolve a config name or path to an existing file.

    Path-like arguments (containing a slash or ending in .yml) are used as
    given. Bare names are looked up in ~/.repo-shell/configs, ./configs and
    the bundled configs, in that order.
    """
    if _is_path_like(config_name_or_path):
        path = Path(config_name_or_path).expanduser()
        return path if path.is_file() else None

    for _, resolve in _candidates(config_name_or_path):
        path = resolve()
        if path is not None and path.is_file():
            return path
    return None


def load_config(config_name_or_path: str | None = None) -> Config:
    """Read a config by name or path and overlay it on the defaults.

    A missing "default" is not an error; the built-in settings are used.
    Any other missing config raises FileNotFoundError listing where it was
    looked for.
    """
    name = config_name_or_path or "default"
    config = get_default_config()
    config_path = _find_config_file(name)

    if config_path is None:
        if name == "default":
            return config
        if _is_path_like(name):
            raise FileNotFoundError(f"Config file not found: {name}")
        searched = "\n  - ".join(label for label, _ in _candidates(name))
        raise FileNotFoundError(f"Config '{name}' not found. Searched:\n  - {searched}")

    with open(config_path, encoding="utf-8") as f:
        _merge_config(config, parse_simple_yaml(f.read()))
    return config


def _str_or_none(value) -> str | None:
    return None if value is None else str(value)


def _merge_config(config: Config, data: dict):
    """Overlay parsed YAML sections onto `config`; unknown keys are ignored."""
    if not isinstance(data, dict):
        return

    if "remote" in data and isinstance(data["remote"], dict):
        remote = data["remote"]
        for key in ("api_base", "web_base", "owner", "repo", "branch"):
            if remote.get(key) is not None:
                setattr(config.remote, key, str(remote[key]).rstrip("/"))
        if "token" in remote:
            config.remote.token = _str_or_none(remote["token"])
        if "timeout" in remote:
            config.remote.timeout = float(remote["timeout"]) if remote["timeout"] is not None else None

    if "prompt" in data and isinstance(data["prompt"], dict):
        prompt = data["prompt"]
        for key in ("user", "host", "home"):
            if prompt.get(key) is not None:
                setattr(config.prompt, key, str(prompt[key]))

    if "profile" in data and isinstance(data["profile"], dict):
        profile = data["profile"]
        for key in ("name", "about", "about_short", "education"):
            if profile.get(key) is not None:
                setattr(config.profile, key, str(profile[key]))
        for key in ("birth_date", "email", "github", "linkedin"):
            if key in profile:
                setattr(config.profile, key, _str_or_none(profile[key]))

    if "ui" in data and isinstance(data["ui"], dict):
        ui = data["ui"]
        if "max_output_lines" in ui:
            config.ui.max_output_lines = int(ui["max_output_lines"])
        if "open_delay" in ui:
            config.ui.open_delay = float(ui["open_delay"])

    if data.get("theme") is not None:
        config.theme = str(data["theme"])


def get_default_config() -> Config:
    """Built-in settings: the Peetzie/whoami.sh repository, guest prompt."""
    return Config()
