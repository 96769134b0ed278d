"""Virtual path helpers.

Paths are absolute, '/'-rooted, and never end in '/' except the root itself.
Only single-level '..' is understood; there is no '.' segment collapsing.
"""

ROOT = "/"


def _normalize(path: str) -> str:
    path = path.rstrip("/")
    return path or ROOT


def resolve(current: str, target: str) -> str:
    """Resolve a cd-style target against the current directory."""
    if not target:
        return ROOT
    if target == ".":
        return current
    if target == "..":
        return parent(current)
    if target.startswith("/"):
        return _normalize(target)
    return join(current, target.rstrip("/"))


def join(directory: str, name: str) -> str:
    if directory == ROOT:
        return f"/{name}"
    return f"{directory}/{name}"


def parent(path: str) -> str:
    """Strip the last segment. The parent of root is root."""
    return path[: path.rfind("/")] or ROOT


def leaf(path: str) -> str:
    return path[path.rfind("/") + 1 :]


def prompt_path(path: str) -> str:
    """Prompt form of a path: '~' for root, '~/js' below it."""
    return "~" if path == ROOT else f"~{path}"


def pwd_path(path: str, home: str = "/home/guest") -> str:
    return home if path == ROOT else f"{home}{path}"
