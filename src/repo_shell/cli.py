import argparse
import curses

from repo_shell import __version__
from repo_shell.app import run_client
from repo_shell.config import load_config
from repo_shell.themes import DEFAULT_THEMES


def _parse_repo(value: str) -> tuple[str, str]:
    """Split OWNER/NAME into its parts."""
    owner, sep, name = value.strip().strip("/").partition("/")
    if not sep or not owner or not name or "/" in name:
        raise argparse.ArgumentTypeError(f"expected OWNER/NAME, got '{value}'")
    return owner, name


def main():
    p = argparse.ArgumentParser(description="Curses shell for browsing a GitHub repository")
    p.add_argument("-v", "--version", action="version",
                   version=f"%(prog)s {__version__}")
    p.add_argument("-c", "--config", default="default",
                   help="Configuration name or path (searches ~/.repo-shell/configs/, ./configs/, or use full path)")
    p.add_argument("--repo", type=_parse_repo, default=None, metavar="OWNER/NAME",
                   help="Repository to browse - overrides config")
    p.add_argument("--branch", default=None,
                   help="Branch or ref to browse - overrides config")
    p.add_argument("--theme", choices=[t.key for t in DEFAULT_THEMES], default=None,
                   help="Initial theme - overrides config")
    p.add_argument("--no-color", action="store_true", default=False,
                   help="Disable color rendering")
    p.add_argument("-d", "--debug", action="store_true", default=False,
                   help="Enable debug logging to repo_shell_*.log files in current directory")
    args = p.parse_args()

    # Load configuration
    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        p.error(str(e))

    # CLI arguments override config values
    if args.repo is not None:
        config.remote.owner, config.remote.repo = args.repo
    if args.branch is not None:
        config.remote.branch = args.branch
    if args.theme is not None:
        config.theme = args.theme

    curses.wrapper(run_client, config,
                   color=not args.no_color, debug=args.debug)
