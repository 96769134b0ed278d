from __future__ import annotations

import asyncio
import time
import webbrowser

from repo_shell.config import Config
from repo_shell.controller import InputController
from repo_shell.debug_log import DebugLogger
from repo_shell.interpreter import CommandInterpreter
from repo_shell.output import LineKind, OutputBuffer
from repo_shell.remote import GitHubContents
from repo_shell.themes import ThemeRegistry
from repo_shell.ui import ShellUI
from repo_shell.vfs import RemoteFilesystem

# UI loop tick; getch never blocks, so this bounds input latency
_TICK = 0.025


def _make_url_opener(open_delay: float):
    """Open links shortly after the message announcing them has been drawn."""

    def open_url(url: str):
        loop = asyncio.get_running_loop()
        loop.call_later(open_delay, webbrowser.open, url)

    return open_url


async def _main_loop(ui: ShellUI, controller: InputController):
    controller.start()
    ui.draw()
    while not controller.quit_requested:
        while True:
            ch = ui.stdscr.getch()
            if ch == -1:
                break
            event = ui.handle_key(ch)
            if event is not None:
                controller.feed(event)
        ui.draw()
        await asyncio.sleep(_TICK)


def run_client(stdscr, config: Config, color: bool = True, debug: bool = False):
    logger = DebugLogger()
    if debug:
        logger.start()

    fs = RemoteFilesystem(GitHubContents(config.remote), logger=logger)
    themes = ThemeRegistry(active=config.theme)
    interpreter = CommandInterpreter(fs, themes, config)
    output = OutputBuffer(max_lines=config.ui.max_output_lines, logger=logger)
    controller = InputController(
        interpreter,
        output,
        config.prompt,
        logger=logger,
        on_open_url=_make_url_opener(config.ui.open_delay),
    )
    ui = ShellUI(stdscr, output, controller.session, themes, color=color, debug_logger=logger)
    themes.on_change = ui.apply_theme

    try:
        asyncio.run(_main_loop(ui, controller))
    except KeyboardInterrupt:
        return
    except Exception as e:
        # Try to show error briefly
        output.append(f"Fatal error: {e}", LineKind.ERROR)
        ui.draw()
        time.sleep(2)
    finally:
        logger.stop()
