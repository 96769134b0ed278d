"""Input controller: turns key events into edits, recalls, completions and commands.

UI-agnostic; the curses front end decodes raw keys into KeyEvents and feeds
them here. Two modes:

    IDLE     no completion session
    CYCLING  a CompletionState is active; only COMPLETE keeps it alive

`dispatch` applies the synchronous part of every key immediately and returns
a coroutine for whatever has to wait on I/O (a completion lookup or a
command run). Completion results are checked against the session epoch
before they touch the buffer, so a result that arrives after the user kept
typing is dropped.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Coroutine

from repo_shell import paths
from repo_shell.completion import CompletionState, apply_completion, base_input, suggest
from repo_shell.interpreter import Outcome, WorkingDirectory
from repo_shell.output import LineKind, OutputLine
from repo_shell.session import Session

if TYPE_CHECKING:
    from repo_shell.config import PromptConfig
    from repo_shell.debug_log import DebugLogger
    from repo_shell.interpreter import CommandInterpreter
    from repo_shell.output import RenderSink

CLEAR_COMMAND = "clear"


class Key(Enum):
    CHAR = auto()
    BACKSPACE = auto()
    KILL_WORD = auto()
    COMPLETE = auto()
    HISTORY_PREV = auto()
    HISTORY_NEXT = auto()
    SUBMIT = auto()
    CLEAR_SCREEN = auto()


class Mode(Enum):
    IDLE = auto()
    CYCLING = auto()


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    char: str = ""


class InputController:
    def __init__(
        self,
        interpreter: "CommandInterpreter",
        sink: "RenderSink",
        prompt: "PromptConfig",
        session: Session | None = None,
        cwd: WorkingDirectory | None = None,
        logger: "DebugLogger | None" = None,
        on_open_url: Callable[[str], None] | None = None,
    ):
        self.interpreter = interpreter
        self.sink = sink
        self.prompt = prompt
        self.session = session or Session()
        self.cwd = cwd or WorkingDirectory()
        self.logger = logger
        self.on_open_url = on_open_url
        self.quit_requested = False
        # One command at a time so output blocks never interleave
        self._command_lock = asyncio.Lock()
        self._tasks: set[asyncio.Task] = set()

    @property
    def mode(self) -> Mode:
        return Mode.CYCLING if self.session.completion is not None else Mode.IDLE

    def prompt_text(self, cwd: str | None = None) -> str:
        where = paths.prompt_path(self.cwd.path if cwd is None else cwd)
        return f"{self.prompt.user}@{self.prompt.host}:{where}$"

    def start(self):
        """Prime an empty display: welcome banner and a fresh prompt."""
        for line in self.interpreter.welcome_lines():
            self.sink.append(line)
        self.sink.set_prompt(self.prompt_text())

    # --- Event entry points ---

    def feed(self, event: KeyEvent) -> asyncio.Task | None:
        """Handle a key from the UI loop without waiting on I/O."""
        pending = self.dispatch(event)
        if pending is None:
            return None
        task = asyncio.ensure_future(pending)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def handle(self, event: KeyEvent):
        """Handle a key and wait for any I/O it started."""
        pending = self.dispatch(event)
        if pending is not None:
            await pending

    def dispatch(self, event: KeyEvent) -> Coroutine | None:
        if event.key is Key.COMPLETE:
            return self._on_complete()

        # Every other key ends completion and outdates pending lookups
        self.session.invalidate()
        self.sink.clear_hints()

        if event.key is Key.CHAR:
            self.session.buffer.insert(event.char)
        elif event.key is Key.BACKSPACE:
            self.session.buffer.backspace()
        elif event.key is Key.KILL_WORD:
            self.session.buffer.kill_word_back()
        elif event.key is Key.HISTORY_PREV:
            text = self.session.history.navigate_up()
            if text is not None:
                self.session.buffer.set_text(text)
        elif event.key is Key.HISTORY_NEXT:
            text = self.session.history.navigate_down()
            if text is not None:
                self.session.buffer.set_text(text)
        elif event.key is Key.CLEAR_SCREEN:
            self.sink.clear()
            self.session.buffer.clear()
            self.sink.set_prompt(self.prompt_text())
        elif event.key is Key.SUBMIT:
            return self._on_submit()
        return None

    # --- Completion ---

    def _on_complete(self) -> Coroutine | None:
        line = self.session.line
        if not line.strip():
            return None
        state = self.session.completion
        if state is not None and state.base_input == base_input(line):
            self.session.buffer.set_text(apply_completion(line, state.advance()))
            self._show_cycle(state)
            return None
        # Fresh activation; any older lookup still in flight is now stale
        self.session.invalidate()
        self.sink.clear_hints()
        return self._activate(line, self.session.epoch)

    async def _activate(self, line: str, epoch: int):
        # A running cd may still change the directory
        async with self._command_lock:
            cwd = self.cwd.path
        if epoch != self.session.epoch:
            return
        candidates = await suggest(line, cwd, self.interpreter.fs, self.interpreter.themes)
        if epoch != self.session.epoch:
            return
        if not candidates:
            self.sink.show_hints([OutputLine("No completions found", LineKind.TIP)])
            return
        self.session.buffer.set_text(apply_completion(line, candidates[0]))
        if len(candidates) == 1:
            return
        state = CompletionState(base_input(line), candidates)
        self.session.completion = state
        self._show_cycle(state)

    def _show_cycle(self, state: CompletionState):
        n = len(state.candidates)
        self.sink.show_hints([
            OutputLine("   ".join(state.candidates)),
            OutputLine(f"[{state.index + 1}/{n}] {state.current} - Press Ctrl+U to cycle",
                       LineKind.TIP),
        ])

    # --- Submission ---

    def _on_submit(self) -> Coroutine | None:
        line = self.session.buffer.clear().strip()
        if not line:
            return None
        self.session.history.add(line)
        return self._run(line)

    async def _run(self, line: str):
        async with self._command_lock:
            cwd = self.cwd.path
            if self.logger:
                self.logger.log_command(line, cwd)
            if line.lower() != CLEAR_COMMAND:
                self.sink.append(f"{self.prompt_text(cwd)} {line}", LineKind.PROMPT)
            try:
                outcome = await self.interpreter.execute(
                    line, self.cwd, self.session.history.entries
                )
            except Exception as e:
                if self.logger:
                    self.logger.log_error(line, e)
                self.sink.append("Error executing command.", LineKind.ERROR)
                self.sink.set_prompt(self.prompt_text())
                return
            self._render(outcome)

    def _render(self, outcome: Outcome):
        for line in outcome.lines:
            self.sink.append(line.text, line.kind)
        if outcome.reset:
            self.reset()
            return
        if outcome.open_url and self.on_open_url:
            self.on_open_url(outcome.open_url)
        if outcome.quit:
            self.quit_requested = True
        self.sink.set_prompt(self.prompt_text(outcome.cwd))

    def reset(self):
        """Discard all output and return session, directory and cache to their initial state."""
        self.sink.clear()
        self.session.reset()
        self.cwd.reset()
        self.interpreter.fs.clear()
        self.start()
