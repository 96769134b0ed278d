import time
import traceback

from repo_shell.types import text_preview, ts_str


class DebugLogger:
    """Manages optional debug log files for output, remote fetch, and command streams."""

    OUTPUT_LOG = "repo_shell_output.log"
    FETCH_LOG = "repo_shell_fetch.log"
    COMMAND_LOG = "repo_shell_commands.log"

    def __init__(self):
        self.enabled = False
        self._output_fh = None
        self._fetch_fh = None
        self._command_fh = None

    def start(self):
        self._output_fh = open(self.OUTPUT_LOG, "a", encoding="utf-8")
        self._fetch_fh = open(self.FETCH_LOG, "a", encoding="utf-8")
        self._command_fh = open(self.COMMAND_LOG, "a", encoding="utf-8")
        self.enabled = True
        sep = f"\n{'='*60}\n  Session started: {time.strftime('%Y-%m-%d %H:%M:%S')}\n{'='*60}\n"
        for fh in (self._output_fh, self._fetch_fh, self._command_fh):
            fh.write(sep)
            fh.flush()

    def stop(self):
        self.enabled = False
        for fh in (self._output_fh, self._fetch_fh, self._command_fh):
            if fh:
                try:
                    fh.close()
                except OSError:
                    pass
        self._output_fh = self._fetch_fh = self._command_fh = None

    def log_output(self, text: str):
        if not self.enabled or not self._output_fh:
            return
        for line in text.split("\n"):
            self._output_fh.write(f"{ts_str(time.time())} | {line}\n")
        self._output_fh.flush()

    def log_fetch(self, path: str, ok: bool, detail: str = "", elapsed: float = 0.0):
        if not self.enabled or not self._fetch_fh:
            return
        status = "OK " if ok else "ERR"
        self._fetch_fh.write(
            f"{ts_str(time.time())} {status} | {path}  ({elapsed * 1000:.0f} ms)"
            + (f"  | {text_preview(detail)}" if detail else "")
            + "\n"
        )
        self._fetch_fh.flush()

    def log_command(self, line: str, cwd: str):
        if not self.enabled or not self._command_fh:
            return
        self._command_fh.write(f"{ts_str(time.time())} {cwd} $ {line}\n")
        self._command_fh.flush()

    def log_error(self, line: str, exc: BaseException):
        if not self.enabled or not self._command_fh:
            return
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        self._command_fh.write(f"{ts_str(time.time())} ERROR running {line!r}\n{tb}")
        self._command_fh.flush()
