import time


def ts_str(t: float) -> str:
    lt = time.localtime(t)
    return time.strftime("%H:%M:%S", lt)


def safe_text(s: str) -> str:
    """Make text safe for a curses cell row: tabs become spaces, other control chars are dropped."""
    s = s.replace("\t", "    ")
    return "".join(ch for ch in s if ch.isprintable())


def text_preview(s: str, max_len: int = 120) -> str:
    # Keep log lines on one row
    s = s.replace("\r", "\\r").replace("\n", "\\n")
    if len(s) > max_len:
        s = s[:max_len] + "\u2026"
    return s
