"""
logging_utils.py

Shared logging helpers for the salary scraper, the Sheets uploader and
the ATS extractors. Kept free of imports from the other project modules
so any of them can use it without circular imports.
"""

from __future__ import annotations

import datetime as _dt
import os
import sys
import traceback

from wcwidth import wcswidth

# Logs go to stderr so they do not fight with the progress line on stdout
LOG_STREAM = sys.stderr
PROGRESS_STREAM = sys.stdout
_PROGRESS_ACTIVE = False

LEVEL_WIDTH = 5
EVENT_WIDTH = 90

RESET = "\033[0m"
DIM = "\033[2m"
RED = "\033[31m"
YELLOW = "\033[33m"
GREEN = "\033[32m"
CYAN = "\033[36m"

LEVEL_COLOR = {
    "ERROR": RED,
    "WARN": YELLOW,
    "INFO": CYAN,
    "KEEP": GREEN,
    "SKIP": DIM,
    "DONE": GREEN,
    "DEBUG": DIM,
}


def _ansi_ok() -> bool:
    """Return True if we should emit ANSI colors."""
    try:
        return LOG_STREAM.isatty() and os.environ.get("NO_COLOR") is None
    except (AttributeError, ValueError):
        return False


def _debug_enabled() -> bool:
    return os.environ.get("SCRAPER_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def _log(level: str, message: str, *, prefix: str = "") -> None:
    """
    Core logger used by the helpers below.

    Example output:
    [2026-10-18 14:45:10] [INFO ] [GS] Uploaded 4 jobs to tab 'Jobs'.
    """
    label = (level or "").upper()
    if label == "DEBUG" and not _debug_enabled():
        return

    progress_clear_if_needed()
    prefix_part = f"[{prefix}] " if prefix else ""
    line = f"[{_timestamp()}] [{label:<{LEVEL_WIDTH}}] {prefix_part}{message}"

    if _ansi_ok():
        line = f"{LEVEL_COLOR.get(label, RESET)}{line}{RESET}"

    print(line, file=LOG_STREAM)


def log_line(level: str, msg: str, *, prefix: str = "") -> None:
    """Log with an arbitrary level label (e.g. KEEP / SKIP)."""
    _log(level, msg, prefix=prefix)


def info(message: str, *, prefix: str = "") -> None:
    _log("INFO", message, prefix=prefix)


def warn(message: str, *, prefix: str = "") -> None:
    """Warning message (non-fatal)."""
    _log("WARN", message, prefix=prefix)


def debug(message: str, *, prefix: str = "") -> None:
    """Verbose message, only shown when SCRAPER_DEBUG is set."""
    _log("DEBUG", message, prefix=prefix)


def exception(message: str, *, prefix: str = "") -> None:
    """Log an error followed by the traceback of the exception being handled."""
    _log("ERROR", message, prefix=prefix)
    for ln in traceback.format_exc().rstrip().splitlines():
        _log("ERROR", ln, prefix=prefix)


def done_log(message: str, *, prefix: str = "") -> None:
    """End-of-run or summary style message."""
    _log("DONE", message, prefix=prefix)


def _cells(text: str) -> int:
    n = wcswidth(text)
    return len(text) if n < 0 else n


def _pad_display(text: str, width: int) -> str:
    """Pad or trim `text` to `width` terminal cells (emoji count as two)."""
    text = " ".join(text.split())
    cells = _cells(text)
    if cells <= width:
        return text + " " * (width - cells)

    out = ""
    for ch in text:
        if _cells(out + ch + "…") > width:
            break
        out += ch
    return out + "…"


def log_event(level: str, title: str, *, left: str = "", right: str = "") -> None:
    """
    Write a padded event line so the right-hand notes line up.

    Example:
        log_event("KEEP", "VP People @ Acme", right="$150,000 - $180,000")
    """
    mid = _pad_display(title, EVENT_WIDTH) if right else " ".join(title.split())
    _log(level, f"{left}{mid}{right}")


def progress(i: int, total: int, message: str = "", *, prefix: str = "") -> None:
    """
    Render a single line progress update on stdout.
    No timestamp so the line can be redrawn in place.
    """
    global _PROGRESS_ACTIVE

    prefix_part = f"[{prefix}] " if prefix else ""
    line = f"{prefix_part}{i}/{total} {message}".rstrip()
    print(f"\r{line}", end="", file=PROGRESS_STREAM, flush=True)
    _PROGRESS_ACTIVE = True


def progress_clear_if_needed() -> None:
    """
    If the last output was a progress update drawn with \\r, print a
    newline so the next log starts on a fresh row.
    """
    global _PROGRESS_ACTIVE
    if _PROGRESS_ACTIVE:
        print("", file=PROGRESS_STREAM, flush=True)
        _PROGRESS_ACTIVE = False
