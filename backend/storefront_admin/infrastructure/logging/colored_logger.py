"""Colored table activity logger — ANSI-colored console lines for page fetches.

Makes it easy to follow what a table is doing in the terminal:

    🔵 Blue    — FETCH   (a page request and its outcome)
    🟣 Magenta — CURSOR  (cursor walk to reach a later page)
    🟡 Yellow  — COUNT   (count aggregation)
    ⚪ Gray    — DISCARD (a stale response dropped by latest-wins)
    🔴 Red     — ERROR
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


class TableActivity:
    """Activity kinds with their colors and icons."""

    FETCH = ("FETCH", _Colors.BLUE, "📄")
    CURSOR = ("CURSOR", _Colors.MAGENTA, "⏩")
    COUNT = ("COUNT", _Colors.YELLOW, "🔢")
    DISCARD = ("DISCARD", _Colors.GRAY, "🗑️")
    ERROR = ("ERROR", _Colors.RED, "❌")


def _details(kwargs: dict[str, Any]) -> str:
    if not kwargs:
        return ""
    joined = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {_Colors.GRAY}({joined}){_Colors.RESET}"


class TableActivityLogger:
    """Color-coded logger for table fetches.

    Usage:
        log = TableActivityLogger("firestore:orders")
        with log.timed_step(TableActivity.COUNT, "Counting orders"):
            total = await count_query.get()
    """

    def __init__(self, source: str):
        self._logger = logging.getLogger("TableActivity")
        self._source = source

    def _prefix(self, activity: tuple[str, str, str], bold: bool = False) -> str:
        label, color, icon = activity
        weight = _Colors.BOLD if bold else ""
        return f"{color}{weight}{icon} [{label}]{_Colors.RESET} {_Colors.DIM}{self._source}{_Colors.RESET}"

    def event(self, activity: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        _, color, _ = activity
        self._logger.info(
            f"{self._prefix(activity, bold=True)} {color}{message}{_Colors.RESET}{_details(kwargs)}"
        )

    def done(self, activity: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        self._logger.info(
            f"{self._prefix(activity)} {_Colors.GREEN}✓ {message}{_Colors.RESET}{_details(kwargs)}"
        )

    def discarded(self, generation: int, latest: int) -> None:
        self._logger.debug(
            f"{self._prefix(TableActivity.DISCARD)} {_Colors.GRAY}stale response "
            f"(generation {generation}, latest {latest}){_Colors.RESET}"
        )

    def error(self, message: str, error: BaseException | None = None) -> None:
        formatted = f"{self._prefix(TableActivity.ERROR, bold=True)} {_Colors.RED}{message}{_Colors.RESET}"
        if error is not None:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    @contextmanager
    def timed_step(self, activity: tuple[str, str, str], message: str, **kwargs: Any):
        """Log start/end of a backend call with the elapsed time."""
        self.event(activity, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.error(f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.done(activity, f"{message} — {elapsed:.2f}s")
