"""Structured logging: console output plus a JSON-lines search event log."""

import contextvars
import json
import logging
import os
import sys
import threading
import time
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from personfinder.core.config import config


def _format_duration(seconds: float) -> str:
    if seconds < 0:
        return "0s"
    if seconds >= 60:
        m = int(seconds // 60)
        s = seconds % 60
        if s < 0.05:
            return f"{m}m"
        return f"{m}m {s:.0f}s" if s >= 1 else f"{m}m {s:.1f}s"
    if seconds >= 0.05:
        return f"{seconds:.1f}s"
    if seconds > 0:
        return "<0.1s"
    return "0s"


def _short_reason(reason: str | None, max_len: int = 80) -> str:
    """One-line short reason for console (failed search)."""
    if not reason or not reason.strip():
        return ""
    s = reason.strip().replace("\n", " ").strip()
    return s[:max_len] + "..." if len(s) > max_len else s


# (start time, generation) of the search running in the current task
_search_ctx: contextvars.ContextVar[tuple[float, int] | None] = contextvars.ContextVar(
    "search_request", default=None
)


def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def _c(role: str) -> str:
    if not _use_color():
        return ""
    codes = {
        "dim": "\033[38;5;239m",
        "query": "\033[38;5;81m",
        "done_ok": "\033[38;5;78m",
        "done_fail": "\033[38;5;203m",
        "duration": "\033[38;5;221m",
    }
    return codes.get(role, "")


def _reset() -> str:
    if not _use_color():
        return ""
    return "\033[0m"


@dataclass
class LogEvent:
    event_type: str
    timestamp: str
    data: dict[str, Any]

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class PersonFinderLogger:
    def __init__(self):
        config.logs_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = config.logs_dir / "search.log"
        self._file_lock = threading.Lock()
        self._log_file_handle = open(self.log_file, "a", encoding="utf-8")
        self._setup_console_logger()

    def _setup_console_logger(self):
        self.console = logging.getLogger("personfinder")
        self.console.setLevel(logging.DEBUG)
        self._console_formatter = logging.Formatter(
            "%(asctime)s │ %(message)s", datefmt="%H:%M:%S"
        )
        if not self.console.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(logging.INFO)
            handler.setFormatter(self._console_formatter)
            self.console.addHandler(handler)
        # httpx logs every request at INFO; keep it out of the console
        logging.getLogger("httpx").setLevel(logging.WARNING)

    def log_event(self, event: LogEvent) -> None:
        with self._file_lock:
            self._log_file_handle.write(event.to_json() + "\n")
            self._log_file_handle.flush()

    def _timestamp(self) -> str:
        return datetime.now().isoformat()

    def _elapsed(self) -> float:
        pair = _search_ctx.get()
        if pair is None:
            return 0.0
        return time.monotonic() - pair[0]

    def search_submitted(self, generation: int, payload: dict[str, Any]):
        _search_ctx.set((time.monotonic(), generation))
        event = LogEvent(
            event_type="SEARCH_SUBMITTED",
            timestamp=self._timestamp(),
            data={"generation": generation, "query": payload},
        )
        self.log_event(event)
        self.console.info(
            f"Search #{generation}: {_c('query')}{payload.get('query', '')}{_reset()}"
        )

    def search_request(self, endpoint: str, timeout_ms: int):
        event = LogEvent(
            event_type="SEARCH_REQUEST",
            timestamp=self._timestamp(),
            data={"endpoint": endpoint, "timeout_ms": timeout_ms},
        )
        self.log_event(event)
        self.console.debug(f"POST {endpoint} (timeout {timeout_ms} ms)")

    def fixture_used(self, delay_ms: int):
        event = LogEvent(
            event_type="FIXTURE_USED",
            timestamp=self._timestamp(),
            data={"delay_ms": delay_ms},
        )
        self.log_event(event)
        self.console.info(f"{_c('dim')}Using fixture data ({delay_ms} ms delay){_reset()}")

    def search_settled(self, generation: int, counts: dict[str, int]):
        elapsed = self._elapsed()
        _search_ctx.set(None)
        event = LogEvent(
            event_type="SEARCH_SETTLED",
            timestamp=self._timestamp(),
            data={
                "generation": generation,
                "counts": counts,
                "duration_seconds": round(elapsed, 3),
            },
        )
        self.log_event(event)
        summary = ", ".join(f"{name} {n}" for name, n in counts.items())
        dur = f"{_c('duration')}{_format_duration(elapsed)}{_reset()}"
        self.console.info(
            f"{_c('done_ok')}✓ Done{_reset()}  search #{generation}  in {dur}  [{summary}]"
        )

    def search_failed(self, generation: int, kind: str, reason: str):
        elapsed = self._elapsed()
        _search_ctx.set(None)
        event = LogEvent(
            event_type="SEARCH_FAILED",
            timestamp=self._timestamp(),
            data={
                "generation": generation,
                "error_kind": kind,
                "error_reason": reason[:500],
                "duration_seconds": round(elapsed, 3),
            },
        )
        self.log_event(event)
        dur = f"{_c('duration')}{_format_duration(elapsed)}{_reset()}"
        self.console.warning(
            f"{_c('done_fail')}✗ Failed{_reset()}  search #{generation}  in {dur}  "
            f"[{kind}] {_short_reason(reason)}"
        )

    def search_superseded(self, generation: int, latest: int):
        _search_ctx.set(None)
        event = LogEvent(
            event_type="SEARCH_SUPERSEDED",
            timestamp=self._timestamp(),
            data={"generation": generation, "latest": latest},
        )
        self.log_event(event)
        self.console.debug(f"Search #{generation} superseded by #{latest}; outcome discarded")

    def unexpected_failure(self, generation: int, exception: Exception):
        """A failure no rule could classify; keeps the traceback for diagnosis."""
        event = LogEvent(
            event_type="ERROR",
            timestamp=self._timestamp(),
            data={
                "generation": generation,
                "exception_type": type(exception).__name__,
                "exception": str(exception)[:500],
            },
        )
        self.log_event(event)
        self.console.error(
            f"❌ Search #{generation} raised {type(exception).__name__}: {exception}",
            exc_info=exception,
        )

    def info(self, message: str, *args):
        self.console.info(message, *args)

    def warning(self, message: str, *args):
        event = LogEvent(
            event_type="WARNING",
            timestamp=self._timestamp(),
            data={"message": message[:500]},
        )
        self.log_event(event)
        self.console.warning(f"⚠️ {message}", *args)


logger = PersonFinderLogger()
