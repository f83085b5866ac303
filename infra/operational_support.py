from __future__ import annotations

import json
import logging
import os
import re
import traceback
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import date, datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Iterator, Mapping

from infra.path import user_data_dir
from infra.version import get_app_version

REDACTED_EMAIL = "<redacted-email>"

_TRACE_ID_CTX: ContextVar[str | None] = ContextVar("flow_trace_id", default=None)
_EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_trace_id() -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"run-{stamp}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    value = _TRACE_ID_CTX.get()
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


@contextmanager
def bind_trace_id(trace_id: str | None = None) -> Iterator[str]:
    """Tag every log record and support event emitted inside the block."""
    normalized = (trace_id or "").strip() or create_trace_id()
    token = _TRACE_ID_CTX.set(normalized)
    try:
        yield normalized
    finally:
        _TRACE_ID_CTX.reset(token)


def redact_text(value: str) -> str:
    # Assignees are often e-mail addresses.
    return _EMAIL_PATTERN.sub(REDACTED_EMAIL, str(value or ""))


def redact_value(value: Any) -> Any:
    if value is None or isinstance(value, (int, float, bool)):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(key): redact_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [redact_value(item) for item in value]
    return redact_text(str(value))


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


class OperationalSupport:
    """Append-only JSONL journal of notable runs (exports, failures) for support."""

    def __init__(self, events_path: str | Path | None = None) -> None:
        if events_path is None:
            events_path = user_data_dir() / "logs" / "support-events.jsonl"
        self._events_path = Path(events_path)
        self._events_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()

    @property
    def events_path(self) -> Path:
        return self._events_path

    def emit_event(
        self,
        *,
        event_type: str,
        message: str,
        level: str = "INFO",
        trace_id: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> str:
        resolved_trace = (trace_id or current_trace_id() or create_trace_id()).strip()
        payload: dict[str, Any] = {
            "timestamp_utc": _utc_now_iso(),
            "event_type": (event_type or "").strip() or "support.event",
            "level": (level or "INFO").strip().upper(),
            "trace_id": resolved_trace,
            "message": redact_text(message or ""),
            "app_version": get_app_version(),
            "pid": os.getpid(),
        }
        if data:
            payload["data"] = redact_value(dict(data))

        line = json.dumps(payload, ensure_ascii=True, sort_keys=True)
        with self._lock:
            with self._events_path.open("a", encoding="utf-8") as handle:
                handle.write(line)
                handle.write("\n")
        return resolved_trace

    def capture_exception(self, exc: BaseException, *, context: str) -> str:
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return self.emit_event(
            event_type="app.failure",
            level="ERROR",
            message=f"{context} failed: {exc}",
            data={
                "context": context,
                "exception_type": type(exc).__name__,
                "code": getattr(exc, "code", None),
                "stacktrace": stack,
            },
        )

    def read_events(self, *, trace_id: str | None = None) -> list[dict[str, Any]]:
        if not self._events_path.exists():
            return []
        expected = (trace_id or "").strip()
        events: list[dict[str, Any]] = []
        for line in self._events_path.read_text(encoding="utf-8", errors="ignore").splitlines():
            if not line.strip():
                continue
            try:
                payload = json.loads(line)
            except json.JSONDecodeError:
                continue
            if not isinstance(payload, dict):
                continue
            if expected and str(payload.get("trace_id") or "").strip() != expected:
                continue
            events.append(payload)
        return events


_GLOBAL_SUPPORT: OperationalSupport | None = None


def get_operational_support() -> OperationalSupport:
    global _GLOBAL_SUPPORT
    if _GLOBAL_SUPPORT is None:
        _GLOBAL_SUPPORT = OperationalSupport()
    return _GLOBAL_SUPPORT


__all__ = [
    "OperationalSupport",
    "TraceIdLogFilter",
    "bind_trace_id",
    "create_trace_id",
    "current_trace_id",
    "get_operational_support",
    "redact_text",
    "redact_value",
]
