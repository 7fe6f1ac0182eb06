"""In-memory history of control server log entries.

The buffer keeps the most recent entries for the ``/logs`` endpoint and
notifies listeners (e.g. a host tool window) as entries arrive.
"""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

MAX_LOG_ENTRIES = 10000

# Events carrying this component tag are mirrored into the buffer
SERVER_COMPONENT = "server"


@dataclass(frozen=True, slots=True)
class LogEntry:
    """A single buffered log line."""

    timestamp: datetime
    level: str
    message: str

    def format(self) -> str:
        ts = self.timestamp.strftime("%H:%M:%S.%f")[:-3]
        return f"[{ts}] [{self.level}] {self.message}"


class LogListener:
    """Receives buffer notifications. Override what you need."""

    def on_entry(self, entry: LogEntry) -> None:
        pass

    def on_cleared(self) -> None:
        pass


class ServerLogBuffer:
    """Bounded, thread-safe log history with listener fan-out."""

    def __init__(self, max_entries: int = MAX_LOG_ENTRIES) -> None:
        self._entries: deque[LogEntry] = deque(maxlen=max_entries)
        self._listeners: list[LogListener] = []
        self._lock = threading.Lock()

    def log(self, level: str, message: str) -> LogEntry:
        entry = LogEntry(timestamp=datetime.now(), level=level.upper(), message=message)
        with self._lock:
            self._entries.append(entry)
            listeners = list(self._listeners)
        for listener in listeners:
            listener.on_entry(entry)
        return entry

    def entries(self, limit: int | None = None) -> list[LogEntry]:
        """Snapshot of buffered entries, oldest first."""
        with self._lock:
            items = list(self._entries)
        if limit is not None:
            return items[-limit:] if limit > 0 else []
        return items

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            listeners = list(self._listeners)
        for listener in listeners:
            listener.on_cleared()

    def add_listener(self, listener: LogListener) -> Callable[[], None]:
        """Subscribe a listener. Returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def remove() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return remove

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_buffer = ServerLogBuffer()


def get_log_buffer() -> ServerLogBuffer:
    return _buffer


def _render_message(event_dict: dict[str, Any]) -> str:
    skip = {"event", "level", "timestamp", "component", "request_id", "logger"}
    extras = " ".join(f"{k}={v}" for k, v in event_dict.items() if k not in skip)
    event = str(event_dict.get("event", ""))
    return f"{event} {extras}" if extras else event


def capture_to_buffer(
    _logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog processor mirroring server-tagged events into the buffer."""
    if event_dict.get("component") == SERVER_COMPONENT:
        level = str(event_dict.get("level") or method_name)
        _buffer.log(level, _render_message(event_dict))
    return event_dict
