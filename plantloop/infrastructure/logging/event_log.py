"""
Append-only event log for the control loop.

Records live in memory in append order. Persistence is a separate step:
``flush(sink)`` writes every record as ``[<timestamp>] <message>`` to a
:class:`LogSink`, and ``export(path)`` does the same for a plain text file.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Protocol

from plantloop.domain.exceptions import SinkUnavailableError
from plantloop.enums.events import EventSeverity
from plantloop.services.notifications import LoggingNotifier, Notifier
from plantloop.utils.time import format_datetime, utc_now

logger = logging.getLogger(__name__)
event_logger = logging.getLogger("plantloop.events")

_LOG_LEVELS = {
    EventSeverity.INFO: logging.INFO,
    EventSeverity.WARNING: logging.WARNING,
}


@dataclass(frozen=True)
class EventRecord:
    timestamp: datetime
    message: str
    severity: EventSeverity = field(default=EventSeverity.INFO, compare=False)


class LogSink(Protocol):
    def write_lines(self, lines: Iterable[str]) -> None: ...


class FileLogSink:
    """Plain text file, one event per line."""

    def __init__(self, path: str | Path, append: bool = False) -> None:
        self.path = Path(path)
        self.append = append

    def write_lines(self, lines: Iterable[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        mode = "a" if self.append else "w"
        with self.path.open(mode, encoding="utf-8") as handle:
            for line in lines:
                handle.write(line + "\n")


def format_entry(record: EventRecord) -> str:
    return f"[{format_datetime(record.timestamp)}] {record.message}"


class EventLog:
    """Ordered, append-only record of timestamped events plus alert dispatch."""

    def __init__(
        self,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.notifier = notifier if notifier is not None else LoggingNotifier()
        self._clock = clock
        self._records: list[EventRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def record(self, message: str, severity: EventSeverity = EventSeverity.INFO) -> EventRecord:
        entry = EventRecord(timestamp=self._clock(), message=message, severity=severity)
        self._records.append(entry)
        event_logger.log(_LOG_LEVELS[severity], "%s", message)
        return entry

    def notify(self, message: str) -> bool:
        """Send an alert. Failures are logged, never raised."""
        try:
            self.notifier.send(message)
        except Exception as exc:
            logger.warning(
                "Notification via %s failed: %s",
                type(self.notifier).__name__,
                exc,
            )
            return False
        return True

    def entries(self) -> tuple[EventRecord, ...]:
        """Snapshot of all records as of this call."""
        return tuple(self._records)

    def flush(self, sink: LogSink) -> int:
        """
        Write every record to ``sink``.

        Returns:
            Number of lines handed to the sink

        Raises:
            SinkUnavailableError: if the sink cannot be written. Not retried.
        """
        lines = [format_entry(record) for record in self.entries()]
        try:
            sink.write_lines(lines)
        except OSError as exc:
            raise SinkUnavailableError(
                f"Event log sink unavailable: {exc}",
                detail={"sink": type(sink).__name__},
            ) from exc
        logger.info("Flushed %d event(s) to %s", len(lines), type(sink).__name__)
        return len(lines)

    def export(self, path: str | Path, append: bool = False) -> int:
        return self.flush(FileLogSink(path, append=append))
