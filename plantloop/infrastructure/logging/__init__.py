from plantloop.infrastructure.logging.event_log import (
    EventLog,
    EventRecord,
    FileLogSink,
    LogSink,
    format_entry,
)

__all__ = ["EventLog", "EventRecord", "FileLogSink", "LogSink", "format_entry"]
