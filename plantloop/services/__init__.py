from plantloop.services.notifications import (
    CallbackNotifier,
    EmailConfig,
    EmailNotifier,
    LoggingNotifier,
    Notifier,
)

__all__ = [
    "CallbackNotifier",
    "EmailConfig",
    "EmailNotifier",
    "LoggingNotifier",
    "Notifier",
]
