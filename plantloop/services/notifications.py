"""
Notification Channels
=====================

Best-effort side channel for process alerts (out-of-range readings).

Every channel exposes a single ``send(message)`` method. Channels may raise;
the event log that dispatches to them logs the failure and carries on, so a
broken mail server never stops the monitoring loop.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from collections.abc import Callable
from dataclasses import dataclass
from email.mime.text import MIMEText
from typing import Protocol

from plantloop.domain.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def send(self, message: str) -> None: ...


class LoggingNotifier:
    """Default channel: writes alerts to the log and counts them."""

    def __init__(self, level: int = logging.WARNING) -> None:
        self.level = level
        self.sent_count = 0

    def send(self, message: str) -> None:
        self.sent_count += 1
        logger.log(self.level, "ALERT: %s", message)


class CallbackNotifier:
    """Forwards alerts to any single-argument callable."""

    def __init__(self, callback: Callable[[str], object]) -> None:
        self._callback = callback

    def send(self, message: str) -> None:
        self._callback(message)


@dataclass
class EmailConfig:
    """Configuration for email sending."""

    smtp_host: str
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True
    from_address: str | None = None
    timeout_seconds: float = 10.0

    @property
    def sender(self) -> str:
        """Get the sender address."""
        return self.from_address or self.smtp_username or "plantloop@localhost"


class EmailNotifier:
    """
    SMTP alert channel.

    Each alert becomes one plain-text email. No retries; transport errors are
    raised as :class:`ExternalServiceError`.
    """

    subject = "[PlantLoop] Process alert"

    def __init__(self, config: EmailConfig, to_address: str) -> None:
        self.config = config
        self.to_address = to_address

    def _build_message(self, message: str) -> MIMEText:
        mime = MIMEText(message, "plain", "utf-8")
        mime["Subject"] = self.subject
        mime["From"] = self.config.sender
        mime["To"] = self.to_address
        return mime

    def send(self, message: str) -> None:
        cfg = self.config
        if not cfg.smtp_host:
            raise ExternalServiceError("SMTP host not configured")

        mime = self._build_message(message)
        try:
            with smtplib.SMTP(cfg.smtp_host, cfg.smtp_port, timeout=cfg.timeout_seconds) as server:
                if cfg.smtp_use_tls:
                    server.starttls(context=ssl.create_default_context())
                if cfg.smtp_username and cfg.smtp_password:
                    server.login(cfg.smtp_username, cfg.smtp_password)
                server.sendmail(cfg.sender, self.to_address, mime.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            raise ExternalServiceError(
                f"Failed to send alert email: {exc}",
                detail={"smtp_host": cfg.smtp_host, "to": self.to_address},
            ) from exc

        logger.info("Alert email sent to %s", self.to_address)
