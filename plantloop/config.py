"""
Configuration for PlantLoop
===========================
Runtime settings for the simulator driver, loaded from environment variables.
Sets up the logging configuration as well.
"""

import logging
import os
import sys
from contextlib import suppress
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from pathlib import Path

from plantloop.domain.exceptions import ConfigurationError


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int | None) -> int | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer.") from None


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be a number.") from None


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("PLANTLOOP_ENV", "development"))

    # Driver cadence
    cycle_count: int = field(default_factory=lambda: _env_int("PLANTLOOP_CYCLE_COUNT", 10))
    cycle_interval_seconds: float = field(default_factory=lambda: _env_float("PLANTLOOP_CYCLE_INTERVAL", 1.0))
    sampler_seed: int | None = field(default_factory=lambda: _env_int("PLANTLOOP_SEED", None))

    # Event log export
    event_log_path: str = field(default_factory=lambda: os.getenv("PLANTLOOP_EVENT_LOG_PATH", "logs/events.log"))
    event_log_append: bool = field(default_factory=lambda: _env_bool("PLANTLOOP_EVENT_LOG_APPEND", False))

    # Optional JSON plant description; the built-in plant is used when unset
    plant_config_path: str | None = field(default_factory=lambda: os.getenv("PLANTLOOP_PLANT_CONFIG") or None)

    log_level: str = field(default_factory=lambda: os.getenv("PLANTLOOP_LOG_LEVEL", "INFO"))
    log_file: str | None = field(default_factory=lambda: os.getenv("PLANTLOOP_LOG_FILE") or None)
    DEBUG: bool = field(default_factory=lambda: _env_bool("PLANTLOOP_DEBUG", False))

    # Email alerts; enabled when both a host and a recipient are set
    smtp_host: str | None = field(default_factory=lambda: os.getenv("PLANTLOOP_SMTP_HOST") or None)
    smtp_port: int = field(default_factory=lambda: _env_int("PLANTLOOP_SMTP_PORT", 587))
    smtp_username: str | None = field(default_factory=lambda: os.getenv("PLANTLOOP_SMTP_USERNAME") or None)
    smtp_password: str | None = field(default_factory=lambda: os.getenv("PLANTLOOP_SMTP_PASSWORD") or None)
    smtp_use_tls: bool = field(default_factory=lambda: _env_bool("PLANTLOOP_SMTP_USE_TLS", True))
    alert_from: str | None = field(default_factory=lambda: os.getenv("PLANTLOOP_ALERT_FROM") or None)
    alert_to: str | None = field(default_factory=lambda: os.getenv("PLANTLOOP_ALERT_TO") or None)

    @property
    def email_alerts_enabled(self) -> bool:
        return bool(self.smtp_host and self.alert_to)

    def validate(self) -> None:
        if self.cycle_count < 0:
            raise ConfigurationError("cycle_count must be >= 0", detail={"cycle_count": self.cycle_count})
        if self.cycle_interval_seconds < 0:
            raise ConfigurationError(
                "cycle_interval_seconds must be >= 0",
                detail={"cycle_interval_seconds": self.cycle_interval_seconds},
            )
        if self.plant_config_path and not Path(self.plant_config_path).exists():
            raise ConfigurationError(f"Plant config not found: {self.plant_config_path}")


def setup_logging(debug: bool = False, log_file: str | None = None, level: str = "INFO") -> None:
    """Setup logging configuration."""
    log_level = logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(log_level)

    # Avoid duplicate handlers when called more than once
    has_console = any(getattr(h, "name", "") == "plantloop_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "plantloop_file" for h in root.handlers)

    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "plantloop_console"
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if log_file and not has_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.name = "plantloop_file"
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def load_config(validate: bool = True) -> AppConfig:
    """
    Helper for callers to load and validate configuration.

    Pass ``validate=False`` when further overrides are merged before
    calling ``AppConfig.validate()``.
    """
    try:
        config = AppConfig()
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
    if validate:
        config.validate()
    return config
