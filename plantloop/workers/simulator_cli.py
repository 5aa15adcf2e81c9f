from __future__ import annotations

import argparse
import logging
import time
from dataclasses import replace

from plantloop.config import AppConfig, load_config, setup_logging
from plantloop.control_loops.process_supervisor import ProcessSupervisor
from plantloop.domain.exceptions import ConfigurationError, SinkUnavailableError
from plantloop.schemas.plant import default_plant_config, load_plant_config
from plantloop.services.notifications import EmailConfig, EmailNotifier, Notifier

logger = logging.getLogger(__name__)


def _parse_target(text: str) -> tuple[str, float]:
    kind, sep, value = text.partition("=")
    if not sep or not kind:
        raise argparse.ArgumentTypeError(f"expected KIND=VALUE, got {text!r}")
    try:
        return kind, float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"target for {kind} must be a number, got {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plantloop-sim",
        description="Run the water level / pressure control loop simulator.",
    )
    parser.add_argument("--config", dest="plant_config_path", help="Path to a JSON plant configuration")
    parser.add_argument("--cycles", dest="cycle_count", type=int, help="Number of cycles to run")
    parser.add_argument("--interval", dest="cycle_interval_seconds", type=float, help="Seconds between cycles")
    parser.add_argument("--seed", dest="sampler_seed", type=int, help="Seed for simulated sensor readings")
    parser.add_argument("--log-path", dest="event_log_path", help="Where to export the event log")
    parser.add_argument(
        "--append",
        dest="event_log_append",
        action="store_true",
        default=None,
        help="Append to the event log file instead of overwriting it",
    )
    parser.add_argument(
        "--target",
        dest="targets",
        action="append",
        type=_parse_target,
        default=[],
        metavar="KIND=VALUE",
        help="Override a sensor setpoint (repeatable)",
    )
    parser.add_argument("--debug", dest="DEBUG", action="store_true", default=None, help="Enable debug logging")
    return parser


def _merge_args(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    overrides = {
        key: value
        for key, value in vars(args).items()
        if key != "targets" and value is not None
    }
    merged = replace(config, **overrides)
    merged.validate()
    return merged


def build_notifier(config: AppConfig) -> Notifier | None:
    """Email notifier when SMTP alerts are configured, otherwise None (log only)."""
    if not config.email_alerts_enabled:
        return None
    email_config = EmailConfig(
        smtp_host=config.smtp_host,
        smtp_port=config.smtp_port,
        smtp_username=config.smtp_username,
        smtp_password=config.smtp_password,
        smtp_use_tls=config.smtp_use_tls,
        from_address=config.alert_from,
    )
    logger.info("Email alerts enabled: %s via %s", config.alert_to, config.smtp_host)
    return EmailNotifier(email_config, config.alert_to)


def run_simulation(config: AppConfig, targets: dict[str, float] | None = None) -> int:
    """Start the plant, run the configured cycles, stop, and export the log."""
    if config.plant_config_path:
        plant = load_plant_config(config.plant_config_path)
    else:
        plant = default_plant_config()
    if config.sampler_seed is not None:
        plant = plant.model_copy(update={"seed": config.sampler_seed})

    supervisor = ProcessSupervisor.from_config(plant, notifier=build_notifier(config))
    supervisor.start()
    try:
        for cycle in range(config.cycle_count):
            report = supervisor.run_cycle(targets)
            logger.info("Cycle %d: readings=%s actions=%s", cycle + 1, report.readings, report.actions)
            if cycle + 1 < config.cycle_count and config.cycle_interval_seconds > 0:
                time.sleep(config.cycle_interval_seconds)
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping supervisor...")
    finally:
        supervisor.stop()

    try:
        written = supervisor.export_log(config.event_log_path, append=config.event_log_append)
    except SinkUnavailableError as exc:
        logger.error("Failed to export event log: %s", exc)
        return 1

    logger.info("Exported %d event(s) to %s", written, config.event_log_path)
    logger.info("Metrics: %s", supervisor.metrics.to_dict())
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``plantloop-sim``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _merge_args(load_config(validate=False), args)
    except ConfigurationError as exc:
        setup_logging()
        logger.error("Configuration error: %s", exc)
        return 2

    setup_logging(debug=config.DEBUG, log_file=config.log_file, level=config.log_level)

    try:
        return run_simulation(config, dict(args.targets))
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
