import json
import logging
import re
from email import message_from_string
from unittest.mock import patch

import pytest

from plantloop.config import load_config
from plantloop.services.notifications import EmailNotifier
from plantloop.workers import simulator_cli
from plantloop.workers.simulator_cli import build_notifier, build_parser, main

LINE = re.compile(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] .+$")

ENV_VARS = (
    "PLANTLOOP_CYCLE_COUNT",
    "PLANTLOOP_CYCLE_INTERVAL",
    "PLANTLOOP_SEED",
    "PLANTLOOP_PLANT_CONFIG",
    "PLANTLOOP_SMTP_HOST",
    "PLANTLOOP_SMTP_PORT",
    "PLANTLOOP_SMTP_USERNAME",
    "PLANTLOOP_SMTP_PASSWORD",
    "PLANTLOOP_SMTP_USE_TLS",
    "PLANTLOOP_ALERT_FROM",
    "PLANTLOOP_ALERT_TO",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    before = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in before:
            root.removeHandler(handler)


def test_parser_collects_targets():
    args = build_parser().parse_args(["--target", "WaterLevel=6", "--target", "Pressure=2.0"])
    assert dict(args.targets) == {"WaterLevel": 6.0, "Pressure": 2.0}


def test_parser_rejects_malformed_target():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--target", "WaterLevel"])


def test_main_runs_cycles_and_exports_log(tmp_path):
    log_path = tmp_path / "events.log"

    with patch.object(simulator_cli.time, "sleep") as sleep:
        code = main(["--cycles", "3", "--interval", "0.5", "--seed", "1", "--log-path", str(log_path)])

    assert code == 0
    assert sleep.call_count == 2
    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert all(LINE.match(line) for line in lines)
    messages = [line.split("] ", 1)[1] for line in lines]
    assert messages[:4] == ["Sensor WaterLevel added", "Sensor Pressure added", "Actuator Pump added", "Actuator Valve added"]
    assert messages[4] == "System started"
    assert messages[-1] == "System stopped"
    assert sum(1 for m in messages if m.startswith("Pump adjusted")) == 3
    assert sum(1 for m in messages if m.startswith("Valve adjusted")) == 3


def test_main_with_plant_config_file(tmp_path):
    plant = tmp_path / "plant.json"
    plant.write_text(
        json.dumps(
            {
                "sensors": [{"kind": "Tank", "min_value": 0, "max_value": 1}],
                "actuators": [{"kind": "Inlet"}],
                "routes": [{"sensor_kind": "Tank", "actuator_kind": "Inlet", "target": 5}],
            }
        ),
        encoding="utf-8",
    )
    log_path = tmp_path / "events.log"

    code = main(["--config", str(plant), "--cycles", "1", "--interval", "0", "--log-path", str(log_path)])

    assert code == 0
    assert any("Inlet adjusted to" in line for line in log_path.read_text(encoding="utf-8").splitlines())


def test_main_append_mode_keeps_previous_runs(tmp_path):
    log_path = tmp_path / "events.log"
    args = ["--cycles", "0", "--log-path", str(log_path)]

    main(args)
    first = log_path.read_text(encoding="utf-8").splitlines()
    main(args + ["--append"])

    assert len(log_path.read_text(encoding="utf-8").splitlines()) == 2 * len(first)


def test_main_returns_1_when_export_fails(tmp_path):
    assert main(["--cycles", "1", "--interval", "0", "--log-path", str(tmp_path)]) == 1


def test_main_returns_2_on_bad_configuration(tmp_path):
    assert main(["--config", str(tmp_path / "missing.json"), "--cycles", "1"]) == 2
    assert main(["--cycles", "-2"]) == 2


def test_main_stops_cleanly_on_keyboard_interrupt(tmp_path):
    log_path = tmp_path / "events.log"

    with patch.object(simulator_cli.time, "sleep", side_effect=KeyboardInterrupt):
        code = main(["--cycles", "5", "--interval", "1", "--log-path", str(log_path)])

    assert code == 0
    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert lines[-1].endswith("System stopped")
    assert sum(1 for line in lines if "Pump adjusted" in line) == 1


def test_cli_flags_override_invalid_env_values(monkeypatch, tmp_path):
    monkeypatch.setenv("PLANTLOOP_CYCLE_COUNT", "-1")
    monkeypatch.setenv("PLANTLOOP_CYCLE_INTERVAL", "-5")
    log_path = tmp_path / "events.log"

    code = main(["--cycles", "1", "--interval", "0", "--log-path", str(log_path)])

    assert code == 0
    assert sum(1 for line in log_path.read_text(encoding="utf-8").splitlines() if "Pump adjusted" in line) == 1


def test_invalid_env_value_without_override_is_rejected(monkeypatch, tmp_path):
    monkeypatch.setenv("PLANTLOOP_CYCLE_COUNT", "-1")

    assert main(["--interval", "0", "--log-path", str(tmp_path / "events.log")]) == 2


# ---------------------------------------------------------------------------
# Email alerts
# ---------------------------------------------------------------------------


def test_build_notifier_is_none_without_smtp_settings():
    assert build_notifier(load_config()) is None


def test_build_notifier_needs_a_recipient(monkeypatch):
    monkeypatch.setenv("PLANTLOOP_SMTP_HOST", "smtp.example.com")
    assert build_notifier(load_config()) is None


def test_build_notifier_from_env(monkeypatch):
    monkeypatch.setenv("PLANTLOOP_SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("PLANTLOOP_SMTP_PORT", "2525")
    monkeypatch.setenv("PLANTLOOP_SMTP_USE_TLS", "false")
    monkeypatch.setenv("PLANTLOOP_ALERT_FROM", "plant@example.com")
    monkeypatch.setenv("PLANTLOOP_ALERT_TO", "ops@example.com")

    notifier = build_notifier(load_config())

    assert isinstance(notifier, EmailNotifier)
    assert notifier.to_address == "ops@example.com"
    assert notifier.config.smtp_host == "smtp.example.com"
    assert notifier.config.smtp_port == 2525
    assert notifier.config.smtp_use_tls is False
    assert notifier.config.sender == "plant@example.com"


@patch("plantloop.services.notifications.smtplib.SMTP")
def test_main_emails_out_of_range_alerts(mock_smtp, monkeypatch, tmp_path):
    monkeypatch.setenv("PLANTLOOP_SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("PLANTLOOP_SMTP_USE_TLS", "false")
    monkeypatch.setenv("PLANTLOOP_ALERT_TO", "ops@example.com")
    server = mock_smtp.return_value.__enter__.return_value
    log_path = tmp_path / "events.log"

    # 7.0 is inside WaterLevel bounds (1-10) and above Pressure bounds (0.5-5)
    with patch("plantloop.domain.sensors.sampling.UniformRandomSampler.sample", return_value=7.0):
        code = main(["--cycles", "1", "--interval", "0", "--log-path", str(log_path)])

    assert code == 0
    mock_smtp.assert_called_once_with("smtp.example.com", 587, timeout=10.0)
    server.sendmail.assert_called_once()
    sender, recipient, body = server.sendmail.call_args.args
    assert recipient == "ops@example.com"
    payload = message_from_string(body).get_payload(decode=True).decode("utf-8")
    assert payload.startswith("Pressure out of range: 7.00")


@patch("plantloop.services.notifications.smtplib.SMTP", side_effect=OSError("connection refused"))
def test_main_keeps_running_when_email_fails(mock_smtp, monkeypatch, tmp_path):
    monkeypatch.setenv("PLANTLOOP_SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("PLANTLOOP_ALERT_TO", "ops@example.com")
    log_path = tmp_path / "events.log"

    with patch("plantloop.domain.sensors.sampling.UniformRandomSampler.sample", return_value=7.0):
        code = main(["--cycles", "2", "--interval", "0", "--log-path", str(log_path)])

    assert code == 0
    assert mock_smtp.call_count == 2
    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert sum(1 for line in lines if "Pressure out of range" in line) == 2
    assert lines[-1].endswith("System stopped")
