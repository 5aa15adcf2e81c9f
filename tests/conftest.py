"""
Shared test fixtures for the PlantLoop test suite.

Provides:
- A fixed clock so event timestamps are predictable
- A recording notifier that captures every alert
- A supervisor wired with the default WaterLevel/Pressure plant and forced
  sensor readings

Usage:
    def test_example(supervisor, notifier):
        supervisor.start()
        supervisor.run_cycle()
        assert notifier.messages == []
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest

from plantloop.control_loops.process_supervisor import ProcessSupervisor
from plantloop.domain.actuators.actuator_entity import ActuatorEntity
from plantloop.domain.sensors.sampling import FixedSampler
from plantloop.domain.sensors.sensor_entity import SensorEntity
from plantloop.infrastructure.logging.event_log import EventLog

# ---------------------------------------------------------------------------
# Logging: keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("plantloop").setLevel(logging.WARNING)

FIXED_TIME = datetime(2026, 1, 15, 8, 30, 0, tzinfo=timezone.utc)


class RecordingNotifier:
    """Notifier double that keeps every message it is asked to send."""

    def __init__(self):
        self.messages: list[str] = []

    def send(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIME


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def event_log(notifier, fixed_clock):
    return EventLog(notifier=notifier, clock=fixed_clock)


@pytest.fixture
def water_level_sensor():
    return SensorEntity(kind="WaterLevel", min_value=1.0, max_value=10.0, sampler=FixedSampler(3.0))


@pytest.fixture
def pressure_sensor():
    return SensorEntity(kind="Pressure", min_value=0.5, max_value=5.0, sampler=FixedSampler(2.0))


@pytest.fixture
def supervisor(event_log, water_level_sensor, pressure_sensor):
    """Default plant: WaterLevel->Pump, Pressure->Valve, not yet started."""
    sup = ProcessSupervisor(event_log=event_log)
    sup.add_sensor(water_level_sensor)
    sup.add_sensor(pressure_sensor)
    sup.add_actuator(ActuatorEntity(kind="Pump"))
    sup.add_actuator(ActuatorEntity(kind="Valve"))
    return sup
