"""PlantLoop: closed-loop water level and pressure control simulator."""

from plantloop.control_loops import ControlLogic, ProcessSupervisor
from plantloop.domain import ActuatorEntity, ControlRoute, SensorEntity
from plantloop.infrastructure.logging import EventLog

__version__ = "1.0.0"

__all__ = [
    "ActuatorEntity",
    "ControlLogic",
    "ControlRoute",
    "EventLog",
    "ProcessSupervisor",
    "SensorEntity",
]
