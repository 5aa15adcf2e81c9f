"""
Domain Layer
============
Entities and value objects for the process control loop.
"""

from plantloop.domain.actuators import ActuatorEntity
from plantloop.domain.control import (
    DEFAULT_ROUTES,
    ControlMetrics,
    ControlRoute,
    CorrectionRequest,
    CycleReport,
    build_routing_table,
)
from plantloop.domain.sensors import SensorEntity

__all__ = [
    "DEFAULT_ROUTES",
    "ActuatorEntity",
    "ControlMetrics",
    "ControlRoute",
    "CorrectionRequest",
    "CycleReport",
    "SensorEntity",
    "build_routing_table",
]
