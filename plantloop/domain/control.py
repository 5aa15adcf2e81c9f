"""
Control System Domain Objects
==============================
Dataclasses for the routing table, controller input and loop metrics.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from plantloop.enums.events import ActuatorKind, SensorKind


@dataclass(frozen=True)
class ControlRoute:
    """One routing-table entry: which actuator a sensor drives, and how."""

    sensor_kind: str
    actuator_kind: str
    target: float
    gain_p: float = 1.0
    gain_i: float = 0.5


@dataclass(frozen=True)
class CorrectionRequest:
    """Input to a single correction computation. Not stored."""

    current: float
    target: float
    gain_p: float
    gain_i: float


RoutingTable = Mapping[str, ControlRoute]


def build_routing_table(routes: Iterable[ControlRoute]) -> dict[str, ControlRoute]:
    """Index routes by sensor kind, keeping the first route per kind."""
    table: dict[str, ControlRoute] = {}
    for route in routes:
        table.setdefault(route.sensor_kind, route)
    return table


DEFAULT_ROUTES: dict[str, ControlRoute] = build_routing_table(
    [
        ControlRoute(SensorKind.WATER_LEVEL.value, ActuatorKind.PUMP.value, target=5.0, gain_p=1.0, gain_i=0.5),
        ControlRoute(SensorKind.PRESSURE.value, ActuatorKind.VALVE.value, target=2.5, gain_p=1.0, gain_i=0.5),
    ]
)


@dataclass
class ControlMetrics:
    """Counters for supervisor activity."""

    cycles: int = 0
    out_of_range_events: int = 0
    corrections_applied: int = 0
    corrections_skipped: int = 0
    notifications_failed: int = 0
    last_cycle_time: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "cycles": self.cycles,
            "out_of_range_events": self.out_of_range_events,
            "corrections_applied": self.corrections_applied,
            "corrections_skipped": self.corrections_skipped,
            "notifications_failed": self.notifications_failed,
            "last_cycle_time": self.last_cycle_time.isoformat() if self.last_cycle_time else None,
        }


@dataclass
class CycleReport:
    """Outcome of one monitoring cycle."""

    readings: dict[str, float] = field(default_factory=dict)
    violations: list[str] = field(default_factory=list)
    actions: dict[str, float] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)
