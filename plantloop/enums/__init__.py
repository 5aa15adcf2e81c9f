from plantloop.enums.events import (
    ActuatorKind,
    AdjustOutcome,
    EventSeverity,
    SensorKind,
    SupervisorState,
)

__all__ = [
    "ActuatorKind",
    "AdjustOutcome",
    "EventSeverity",
    "SensorKind",
    "SupervisorState",
]
