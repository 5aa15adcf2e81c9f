from enum import Enum


class EventSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"


class SupervisorState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class AdjustOutcome(str, Enum):
    """Result of asking an actuator to change its power level."""

    APPLIED = "applied"
    ACTUATOR_INACTIVE = "actuator_inactive"


class SensorKind(str, Enum):
    """Sensor kinds used by the default plant."""

    WATER_LEVEL = "WaterLevel"
    PRESSURE = "Pressure"


class ActuatorKind(str, Enum):
    """Actuator kinds used by the default plant."""

    PUMP = "Pump"
    VALVE = "Valve"
