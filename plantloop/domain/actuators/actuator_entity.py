"""
Actuator Domain Entity

Controllable output with a power level in ``[0, 100]`` and an active flag.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from plantloop.enums.events import AdjustOutcome

MIN_LEVEL = 0.0
MAX_LEVEL = 100.0


def clamp(value: float, low: float = MIN_LEVEL, high: float = MAX_LEVEL) -> float:
    """Limit ``value`` to ``[low, high]``."""
    return max(low, min(high, float(value)))


@dataclass
class ActuatorEntity:
    """
    Actuator entity with domain logic.

    Created inactive. While inactive the level is always 0 and power
    adjustments are ignored.
    """

    kind: str
    level: float = 0.0
    active: bool = False

    def __post_init__(self) -> None:
        self.level = clamp(self.level) if self.active else 0.0

    def start(self) -> None:
        self.active = True

    def stop(self) -> None:
        self.active = False
        self.level = 0.0

    def adjust_power(self, requested: float) -> AdjustOutcome:
        """
        Set the power level, clamped to ``[0, 100]``.

        Returns ``AdjustOutcome.ACTUATOR_INACTIVE`` without touching the level
        when the actuator is stopped; callers decide whether to report it.
        """
        if not self.active:
            return AdjustOutcome.ACTUATOR_INACTIVE
        self.level = clamp(requested)
        return AdjustOutcome.APPLIED

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "level": self.level, "active": self.active}
