"""
Sensor Domain Entity
====================
Bounded measurable quantity with sampling and range checking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from plantloop.domain.exceptions import InvalidBoundsError
from plantloop.domain.sensors.sampling import Sampler, UniformRandomSampler


def _check_bounds(kind: str, min_value: float, max_value: float) -> None:
    if min_value > max_value:
        raise InvalidBoundsError(
            f"Invalid bounds for sensor {kind}: min {min_value} > max {max_value}",
            detail={"kind": kind, "min_value": min_value, "max_value": max_value},
        )


@dataclass
class SensorEntity:
    """
    Domain entity for a sensor.

    ``current_value`` changes only through :meth:`sample`. Bounds change only
    through :meth:`calibrate` and always satisfy ``min_value <= max_value``.
    """

    kind: str
    min_value: float
    max_value: float
    operational: bool = True
    sampler: Sampler = field(default_factory=UniformRandomSampler, repr=False)
    current_value: float = field(init=False)

    def __post_init__(self) -> None:
        _check_bounds(self.kind, self.min_value, self.max_value)
        self.current_value = float(self.min_value)

    def sample(self) -> float:
        """Draw a new reading from the sampler and keep it."""
        self.current_value = float(self.sampler.sample(self.min_value, self.max_value))
        return self.current_value

    def is_out_of_range(self) -> bool:
        """True when the last reading falls outside the current bounds."""
        return self.current_value < self.min_value or self.current_value > self.max_value

    def calibrate(self, new_min: float, new_max: float) -> None:
        """
        Replace the sensor bounds.

        Raises:
            InvalidBoundsError: if ``new_min > new_max``; prior bounds are kept.
        """
        _check_bounds(self.kind, new_min, new_max)
        self.min_value = float(new_min)
        self.max_value = float(new_max)

    def set_operational(self, operational: bool) -> None:
        self.operational = bool(operational)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "current_value": self.current_value,
            "min_value": self.min_value,
            "max_value": self.max_value,
            "operational": self.operational,
            "out_of_range": self.is_out_of_range(),
        }
