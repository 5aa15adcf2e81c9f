"""
Sensor Domain Package
=====================
"""

from plantloop.domain.sensors.sampling import (
    FixedSampler,
    Sampler,
    SequenceSampler,
    UniformRandomSampler,
)
from plantloop.domain.sensors.sensor_entity import SensorEntity

__all__ = [
    "FixedSampler",
    "Sampler",
    "SensorEntity",
    "SequenceSampler",
    "UniformRandomSampler",
]
