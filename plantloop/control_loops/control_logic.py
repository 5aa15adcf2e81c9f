"""
ControlLogic: proportional-integral correction and range checking.

The integral term is approximated as half of the instantaneous error rather
than a running sum, so the controller keeps no memory between calls.
"""

from __future__ import annotations

from plantloop.domain.actuators.actuator_entity import clamp
from plantloop.domain.control import CorrectionRequest
from plantloop.domain.sensors.sensor_entity import SensorEntity


class ControlLogic:
    """Stateless controller. Every method is a pure function of its inputs."""

    def correct(self, current: float, target: float, gain_p: float, gain_i: float) -> float:
        """
        Compute the actuator level for a reading.

        Args:
            current: Latest sensor value
            target: Desired value
            gain_p: Proportional gain
            gain_i: Integral gain, applied to ``error / 2``

        Returns:
            Action clamped to ``[0, 100]``
        """
        error = target - current
        action = gain_p * error + gain_i * (error / 2)
        return clamp(action)

    def correct_request(self, request: CorrectionRequest) -> float:
        return self.correct(request.current, request.target, request.gain_p, request.gain_i)

    def check_range(self, sensor: SensorEntity) -> bool:
        """True when the sensor's last reading violates its bounds."""
        return sensor.is_out_of_range()
