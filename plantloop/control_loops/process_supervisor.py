"""
ProcessSupervisor: drives the monitoring-and-control cycle for one plant.

Each cycle:
    1. Sample every operational sensor; out-of-range readings are recorded
       and sent to the notification channel.
    2. For every routing-table entry, correct the routed actuator from the
       reading captured in step 1 and record the action.

The supervisor owns its sensors and actuators. ControlLogic and EventLog
only compute and record; all state changes are applied here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from plantloop.control_loops.control_logic import ControlLogic
from plantloop.domain.actuators.actuator_entity import ActuatorEntity
from plantloop.domain.control import (
    DEFAULT_ROUTES,
    ControlMetrics,
    ControlRoute,
    CorrectionRequest,
    CycleReport,
    RoutingTable,
)
from plantloop.domain.exceptions import AlreadyRunningError, NotFoundError, NotRunningError
from plantloop.domain.sensors.sampling import Sampler, UniformRandomSampler
from plantloop.domain.sensors.sensor_entity import SensorEntity
from plantloop.enums.events import AdjustOutcome, EventSeverity, SupervisorState
from plantloop.infrastructure.logging.event_log import EventLog, EventRecord
from plantloop.utils.time import utc_now

if TYPE_CHECKING:
    from plantloop.schemas.plant import PlantConfig
    from plantloop.services.notifications import Notifier

logger = logging.getLogger(__name__)


class ProcessSupervisor:
    """
    Owns the plant's sensors and actuators and runs control cycles.

    State machine: STOPPED -> RUNNING -> STOPPED (restartable). Calling
    ``start()`` while running raises AlreadyRunningError and ``stop()`` while
    stopped raises NotRunningError.
    """

    def __init__(
        self,
        routes: RoutingTable | None = None,
        controller: ControlLogic | None = None,
        event_log: EventLog | None = None,
    ):
        self._routes: dict[str, ControlRoute] = dict(DEFAULT_ROUTES if routes is None else routes)
        self.controller = controller or ControlLogic()
        self.event_log = event_log if event_log is not None else EventLog()
        self.metrics = ControlMetrics()
        self._sensors: list[SensorEntity] = []
        self._actuators: list[ActuatorEntity] = []
        self._state = SupervisorState.STOPPED

    @classmethod
    def from_config(
        cls,
        plant_config: "PlantConfig",
        sampler: Sampler | None = None,
        notifier: "Notifier | None" = None,
    ) -> "ProcessSupervisor":
        """Build a supervisor with the sensors, actuators and routes in ``plant_config``."""
        shared_sampler = sampler or UniformRandomSampler(plant_config.seed)
        supervisor = cls(routes=plant_config.routing_table(), event_log=EventLog(notifier=notifier))
        for spec in plant_config.sensors:
            supervisor.add_sensor(
                SensorEntity(
                    kind=spec.kind,
                    min_value=spec.min_value,
                    max_value=spec.max_value,
                    operational=spec.operational,
                    sampler=shared_sampler,
                )
            )
        for spec in plant_config.actuators:
            supervisor.add_actuator(ActuatorEntity(kind=spec.kind))
        return supervisor

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def state(self) -> SupervisorState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == SupervisorState.RUNNING

    @property
    def sensors(self) -> tuple[SensorEntity, ...]:
        return tuple(self._sensors)

    @property
    def actuators(self) -> tuple[ActuatorEntity, ...]:
        return tuple(self._actuators)

    @property
    def routes(self) -> dict[str, ControlRoute]:
        return dict(self._routes)

    def get_sensor(self, kind: str, operational_only: bool = False) -> SensorEntity | None:
        """First registered sensor of ``kind``."""
        for sensor in self._sensors:
            if sensor.kind == kind and (sensor.operational or not operational_only):
                return sensor
        return None

    def get_actuator(self, kind: str) -> ActuatorEntity | None:
        """First registered actuator of ``kind``."""
        for actuator in self._actuators:
            if actuator.kind == kind:
                return actuator
        return None

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def add_sensor(self, sensor: SensorEntity) -> None:
        self._sensors.append(sensor)
        self.event_log.record(f"Sensor {sensor.kind} added")

    def add_actuator(self, actuator: ActuatorEntity) -> None:
        self._actuators.append(actuator)
        if self.is_running:
            actuator.start()
        self.event_log.record(f"Actuator {actuator.kind} added")

    def calibrate_sensor(self, kind: str, new_min: float, new_max: float) -> None:
        """
        Recalibrate the first sensor of ``kind`` and record the change.

        Raises:
            NotFoundError: no sensor of that kind is registered
            InvalidBoundsError: ``new_min > new_max``; nothing is recorded
        """
        sensor = self.get_sensor(kind)
        if sensor is None:
            raise NotFoundError(f"No sensor of kind {kind}", detail={"kind": kind})
        sensor.calibrate(new_min, new_max)
        self.event_log.record(f"{kind} calibrated to {sensor.min_value:.2f}-{sensor.max_value:.2f}")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        if self.is_running:
            raise AlreadyRunningError("Process supervisor is already running")
        for actuator in self._actuators:
            actuator.start()
        self._state = SupervisorState.RUNNING
        self.event_log.record("System started")
        logger.info("Supervisor started with %d sensor(s), %d actuator(s)", len(self._sensors), len(self._actuators))

    def stop(self) -> None:
        if not self.is_running:
            raise NotRunningError("Process supervisor is not running")
        for actuator in self._actuators:
            actuator.stop()
        self._state = SupervisorState.STOPPED
        self.event_log.record("System stopped")
        logger.info("Supervisor stopped after %d cycle(s)", self.metrics.cycles)

    # ------------------------------------------------------------------
    # Control cycle
    # ------------------------------------------------------------------
    def run_cycle(self, targets: Mapping[str, float] | None = None) -> CycleReport:
        """
        Run one monitoring cycle.

        Args:
            targets: Optional per-sensor-kind setpoints overriding the
                routing table targets for this cycle only

        Returns:
            CycleReport with the readings, violations and applied levels
        """
        targets = targets or {}
        report = CycleReport()

        self._sample_sensors(report)
        for route in self._routes.values():
            self._apply_route(route, targets.get(route.sensor_kind, route.target), report)

        self.metrics.cycles += 1
        self.metrics.last_cycle_time = utc_now()
        logger.debug(
            "Cycle %d complete (violations=%d actions=%d skipped=%d)",
            self.metrics.cycles,
            len(report.violations),
            len(report.actions),
            len(report.skipped),
        )
        return report

    def _sample_sensors(self, report: CycleReport) -> None:
        for sensor in self._sensors:
            if not sensor.operational:
                logger.debug("Skipping non-operational sensor %s", sensor.kind)
                continue
            value = sensor.sample()
            report.readings.setdefault(sensor.kind, value)
            if self.controller.check_range(sensor):
                message = (
                    f"{sensor.kind} out of range: {value:.2f} "
                    f"(bounds {sensor.min_value:.2f}-{sensor.max_value:.2f})"
                )
                self.event_log.record(message, EventSeverity.WARNING)
                if not self.event_log.notify(message):
                    self.metrics.notifications_failed += 1
                self.metrics.out_of_range_events += 1
                report.violations.append(sensor.kind)

    def _apply_route(self, route: ControlRoute, target: float, report: CycleReport) -> None:
        sensor = self.get_sensor(route.sensor_kind, operational_only=True)
        actuator = self.get_actuator(route.actuator_kind)
        if sensor is None or actuator is None:
            return

        request = CorrectionRequest(
            current=sensor.current_value,
            target=target,
            gain_p=route.gain_p,
            gain_i=route.gain_i,
        )
        level = self.controller.correct_request(request)
        outcome = actuator.adjust_power(level)
        if outcome is AdjustOutcome.ACTUATOR_INACTIVE:
            self.event_log.record(
                f"{actuator.kind} inactive; adjustment to {level:.2f}% skipped",
                EventSeverity.WARNING,
            )
            self.metrics.corrections_skipped += 1
            report.skipped.append(actuator.kind)
            return

        self.event_log.record(
            f"{actuator.kind} adjusted to {actuator.level:.2f}% "
            f"({sensor.kind}={sensor.current_value:.2f}, target={target:.2f})"
        )
        self.metrics.corrections_applied += 1
        report.actions[actuator.kind] = actuator.level

    # ------------------------------------------------------------------
    # Event log access
    # ------------------------------------------------------------------
    def entries(self) -> tuple[EventRecord, ...]:
        return self.event_log.entries()

    def export_log(self, path: str | Path, append: bool = False) -> int:
        return self.event_log.export(path, append=append)
