"""
Plant configuration schema.

Describes the sensors, actuators and routing table a simulation run is built
from. Loaded from JSON by the driver CLI.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

from plantloop.domain.control import DEFAULT_ROUTES, ControlRoute, build_routing_table
from plantloop.domain.exceptions import ConfigurationError
from plantloop.enums.events import ActuatorKind, SensorKind


class SensorSpec(BaseModel):
    kind: str = Field(min_length=1)
    min_value: float
    max_value: float
    operational: bool = True

    @model_validator(mode="after")
    def _check_bounds(self) -> "SensorSpec":
        if self.min_value > self.max_value:
            raise ValueError(f"sensor {self.kind}: min_value {self.min_value} > max_value {self.max_value}")
        return self


class ActuatorSpec(BaseModel):
    kind: str = Field(min_length=1)


class RouteSpec(BaseModel):
    sensor_kind: str = Field(min_length=1)
    actuator_kind: str = Field(min_length=1)
    target: float
    gain_p: float = Field(default=1.0, ge=0.0)
    gain_i: float = Field(default=0.5, ge=0.0)

    def to_route(self) -> ControlRoute:
        return ControlRoute(
            sensor_kind=self.sensor_kind,
            actuator_kind=self.actuator_kind,
            target=self.target,
            gain_p=self.gain_p,
            gain_i=self.gain_i,
        )


class PlantConfig(BaseModel):
    """Sensors, actuators and routes for one simulated plant."""

    sensors: list[SensorSpec] = Field(default_factory=list)
    actuators: list[ActuatorSpec] = Field(default_factory=list)
    routes: list[RouteSpec] = Field(default_factory=list)
    seed: int | None = None

    def routing_table(self) -> dict[str, ControlRoute]:
        return build_routing_table(route.to_route() for route in self.routes)


def default_plant_config() -> PlantConfig:
    """Water level and pressure loop with the default routing table."""
    return PlantConfig(
        sensors=[
            SensorSpec(kind=SensorKind.WATER_LEVEL.value, min_value=1.0, max_value=10.0),
            SensorSpec(kind=SensorKind.PRESSURE.value, min_value=0.5, max_value=5.0),
        ],
        actuators=[
            ActuatorSpec(kind=ActuatorKind.PUMP.value),
            ActuatorSpec(kind=ActuatorKind.VALVE.value),
        ],
        routes=[
            RouteSpec(
                sensor_kind=route.sensor_kind,
                actuator_kind=route.actuator_kind,
                target=route.target,
                gain_p=route.gain_p,
                gain_i=route.gain_i,
            )
            for route in DEFAULT_ROUTES.values()
        ],
    )


def load_plant_config(path: str | Path) -> PlantConfig:
    """
    Read and validate a plant configuration file.

    Raises:
        ConfigurationError: if the file cannot be read or fails validation
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read plant config {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Plant config {path} is not valid JSON: {exc}") from exc

    try:
        return PlantConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid plant config {path}",
            detail={"errors": exc.errors(include_url=False)},
        ) from exc
