from plantloop.schemas.plant import (
    ActuatorSpec,
    PlantConfig,
    RouteSpec,
    SensorSpec,
    default_plant_config,
    load_plant_config,
)

__all__ = [
    "ActuatorSpec",
    "PlantConfig",
    "RouteSpec",
    "SensorSpec",
    "default_plant_config",
    "load_plant_config",
]
