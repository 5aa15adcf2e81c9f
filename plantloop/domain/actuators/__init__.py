from plantloop.domain.actuators.actuator_entity import MAX_LEVEL, MIN_LEVEL, ActuatorEntity, clamp

__all__ = ["MAX_LEVEL", "MIN_LEVEL", "ActuatorEntity", "clamp"]
