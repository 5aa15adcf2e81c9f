"""Centralized exception hierarchy for PlantLoop.

All domain and service exceptions inherit from :class:`PlantLoopError` so that
the driver can catch a single base class when it needs a broad safety net, yet
still match on specific subclasses where narrower handling is appropriate.

Hierarchy
---------
::

    PlantLoopError (base)
    ├── ValidationError              (bad input from caller)
    │   └── InvalidBoundsError       (sensor bounds with min > max)
    ├── NotFoundError                (entity does not exist)
    ├── ConflictError                (state-transition misuse)
    │   ├── AlreadyRunningError
    │   └── NotRunningError
    ├── ServiceError                 (collaborator failure)
    │   ├── SinkUnavailableError     (log persistence target unreachable)
    │   └── ExternalServiceError     (notification transport)
    └── ConfigurationError           (missing / invalid config)

An inactive actuator is *not* an exception; see
:class:`plantloop.enums.events.AdjustOutcome`.
"""

from __future__ import annotations


class PlantLoopError(Exception):
    """Base exception for all PlantLoop errors.

    Parameters
    ----------
    message:
        Human-readable description.
    detail:
        Optional machine-readable context dict attached to the error for
        structured logging.
    """

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


# ── Caller errors ────────────────────────────────────────────────────


class ValidationError(PlantLoopError):
    """Caller supplied invalid or incomplete input."""


class InvalidBoundsError(ValidationError):
    """Sensor bounds where the minimum exceeds the maximum."""


class NotFoundError(PlantLoopError):
    """Requested entity does not exist."""


class ConflictError(PlantLoopError):
    """Operation conflicts with the current supervisor state."""


class AlreadyRunningError(ConflictError):
    """``start()`` called while the supervisor is already running."""


class NotRunningError(ConflictError):
    """``stop()`` called while the supervisor is stopped."""


# ── Collaborator errors ──────────────────────────────────────────────


class ServiceError(PlantLoopError):
    """Failure in a service or external collaborator."""


class SinkUnavailableError(ServiceError):
    """Event log persistence target could not be written."""


class ExternalServiceError(ServiceError):
    """Third-party or network dependency failure (SMTP and friends)."""


class ConfigurationError(PlantLoopError):
    """Missing or invalid application configuration."""
