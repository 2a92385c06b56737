"""Typed Outcomes — expected, caller-recoverable results returned by handlers.

Invariants:
    - ValidationFailed and NotFound are values, not exceptions: the route decides
      how to present them
    - Outcomes are frozen; a handler result is never mutated after return
    - to_error() converts an outcome to the matching RestaurantsError for the HTTP boundary

Design Decisions:
    - Small dataclasses over a generic Result[T, E]: handlers return either a
      payload or one of these, and `isinstance` at the boundary reads plainly
"""

from dataclasses import dataclass, field

from restaurants.core.errors import (
    ErrorContext,
    RequestValidationFailedError,
    ResourceNotFoundError,
)


@dataclass(frozen=True)
class FieldError:
    """One violated field rule."""
    field: str
    message: str


@dataclass(frozen=True)
class ValidationFailed:
    """Aggregated rule violations. The handler was never invoked."""
    errors: tuple[FieldError, ...] = field(default_factory=tuple)

    def to_error(self) -> RequestValidationFailedError:
        return RequestValidationFailedError(
            [(e.field, e.message) for e in self.errors],
        )


@dataclass(frozen=True)
class NotFound:
    """Entity id does not exist, or a concurrent write made it effectively so."""
    resource_type: str
    resource_id: str

    def to_error(self) -> ResourceNotFoundError:
        return ResourceNotFoundError(
            self.resource_type, self.resource_id,
            ErrorContext(resource_id=self.resource_id),
        )


@dataclass(frozen=True)
class Updated:
    """Update applied."""


@dataclass(frozen=True)
class Deleted:
    """Row physically removed."""
