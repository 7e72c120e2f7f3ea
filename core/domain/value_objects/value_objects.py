"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from ..enums import ActorRole


@dataclass(frozen=True)
class ExecutionID:
    """Unique identifier for workflow execution tracing."""

    value: UUID

    @classmethod
    def generate(cls) -> "ExecutionID":
        """Generate a new ExecutionID."""
        return cls(value=uuid4())

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)


@dataclass(frozen=True)
class Coordinates:
    """
    Geographic point in decimal degrees.

    CRITICAL: Always use Decimal, never float!
    """
    latitude: Decimal
    longitude: Decimal

    def __post_init__(self):
        for name in ("latitude", "longitude"):
            value = getattr(self, name)
            if not isinstance(value, Decimal):
                object.__setattr__(self, name, Decimal(str(value)))
        if not Decimal("-90") <= self.latitude <= Decimal("90"):
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not Decimal("-180") <= self.longitude <= Decimal("180"):
            raise ValueError(f"Longitude out of range: {self.longitude}")

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"


@dataclass(frozen=True)
class Actor:
    """
    The party performing an operation.

    Passed explicitly to every state-machine and settlement call instead of
    being pulled from request context.
    """
    user_id: Optional[int]
    role: ActorRole

    @classmethod
    def system(cls) -> "Actor":
        """Actor used for automatic transitions (e.g. payment confirmation)."""
        return cls(user_id=None, role=ActorRole.SYSTEM)

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN

    @property
    def is_system(self) -> bool:
        return self.role == ActorRole.SYSTEM

    def __str__(self) -> str:
        return f"{self.role.value}:{self.user_id}"


class EtaSource(str, Enum):
    """Which tier produced a distance/ETA estimate."""

    ROUTING_SERVICE = "ROUTING_SERVICE"
    GREAT_CIRCLE = "GREAT_CIRCLE"
    DEFAULT = "DEFAULT"


@dataclass(frozen=True)
class EtaEstimate:
    """Result of a distance/ETA estimation."""
    distance_km: Optional[Decimal]
    eta_minutes: int
    source: EtaSource

    @property
    def externally_sourced(self) -> bool:
        return self.source == EtaSource.ROUTING_SERVICE
