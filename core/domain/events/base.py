"""
Base Domain Event.

All domain events inherit from this base class. Aggregates record them
while they change; application services publish them after commit.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional
import uuid


_METADATA_FIELDS = (
    "event_id",
    "event_type",
    "aggregate_id",
    "aggregate_type",
    "execution_id",
    "occurred_at",
)


@dataclass
class DomainEvent:
    """
    Base class for all domain events.

    Events are records of things that already happened; handlers must
    never mutate them.
    """

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    event_type: str = field(init=False)

    aggregate_id: str = field(default="")
    aggregate_type: str = field(init=False)

    execution_id: Optional[str] = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Set event type and aggregate type from class name."""
        object.__setattr__(self, "event_type", self.__class__.__name__)
        object.__setattr__(self, "aggregate_type", self._get_aggregate_type())

    def _get_aggregate_type(self) -> str:
        """
        Extract aggregate type from event type.

        Example: OrderStatusChangedEvent -> Order
        """
        event_name = self.__class__.__name__
        if event_name.endswith("Event"):
            event_name = event_name[:-5]

        for i, char in enumerate(event_name):
            if i > 0 and char.isupper():
                return event_name[:i]

        return event_name

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to a JSON-friendly dictionary.

        Returns:
            Dictionary representation of event
        """
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "aggregate_id": self.aggregate_id,
            "aggregate_type": self.aggregate_type,
            "execution_id": self.execution_id,
            "occurred_at": self.occurred_at.isoformat(),
            "data": self._get_event_data(),
        }

    def _get_event_data(self) -> Dict[str, Any]:
        data = {}
        for key, value in self.__dict__.items():
            if key in _METADATA_FIELDS:
                continue
            if isinstance(value, Decimal):
                data[key] = str(value)
            elif isinstance(value, Enum):
                data[key] = value.value
            elif isinstance(value, datetime):
                data[key] = value.isoformat()
            else:
                data[key] = value
        return data
