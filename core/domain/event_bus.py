"""
Event Bus Interface (Domain Layer).

Pure interface definition - no implementation details.
"""
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, List, Union

from .events.base import DomainEvent

EventHandler = Callable[[DomainEvent], Union[None, Awaitable[None]]]


class EventBus(ABC):
    """
    Event Bus Interface.

    Application services publish aggregate events here after commit.
    Delivery to subscribers is fire-and-forget: publishing never waits for
    a subscriber and never fails because of one.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a single domain event.

        Args:
            event: Domain event to publish
        """
        pass

    @abstractmethod
    async def publish_all(self, events: List[DomainEvent]) -> None:
        """
        Publish multiple domain events in order.

        Args:
            events: List of domain events to publish
        """
        pass

    @abstractmethod
    def subscribe(self, handler: EventHandler) -> None:
        """
        Register a handler for all domain events.

        Args:
            handler: Sync or async callable receiving each event
        """
        pass
