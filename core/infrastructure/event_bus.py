"""
Event Bus Implementation (Infrastructure Layer).

Notifies registered subscribers of published domain events.
"""
import asyncio
import logging
from typing import List, Optional, Set

from core.domain.event_bus import EventBus, EventHandler
from core.domain.events.base import DomainEvent


logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    In-Memory Event Bus Implementation.

    Features:
    - Each subscriber call runs as its own asyncio task
    - publish() returns without waiting for subscribers
    - Subscriber failures are logged, never raised to the publisher
    - drain() awaits outstanding deliveries (tests, shutdown)
    """

    def __init__(self):
        """Initialize event bus with subscribers."""
        self._subscribers: List[EventHandler] = []
        self._pending: Set[asyncio.Task] = set()

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a single domain event.

        Args:
            event: Domain event to publish
        """
        logger.info(f"Publishing event: {event.event_type} (aggregate: {event.aggregate_id})")
        for subscriber in self._subscribers:
            task = asyncio.create_task(self._deliver(subscriber, event))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    async def publish_all(self, events: List[DomainEvent]) -> None:
        """
        Publish multiple domain events in order.

        Args:
            events: List of domain events to publish
        """
        if not events:
            return

        logger.debug(f"Publishing {len(events)} events")
        for event in events:
            await self.publish(event)

    def subscribe(self, handler: EventHandler) -> None:
        """
        Subscribe to all domain events.

        Args:
            handler: Callback function that receives events
        """
        if handler not in self._subscribers:
            self._subscribers.append(handler)
            logger.info(f"Registered event subscriber: {_name(handler)}")

    def unsubscribe(self, handler: EventHandler) -> None:
        """
        Unsubscribe from domain events.

        Args:
            handler: Callback function to remove
        """
        if handler in self._subscribers:
            self._subscribers.remove(handler)
            logger.info(f"Unregistered event subscriber: {_name(handler)}")

    async def drain(self) -> None:
        """Wait until every scheduled delivery has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _deliver(self, subscriber: EventHandler, event: DomainEvent) -> None:
        try:
            result = subscriber(event)
            if asyncio.iscoroutine(result):
                await result
        except Exception as e:
            logger.error(
                f"Subscriber {_name(subscriber)} failed on {event.event_type}: {e}",
                exc_info=True,
                extra={"event": event.to_dict()},
            )


def _name(handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


# Global event bus instance
_event_bus_instance: Optional[InMemoryEventBus] = None


def get_event_bus() -> InMemoryEventBus:
    """
    Get or create global event bus instance.

    Returns:
        Global event bus instance
    """
    global _event_bus_instance

    if _event_bus_instance is None:
        _event_bus_instance = InMemoryEventBus()

    return _event_bus_instance
