"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from ..entities.order import Order
from ..enums import OrderStatus


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """Persist a new order and assign its id.

        Args:
            order: Order aggregate to persist

        Returns:
            The same order with id set
        """
        pass

    @abstractmethod
    async def save(self, order: Order) -> None:
        """Persist changes to an existing order.

        Uses the order version for optimistic concurrency.

        Raises:
            OrderAlreadyProcessed: the row changed since it was loaded
        """
        pass

    @abstractmethod
    async def find_by_id(self, order_id: int) -> Optional[Order]:
        """Retrieve order by identifier.

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def claim_courier(self, order_id: int, courier_id: int) -> bool:
        """Atomically bind a courier to a PREPARING order with no courier.

        Returns:
            True if this call won the claim, False otherwise
        """
        pass

    @abstractmethod
    async def find_available(self, limit: int = 100) -> List[Order]:
        """PREPARING orders with no courier, oldest first."""
        pass

    @abstractmethod
    async def find_by_courier(
        self,
        courier_id: int,
        statuses: Optional[Iterable[OrderStatus]] = None,
        exclude_statuses: Optional[Iterable[OrderStatus]] = None,
    ) -> List[Order]:
        """Orders bound to a courier, optionally filtered by status set."""
        pass

    @abstractmethod
    async def find_by_client(self, client_id: int, limit: int = 100) -> List[Order]:
        pass

    @abstractmethod
    async def find_by_restaurant(self, restaurant_id: int, limit: int = 100) -> List[Order]:
        pass
