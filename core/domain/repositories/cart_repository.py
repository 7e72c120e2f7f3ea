"""Repository interface for carts."""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    async def find_by_id(self, cart_id: int) -> Optional[Cart]:
        pass

    @abstractmethod
    async def find_by_client(self, client_id: int) -> Optional[Cart]:
        pass

    @abstractmethod
    async def save(self, cart: Cart) -> Cart:
        """Insert or update the cart with its items (assigns ids)."""
        pass

    @abstractmethod
    async def claim_for_checkout(self, cart_id: int, version: int) -> bool:
        """Atomically take the cart at the given version; False if it changed."""
        pass
