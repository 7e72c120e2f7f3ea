"""Repository interfaces for clients, restaurants and their addresses."""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities.party import Client, Restaurant
from ..value_objects import Address, Coordinates


class ClientRepository(ABC):

    @abstractmethod
    async def find_by_id(self, client_id: int) -> Optional[Client]:
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: int) -> Optional[Client]:
        pass


class RestaurantRepository(ABC):

    @abstractmethod
    async def find_by_id(self, restaurant_id: int) -> Optional[Restaurant]:
        pass

    @abstractmethod
    async def find_by_owner(self, owner_user_id: int) -> Optional[Restaurant]:
        pass


class AddressRepository(ABC):
    """
    Address book lookups.

    Principal-address lookups return None when the party has none; every
    caller must handle that branch explicitly.
    """

    @abstractmethod
    async def find_principal_for_client(self, client_id: int) -> Optional[Address]:
        pass

    @abstractmethod
    async def find_principal_for_restaurant(self, restaurant_id: int) -> Optional[Address]:
        pass

    @abstractmethod
    async def find_for_client(self, client_id: int, address_id: int) -> Optional[Address]:
        """Address by id, only if it belongs to the client."""
        pass

    @abstractmethod
    async def store_client_coordinates(
        self, client_id: int, address_id: int, coordinates: Coordinates
    ) -> None:
        pass
