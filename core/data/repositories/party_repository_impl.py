"""SQLAlchemy implementations for clients, restaurants and addresses."""

from typing import Optional

from sqlalchemy import select, update

from core.domain.entities.party import Client, Restaurant
from core.domain.repositories.party_repository import (
    AddressRepository,
    ClientRepository,
    RestaurantRepository,
)
from core.domain.value_objects import Address, Coordinates

from ..mappers import PartyMapper
from ..models.party_model import AddressModel, ClientModel, RestaurantModel
from .base import SqlAlchemyRepository


class SqlAlchemyClientRepository(SqlAlchemyRepository, ClientRepository):

    async def find_by_id(self, client_id: int) -> Optional[Client]:
        model = await self._session.get(ClientModel, self._check_id(client_id, "client id"))
        return PartyMapper.client_to_domain(model) if model else None

    async def find_by_user_id(self, user_id: int) -> Optional[Client]:
        result = await self._session.execute(
            select(ClientModel).where(ClientModel.user_id == self._check_id(user_id, "user id"))
        )
        model = result.scalar_one_or_none()
        return PartyMapper.client_to_domain(model) if model else None


class SqlAlchemyRestaurantRepository(SqlAlchemyRepository, RestaurantRepository):

    async def find_by_id(self, restaurant_id: int) -> Optional[Restaurant]:
        model = await self._session.get(
            RestaurantModel, self._check_id(restaurant_id, "restaurant id")
        )
        return PartyMapper.restaurant_to_domain(model) if model else None

    async def find_by_owner(self, owner_user_id: int) -> Optional[Restaurant]:
        result = await self._session.execute(
            select(RestaurantModel)
            .where(RestaurantModel.owner_user_id == self._check_id(owner_user_id, "user id"))
            .order_by(RestaurantModel.id)
            .limit(1)
        )
        model = result.scalar_one_or_none()
        return PartyMapper.restaurant_to_domain(model) if model else None


class SqlAlchemyAddressRepository(SqlAlchemyRepository, AddressRepository):

    async def find_principal_for_client(self, client_id: int) -> Optional[Address]:
        return await self._principal(AddressModel.client_id == self._check_id(client_id, "client id"))

    async def find_principal_for_restaurant(self, restaurant_id: int) -> Optional[Address]:
        return await self._principal(
            AddressModel.restaurant_id == self._check_id(restaurant_id, "restaurant id")
        )

    async def find_for_client(self, client_id: int, address_id: int) -> Optional[Address]:
        result = await self._session.execute(
            select(AddressModel).where(
                AddressModel.id == self._check_id(address_id, "address id"),
                AddressModel.client_id == self._check_id(client_id, "client id"),
            )
        )
        model = result.scalar_one_or_none()
        return PartyMapper.address_to_domain(model) if model else None

    async def store_client_coordinates(
        self, client_id: int, address_id: int, coordinates: Coordinates
    ) -> None:
        await self._session.execute(
            update(AddressModel)
            .where(
                AddressModel.id == self._check_id(address_id, "address id"),
                AddressModel.client_id == self._check_id(client_id, "client id"),
            )
            .values(latitude=coordinates.latitude, longitude=coordinates.longitude)
            .execution_options(synchronize_session=False)
        )

    async def _principal(self, owner_clause) -> Optional[Address]:
        result = await self._session.execute(
            select(AddressModel)
            .where(owner_clause, AddressModel.principal.is_(True))
            .order_by(AddressModel.id)
            .limit(1)
        )
        model = result.scalar_one_or_none()
        return PartyMapper.address_to_domain(model) if model else None
