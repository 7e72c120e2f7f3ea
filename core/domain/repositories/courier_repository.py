"""Repository interface for couriers."""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities.courier import Courier


class CourierRepository(ABC):

    @abstractmethod
    async def find_by_id(self, courier_id: int) -> Optional[Courier]:
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: int) -> Optional[Courier]:
        pass

    @abstractmethod
    async def save(self, courier: Courier) -> None:
        pass
