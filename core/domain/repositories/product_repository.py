"""Repository interface for catalog products."""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities.product import Product


class ProductRepository(ABC):

    @abstractmethod
    async def find_by_id(self, product_id: int) -> Optional[Product]:
        pass
