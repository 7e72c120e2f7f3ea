"""Catalog lookup interface."""
from abc import ABC, abstractmethod

from core.domain.entities import Product


class ICatalog(ABC):

    @abstractmethod
    async def get_product(self, product_id: int) -> Product:
        """
        Resolve a product.

        Raises:
            ProductNotFound: unknown product id
        """
        pass
