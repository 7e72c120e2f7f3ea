"""Catalog lookups served from the local products table."""
from core.application.interfaces import ICatalog
from core.data.uow import UnitOfWork
from core.domain.entities import Product
from core.domain.exceptions import ProductNotFound


class UnitOfWorkCatalog(ICatalog):
    """Reads products through the caller's unit of work."""

    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def get_product(self, product_id: int) -> Product:
        product = await self._uow.products.find_by_id(product_id)
        if product is None:
            raise ProductNotFound(f"Product {product_id} not found")
        return product
