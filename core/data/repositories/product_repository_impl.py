"""SQLAlchemy implementation of ProductRepository."""

from typing import Optional

from core.domain.entities.product import Product
from core.domain.repositories.product_repository import ProductRepository

from ..mappers import ProductMapper
from ..models.catalog_model import ProductModel
from .base import SqlAlchemyRepository


class SqlAlchemyProductRepository(SqlAlchemyRepository, ProductRepository):

    async def find_by_id(self, product_id: int) -> Optional[Product]:
        model = await self._session.get(ProductModel, self._check_id(product_id, "product id"))
        return ProductMapper.to_domain(model) if model else None
