"""Persistence for orders, carts, coupons and parties: ORM models, repositories, unit of work."""

from .models import Base
from .uow import UnitOfWork, create_uow

__all__ = [
    "Base",
    "create_uow",
    "UnitOfWork",
]
