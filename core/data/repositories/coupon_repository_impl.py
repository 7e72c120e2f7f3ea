"""SQLAlchemy implementation of CouponRepository."""

from typing import List, Optional

from sqlalchemy import select, update

from core.domain.entities.coupon import Coupon
from core.domain.exceptions import CouponNotFound
from core.domain.repositories.coupon_repository import CouponRepository

from ..mappers import CouponMapper
from ..models.coupon_model import CouponModel
from .base import SqlAlchemyRepository


class SqlAlchemyCouponRepository(SqlAlchemyRepository, CouponRepository):

    async def add(self, coupon: Coupon) -> Coupon:
        model = CouponMapper.to_persistence(coupon)
        self._session.add(model)
        await self._session.flush()
        return CouponMapper.to_domain(model)

    async def save(self, coupon: Coupon) -> None:
        model = await self._session.get(CouponModel, self._check_id(coupon.id, "coupon id"))
        if model is None:
            raise CouponNotFound(f"Coupon {coupon.id} not found")
        CouponMapper.update_persistence(coupon, model)
        await self._session.flush()

    async def find_by_id(self, coupon_id: int) -> Optional[Coupon]:
        result = await self._session.execute(
            select(CouponModel)
            .where(CouponModel.id == self._check_id(coupon_id, "coupon id"))
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return CouponMapper.to_domain(model) if model else None

    async def find_by_code(self, code: str) -> Optional[Coupon]:
        result = await self._session.execute(
            select(CouponModel)
            .where(CouponModel.code == code.strip().upper())
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return CouponMapper.to_domain(model) if model else None

    async def find_all(self, active_only: bool = False) -> List[Coupon]:
        stmt = select(CouponModel).order_by(CouponModel.created_at.desc(), CouponModel.id.desc())
        if active_only:
            stmt = stmt.where(CouponModel.active.is_(True))
        result = await self._session.execute(stmt)
        return [CouponMapper.to_domain(model) for model in result.scalars().all()]

    async def try_redeem(self, coupon_id: int) -> bool:
        """Count one use unless the cap is already reached (single conditional UPDATE)."""
        result = await self._session.execute(
            update(CouponModel)
            .where(
                CouponModel.id == self._check_id(coupon_id, "coupon id"),
                CouponModel.current_uses < CouponModel.max_uses,
            )
            .values(current_uses=CouponModel.current_uses + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
