"""Application service for coupon administration."""

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos import CouponCheckDTO, CouponDTO, CouponRequest
from core.application.validators import raise_if_invalid, validate_coupon, validate_coupon_code
from core.data.uow import UnitOfWork, create_uow
from core.domain.entities import Coupon
from core.domain.exceptions import CouponNotFound, InvalidArgument
from core.domain.services.coupon_resolver import calculate_discount, validate_applicable
from core.domain.services.monetary import money
from core.domain.services.order_access import ensure_admin
from core.domain.value_objects import Actor

logger = logging.getLogger(__name__)


class CouponService:
    """Create, edit, toggle and preview coupons."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def create_coupon(self, actor: Actor, request: CouponRequest) -> CouponDTO:
        ensure_admin(actor, "Only administrators can manage coupons")
        raise_if_invalid(validate_coupon(request))

        uow = create_uow(self._session_factory)
        async with uow:
            await self._ensure_code_free(uow, request.code)
            coupon = await uow.coupons.add(self._from_request(request))
            await uow.commit()

            logger.info(f"[{uow.execution_id}] Coupon {coupon.code} created by {actor}")
            return CouponDTO.from_domain(coupon)

    async def update_coupon(self, actor: Actor, coupon_id: int, request: CouponRequest) -> CouponDTO:
        ensure_admin(actor, "Only administrators can manage coupons")
        raise_if_invalid(validate_coupon(request))

        uow = create_uow(self._session_factory)
        async with uow:
            coupon = await self._get(uow, coupon_id)
            await self._ensure_code_free(uow, request.code, exclude_id=coupon.id)

            if request.max_uses < coupon.current_uses:
                raise InvalidArgument(
                    f"max_uses cannot be lower than current uses ({coupon.current_uses})"
                )

            updated = self._from_request(request)
            updated.id = coupon.id
            updated.current_uses = coupon.current_uses
            updated.active = coupon.active
            await uow.coupons.save(updated)
            await uow.commit()

            logger.info(f"[{uow.execution_id}] Coupon {updated.code} updated by {actor}")
            return CouponDTO.from_domain(await uow.coupons.find_by_id(coupon.id))

    async def activate_coupon(self, actor: Actor, coupon_id: int) -> CouponDTO:
        return await self._toggle(actor, coupon_id, active=True)

    async def deactivate_coupon(self, actor: Actor, coupon_id: int) -> CouponDTO:
        return await self._toggle(actor, coupon_id, active=False)

    async def list_coupons(self, actor: Actor, active_only: bool = False) -> List[CouponDTO]:
        ensure_admin(actor)
        uow = create_uow(self._session_factory)
        async with uow:
            return [CouponDTO.from_domain(c) for c in await uow.coupons.find_all(active_only)]

    async def get_by_code(self, actor: Actor, code: str) -> CouponDTO:
        ensure_admin(actor)
        uow = create_uow(self._session_factory)
        async with uow:
            coupon = await uow.coupons.find_by_code(code)
            if coupon is None:
                raise CouponNotFound(f"Coupon {code} not found")
            return CouponDTO.from_domain(coupon)

    async def check_coupon(self, code: str, subtotal: Decimal) -> CouponCheckDTO:
        """Preview the discount of a code on a subtotal without redeeming it."""
        raise_if_invalid(validate_coupon_code(code))
        subtotal = money(subtotal)
        if subtotal < 0:
            raise InvalidArgument("Subtotal cannot be negative")

        uow = create_uow(self._session_factory)
        async with uow:
            coupon = validate_applicable(await uow.coupons.find_by_code(code), subtotal)
            discount = calculate_discount(coupon, subtotal)
            return CouponCheckDTO(
                code=coupon.code,
                subtotal=subtotal,
                discount=discount,
                total=money(subtotal - discount),
            )

    async def _toggle(self, actor: Actor, coupon_id: int, active: bool) -> CouponDTO:
        ensure_admin(actor, "Only administrators can manage coupons")
        uow = create_uow(self._session_factory)
        async with uow:
            coupon = await self._get(uow, coupon_id)
            if active:
                coupon.activate()
            else:
                coupon.deactivate()
            await uow.coupons.save(coupon)
            await uow.commit()

            logger.info(
                f"[{uow.execution_id}] Coupon {coupon.code} "
                f"{'activated' if active else 'deactivated'} by {actor}"
            )
            return CouponDTO.from_domain(coupon)

    @staticmethod
    async def _get(uow: UnitOfWork, coupon_id: int) -> Coupon:
        coupon = await uow.coupons.find_by_id(coupon_id)
        if coupon is None:
            raise CouponNotFound(f"Coupon {coupon_id} not found")
        return coupon

    @staticmethod
    async def _ensure_code_free(uow: UnitOfWork, code: str, exclude_id: Optional[int] = None) -> None:
        existing = await uow.coupons.find_by_code(code)
        if existing is not None and existing.id != exclude_id:
            raise InvalidArgument(f"Coupon code already exists: {existing.code}")

    @staticmethod
    def _from_request(request: CouponRequest) -> Coupon:
        return Coupon(
            code=request.code,
            description=request.description,
            discount_type=request.discount_type,
            discount_value=money(request.discount_value),
            minimum_order_value=money(request.minimum_order_value),
            start_date=request.start_date,
            end_date=request.end_date,
            max_uses=request.max_uses,
        )
