"""Coupon administration endpoints."""

from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, Query

from core.application.dtos import CouponCheckDTO, CouponDTO, CouponRequest
from core.application.services import CouponService
from core.domain.value_objects import Actor

from apps.api.deps import get_coupon_service, get_current_actor

router = APIRouter(prefix="/coupons", tags=["coupons"])


@router.post("", response_model=CouponDTO, status_code=201)
async def create_coupon(
    request: CouponRequest,
    actor: Actor = Depends(get_current_actor),
    service: CouponService = Depends(get_coupon_service),
) -> CouponDTO:
    return await service.create_coupon(actor, request)


@router.get("", response_model=List[CouponDTO])
async def list_coupons(
    active_only: bool = Query(default=False, description="Only active coupons"),
    actor: Actor = Depends(get_current_actor),
    service: CouponService = Depends(get_coupon_service),
) -> List[CouponDTO]:
    return await service.list_coupons(actor, active_only=active_only)


@router.get("/check", response_model=CouponCheckDTO)
async def check_coupon(
    code: str = Query(..., description="Coupon code"),
    subtotal: Decimal = Query(..., description="Subtotal the coupon would apply to"),
    actor: Actor = Depends(get_current_actor),
    service: CouponService = Depends(get_coupon_service),
) -> CouponCheckDTO:
    """Preview a coupon's discount; nothing is redeemed. Open to every role."""
    return await service.check_coupon(code, subtotal)


@router.get("/code/{code}", response_model=CouponDTO)
async def get_coupon_by_code(
    code: str,
    actor: Actor = Depends(get_current_actor),
    service: CouponService = Depends(get_coupon_service),
) -> CouponDTO:
    return await service.get_by_code(actor, code)


@router.put("/{coupon_id}", response_model=CouponDTO)
async def update_coupon(
    coupon_id: int,
    request: CouponRequest,
    actor: Actor = Depends(get_current_actor),
    service: CouponService = Depends(get_coupon_service),
) -> CouponDTO:
    return await service.update_coupon(actor, coupon_id, request)


@router.post("/{coupon_id}/activate", response_model=CouponDTO)
async def activate_coupon(
    coupon_id: int,
    actor: Actor = Depends(get_current_actor),
    service: CouponService = Depends(get_coupon_service),
) -> CouponDTO:
    return await service.activate_coupon(actor, coupon_id)


@router.post("/{coupon_id}/deactivate", response_model=CouponDTO)
async def deactivate_coupon(
    coupon_id: int,
    actor: Actor = Depends(get_current_actor),
    service: CouponService = Depends(get_coupon_service),
) -> CouponDTO:
    return await service.deactivate_coupon(actor, coupon_id)
