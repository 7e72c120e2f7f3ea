"""Client cart endpoints."""

from fastapi import APIRouter, Depends

from core.application.dtos import (
    ApplyCouponRequest,
    CartDTO,
    CartItemRequest,
    UpdateCartItemRequest,
)
from core.application.services import CartService
from core.domain.value_objects import Actor

from apps.api.deps import get_cart_service, get_current_actor

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartDTO)
async def get_cart(
    actor: Actor = Depends(get_current_actor),
    service: CartService = Depends(get_cart_service),
) -> CartDTO:
    """The calling client's cart, created on first access."""
    return await service.get_cart(actor)


@router.delete("", response_model=CartDTO)
async def clear_cart(
    actor: Actor = Depends(get_current_actor),
    service: CartService = Depends(get_cart_service),
) -> CartDTO:
    return await service.clear(actor)


@router.post("/items", response_model=CartDTO)
async def add_item(
    request: CartItemRequest,
    actor: Actor = Depends(get_current_actor),
    service: CartService = Depends(get_cart_service),
) -> CartDTO:
    return await service.add_item(actor, request.product_id, request.quantity)


@router.patch("/items/{item_id}", response_model=CartDTO)
async def update_quantity(
    item_id: int,
    request: UpdateCartItemRequest,
    actor: Actor = Depends(get_current_actor),
    service: CartService = Depends(get_cart_service),
) -> CartDTO:
    return await service.update_quantity(actor, item_id, request.quantity)


@router.delete("/items/{item_id}", response_model=CartDTO)
async def remove_item(
    item_id: int,
    actor: Actor = Depends(get_current_actor),
    service: CartService = Depends(get_cart_service),
) -> CartDTO:
    return await service.remove_item(actor, item_id)


@router.put("/coupon", response_model=CartDTO)
async def apply_coupon(
    request: ApplyCouponRequest,
    actor: Actor = Depends(get_current_actor),
    service: CartService = Depends(get_cart_service),
) -> CartDTO:
    return await service.apply_coupon(actor, request.code)


@router.delete("/coupon", response_model=CartDTO)
async def remove_coupon(
    actor: Actor = Depends(get_current_actor),
    service: CartService = Depends(get_cart_service),
) -> CartDTO:
    return await service.remove_coupon(actor)
