"""Order endpoints for REST API."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query

from core.application.dtos import (
    CancelOrderRequest,
    CreateOrderRequest,
    OrderDTO,
    RefundDTO,
    RefundRequest,
)
from core.application.services import OrderLifecycleService
from core.domain.value_objects import Actor

from apps.api.deps import get_current_actor, get_order_lifecycle_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderDTO, status_code=201)
async def create_order(
    request: CreateOrderRequest,
    actor: Actor = Depends(get_current_actor),
    service: OrderLifecycleService = Depends(get_order_lifecycle_service),
) -> OrderDTO:
    """Create a new order.

    Args:
        request: CreateOrderRequest DTO (explicit items or a cart id)
        actor: Calling client
        service: OrderLifecycleService instance

    Returns:
        OrderDTO with created order details
    """
    return await service.create_order(actor, request)


@router.get("/mine", response_model=List[OrderDTO])
async def list_my_orders(
    limit: int = Query(default=100, ge=1, le=1000, description="Maximum number of orders"),
    actor: Actor = Depends(get_current_actor),
    service: OrderLifecycleService = Depends(get_order_lifecycle_service),
) -> List[OrderDTO]:
    """Orders of the calling client, newest first."""
    return await service.list_client_orders(actor, limit=limit)


@router.get("/restaurant", response_model=List[OrderDTO])
async def list_restaurant_orders(
    limit: int = Query(default=100, ge=1, le=1000, description="Maximum number of orders"),
    actor: Actor = Depends(get_current_actor),
    service: OrderLifecycleService = Depends(get_order_lifecycle_service),
) -> List[OrderDTO]:
    """Orders of the calling restaurant owner, newest first."""
    return await service.list_restaurant_orders(actor, limit=limit)


@router.get("/{order_id}", response_model=OrderDTO)
async def get_order(
    order_id: int,
    actor: Actor = Depends(get_current_actor),
    service: OrderLifecycleService = Depends(get_order_lifecycle_service),
) -> OrderDTO:
    """Get order by ID.

    Args:
        order_id: Order id
        actor: Caller; must be a party to the order or an admin
        service: OrderLifecycleService instance

    Returns:
        OrderDTO with order details
    """
    return await service.get_order(actor, order_id)


@router.post("/{order_id}/confirm", response_model=OrderDTO)
async def confirm_order(
    order_id: int,
    actor: Actor = Depends(get_current_actor),
    service: OrderLifecycleService = Depends(get_order_lifecycle_service),
) -> OrderDTO:
    return await service.confirm_order(actor, order_id)


@router.post("/{order_id}/prepare", response_model=OrderDTO)
async def start_preparing(
    order_id: int,
    actor: Actor = Depends(get_current_actor),
    service: OrderLifecycleService = Depends(get_order_lifecycle_service),
) -> OrderDTO:
    return await service.start_preparing(actor, order_id)


@router.post("/{order_id}/out-for-delivery", response_model=OrderDTO)
async def mark_out_for_delivery(
    order_id: int,
    actor: Actor = Depends(get_current_actor),
    service: OrderLifecycleService = Depends(get_order_lifecycle_service),
) -> OrderDTO:
    return await service.mark_out_for_delivery(actor, order_id)


@router.post("/{order_id}/deliver", response_model=OrderDTO)
async def mark_delivered(
    order_id: int,
    actor: Actor = Depends(get_current_actor),
    service: OrderLifecycleService = Depends(get_order_lifecycle_service),
) -> OrderDTO:
    """Mark an order delivered; the response carries the settlement values."""
    return await service.mark_delivered(actor, order_id)


@router.post("/{order_id}/cancel", response_model=OrderDTO)
async def cancel_order(
    order_id: int,
    request: Optional[CancelOrderRequest] = Body(None),
    actor: Actor = Depends(get_current_actor),
    service: OrderLifecycleService = Depends(get_order_lifecycle_service),
) -> OrderDTO:
    return await service.cancel_order(actor, order_id, request.reason if request else None)


@router.post("/{order_id}/refund", response_model=RefundDTO)
async def refund_order(
    order_id: int,
    request: RefundRequest,
    actor: Actor = Depends(get_current_actor),
    service: OrderLifecycleService = Depends(get_order_lifecycle_service),
) -> RefundDTO:
    """Refund an order's payment (administrators only)."""
    return await service.refund_order(actor, order_id, request.reason)
