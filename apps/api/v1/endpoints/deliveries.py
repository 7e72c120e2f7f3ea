"""Courier delivery endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Query, Response

from core.application.dtos import OrderDTO, RouteDTO, TrackingDTO
from core.application.services import DeliveryAssignmentService
from core.domain.value_objects import Actor

from apps.api.deps import get_current_actor, get_delivery_assignment_service

router = APIRouter(prefix="/deliveries", tags=["deliveries"])


@router.get("/available", response_model=List[OrderDTO])
async def list_available_orders(
    limit: int = Query(default=100, ge=1, le=1000, description="Maximum number of orders"),
    actor: Actor = Depends(get_current_actor),
    service: DeliveryAssignmentService = Depends(get_delivery_assignment_service),
) -> List[OrderDTO]:
    """PREPARING orders waiting for a courier, oldest first."""
    return await service.list_available_orders(actor, limit=limit)


@router.get("/active", response_model=List[OrderDTO])
async def list_active_deliveries(
    actor: Actor = Depends(get_current_actor),
    service: DeliveryAssignmentService = Depends(get_delivery_assignment_service),
) -> List[OrderDTO]:
    return await service.list_active_deliveries(actor)


@router.get("/history", response_model=List[OrderDTO])
async def list_delivery_history(
    actor: Actor = Depends(get_current_actor),
    service: DeliveryAssignmentService = Depends(get_delivery_assignment_service),
) -> List[OrderDTO]:
    return await service.list_delivery_history(actor)


@router.post("/{order_id}/accept", response_model=OrderDTO)
async def accept_order(
    order_id: int,
    actor: Actor = Depends(get_current_actor),
    service: DeliveryAssignmentService = Depends(get_delivery_assignment_service),
) -> OrderDTO:
    """Claim an order; 409 if another courier got it first."""
    return await service.accept_order(actor, order_id)


@router.post("/{order_id}/decline", status_code=204)
async def decline_order(
    order_id: int,
    actor: Actor = Depends(get_current_actor),
    service: DeliveryAssignmentService = Depends(get_delivery_assignment_service),
) -> Response:
    await service.decline_order(actor, order_id)
    return Response(status_code=204)


@router.get("/{order_id}/route", response_model=RouteDTO)
async def get_route(
    order_id: int,
    actor: Actor = Depends(get_current_actor),
    service: DeliveryAssignmentService = Depends(get_delivery_assignment_service),
) -> RouteDTO:
    return await service.get_route(actor, order_id)


@router.get("/{order_id}/tracking", response_model=TrackingDTO)
async def get_tracking(
    order_id: int,
    actor: Actor = Depends(get_current_actor),
    service: DeliveryAssignmentService = Depends(get_delivery_assignment_service),
) -> TrackingDTO:
    """Courier position and the remaining distance and time; 404 until a courier is assigned."""
    return await service.get_tracking(actor, order_id)
