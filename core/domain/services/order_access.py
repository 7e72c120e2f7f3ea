"""
Authorization rules for order operations.

Admins bypass ownership checks; everyone else must be the exact party
bound to the order. The SYSTEM actor is only allowed where noted.
"""
from dataclasses import dataclass
from typing import Optional

from ..enums import ActorRole, OrderStatus
from ..exceptions import AccessDenied
from ..value_objects import Actor


@dataclass(frozen=True)
class OrderParties:
    """User ids of everyone bound to an order."""
    client_user_id: Optional[int]
    restaurant_owner_id: Optional[int]
    courier_user_id: Optional[int] = None


_CANCELABLE_BY_CLIENT = (OrderStatus.CREATED, OrderStatus.CONFIRMED)
_CANCELABLE_BY_RESTAURANT = (OrderStatus.CREATED, OrderStatus.CONFIRMED, OrderStatus.PREPARING)


def _is(actor: Actor, user_id: Optional[int]) -> bool:
    return actor.user_id is not None and user_id is not None and actor.user_id == user_id


def ensure_can_view(actor: Actor, parties: OrderParties) -> None:
    if actor.is_admin or actor.is_system:
        return
    if (
        _is(actor, parties.client_user_id)
        or _is(actor, parties.restaurant_owner_id)
        or _is(actor, parties.courier_user_id)
    ):
        return
    raise AccessDenied("You are not allowed to access this order")


def ensure_can_confirm(actor: Actor, parties: OrderParties) -> None:
    """Payment confirmation: SYSTEM, ADMIN or the owning client."""
    if actor.is_admin or actor.is_system:
        return
    if actor.role == ActorRole.CLIENT and _is(actor, parties.client_user_id):
        return
    raise AccessDenied("Only the payment flow or the order owner can confirm this order")


def ensure_restaurant_owner(actor: Actor, parties: OrderParties) -> None:
    if actor.is_admin:
        return
    if _is(actor, parties.restaurant_owner_id):
        return
    raise AccessDenied("You are not allowed to update this order")


def ensure_assigned_courier(actor: Actor, parties: OrderParties, message: str) -> None:
    if actor.is_admin:
        return
    if parties.courier_user_id is None or not _is(actor, parties.courier_user_id):
        raise AccessDenied(message)


def ensure_can_cancel(actor: Actor, parties: OrderParties, status: OrderStatus) -> None:
    """
    Cancellation policy:
    - client: while CREATED or CONFIRMED
    - restaurant owner: while CREATED, CONFIRMED or PREPARING
    - admin: any non-terminal status
    """
    if actor.is_admin:
        return
    if _is(actor, parties.client_user_id) and status in _CANCELABLE_BY_CLIENT:
        return
    if _is(actor, parties.restaurant_owner_id) and status in _CANCELABLE_BY_RESTAURANT:
        return
    raise AccessDenied(f"You are not allowed to cancel this order while it is {status.value}")


def ensure_admin(actor: Actor, message: str = "Administrator access required") -> None:
    if not actor.is_admin:
        raise AccessDenied(message)


def ensure_role(actor: Actor, role: ActorRole, message: str) -> None:
    """Role check for self-service endpoints; the actor must also carry a user id."""
    if actor.role != role or actor.user_id is None:
        raise AccessDenied(message)


def ensure_can_track(actor: Actor, parties: OrderParties) -> None:
    """Delivery tracking: the ordering client, the assigned courier or an admin."""
    if actor.is_admin:
        return
    if _is(actor, parties.client_user_id) or _is(actor, parties.courier_user_id):
        return
    raise AccessDenied("You are not allowed to track this order")
