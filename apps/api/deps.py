"""FastAPI dependencies for dependency injection."""

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from fastapi import Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.application.interfaces import (
    IGeocodingService,
    INotificationService,
    IPaymentGateway,
    IRoutingService,
)
from core.application.services import (
    CartService,
    CouponService,
    DeliveryAssignmentService,
    EtaEstimator,
    FeeConfigurationService,
    OrderLifecycleService,
    OrderNotificationHandler,
    SettlementService,
)
from core.data.uow import UnitOfWork, create_uow
from core.domain.enums import ActorRole
from core.domain.value_objects import Actor
from core.infrastructure.adapters.delivery.position_tracker import RestaurantOriginPositionTracker
from core.infrastructure.adapters.geocoding.nominatim_geocoding_service import NominatimGeocodingService
from core.infrastructure.adapters.notifications.mock_notification_service import MockNotificationService
from core.infrastructure.adapters.notifications.slack_notification_service import SlackNotificationService
from core.infrastructure.adapters.payments.http_payment_gateway import HttpPaymentGateway
from core.infrastructure.adapters.payments.mock_payment_gateway import MockPaymentGateway
from core.infrastructure.adapters.persistence.catalog import UnitOfWorkCatalog
from core.infrastructure.adapters.routing.osrm_routing_service import OsrmRoutingService
from core.infrastructure.database.config import create_session_factory, get_engine
from core.infrastructure.event_bus import InMemoryEventBus, get_event_bus
from core.settings import get_app_settings

# .env is read once, before any settings object is built
load_dotenv()

settings = get_app_settings()

# Database URL comes from DB_DATABASE_URL (sqlite+aiosqlite for development,
# postgresql+asyncpg for production)
_engine = get_engine()

_session_factory: async_sessionmaker[AsyncSession] = create_session_factory(_engine)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get SQLAlchemy session factory.

    Returns:
        async_sessionmaker instance
    """
    return _session_factory


def get_uow() -> UnitOfWork:
    """Get Unit of Work instance.

    Returns:
        UnitOfWork instance
    """
    return create_uow(_session_factory)


# =============================================================================
# ACTOR
# =============================================================================

async def get_current_actor(
    x_user_role: Optional[str] = Header(None, description="ADMIN, CLIENT, RESTAURANT, COURIER or SYSTEM"),
    x_user_id: Optional[int] = Header(None, description="Authenticated user id"),
) -> Actor:
    """Build the calling Actor from the identity headers set by the gateway.

    Raises:
        HTTPException: 401 if the role header is missing or unknown
    """
    if not x_user_role:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-Role header")
    try:
        role = ActorRole(x_user_role.strip().upper())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unknown role {x_user_role!r}",
        )
    return Actor(user_id=x_user_id, role=role)


# =============================================================================
# ADAPTERS (singleton instances)
# =============================================================================

@lru_cache()
def get_routing_service() -> Optional[IRoutingService]:
    if not settings.routing.enabled:
        return None
    return OsrmRoutingService(settings.routing)


@lru_cache()
def get_geocoding_service() -> Optional[IGeocodingService]:
    if not settings.geocoding.enabled:
        return None
    return NominatimGeocodingService(settings.geocoding)


@lru_cache()
def get_payment_gateway() -> IPaymentGateway:
    if settings.payment.service_url:
        return HttpPaymentGateway(settings.payment)
    return MockPaymentGateway()


@lru_cache()
def get_notification_service() -> INotificationService:
    if settings.slack.enabled and settings.slack.webhook_url:
        return SlackNotificationService(settings.slack)
    return MockNotificationService()


@lru_cache()
def get_bus() -> InMemoryEventBus:
    """Global event bus with the notification subscriber attached."""
    bus = get_event_bus()
    bus.subscribe(OrderNotificationHandler(_session_factory, get_notification_service()))
    return bus


# =============================================================================
# SERVICES
# =============================================================================

def get_fee_configuration_service() -> FeeConfigurationService:
    return FeeConfigurationService(_session_factory)


def get_settlement_service() -> SettlementService:
    return SettlementService(
        catalog_factory=UnitOfWorkCatalog,
        fee_rates=get_fee_configuration_service(),
        payment_gateway=get_payment_gateway(),
        settings=settings.delivery,
    )


def get_order_lifecycle_service() -> OrderLifecycleService:
    """Get OrderLifecycleService instance.

    Returns:
        OrderLifecycleService instance
    """
    return OrderLifecycleService(
        session_factory=_session_factory,
        settlement=get_settlement_service(),
        event_bus=get_bus(),
        position_tracker=RestaurantOriginPositionTracker(),
        geocoder=get_geocoding_service(),
    )


def get_delivery_assignment_service() -> DeliveryAssignmentService:
    """Get DeliveryAssignmentService instance.

    Returns:
        DeliveryAssignmentService instance
    """
    routing = get_routing_service()
    return DeliveryAssignmentService(
        session_factory=_session_factory,
        eta_estimator=EtaEstimator(routing, settings.delivery),
        event_bus=get_bus(),
        routing_service=routing,
    )


def get_coupon_service() -> CouponService:
    return CouponService(_session_factory)


def get_cart_service() -> CartService:
    return CartService(_session_factory)
