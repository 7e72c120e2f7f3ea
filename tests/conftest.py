"""
Shared fixtures: a seeded database plus the services built on top of it.

Each test gets its own file-backed SQLite database so that concurrent
units of work use separate connections, as they would in production.
"""
from datetime import date, timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from core.application.dtos import CreateOrderRequest, OrderItemRequest
from core.application.services import (
    CartService,
    CouponService,
    DeliveryAssignmentService,
    EtaEstimator,
    FeeConfigurationService,
    OrderLifecycleService,
    SettlementService,
)
from core.data.models import (
    AddressModel,
    ClientModel,
    CouponModel,
    CourierModel,
    FeeConfigurationModel,
    ProductModel,
    RestaurantModel,
)
from core.domain.enums import ActorRole, PaymentMethod
from core.domain.value_objects import Actor
from core.infrastructure.adapters.delivery.position_tracker import RestaurantOriginPositionTracker
from core.infrastructure.adapters.notifications.mock_notification_service import MockNotificationService
from core.infrastructure.adapters.payments.mock_payment_gateway import MockPaymentGateway
from core.infrastructure.adapters.persistence.catalog import UnitOfWorkCatalog
from core.infrastructure.database.config import create_session_factory, init_database
from core.infrastructure.event_bus import InMemoryEventBus
from core.settings.modules.delivery_settings import DeliverySettings

# Catalog of restaurant 1, priced so each order total is easy to check
COMBO = 1           # 45.00
FRIES = 2           # 15.00
FAMILY_BOX = 3      # 50.00
SUSHI_PLATTER = 4   # 49.99
SEASONAL_PIE = 5    # unavailable
PIZZA = 6           # restaurant 2

RESTAURANT_ID = 1
OTHER_RESTAURANT_ID = 2


async def _seed(session_factory) -> None:
    async with session_factory() as session:
        session.add_all([
            ClientModel(id=1, user_id=100, name="Ana Souza", email="ana@example.com", phone="+5511999990001"),
            ClientModel(id=2, user_id=101, name="Bruno Lima", email="bruno@example.com"),
            RestaurantModel(id=RESTAURANT_ID, owner_user_id=200, name="Burger Place", email="burger@example.com"),
            RestaurantModel(id=OTHER_RESTAURANT_ID, owner_user_id=201, name="Pizza Corner"),
        ])
        await session.flush()

        session.add_all([
            AddressModel(
                client_id=1, street="Rua Augusta", number="1500", neighborhood="Consolacao",
                city="Sao Paulo", state="SP", zip_code="01304-001",
                latitude=Decimal("-23.5614"), longitude=Decimal("-46.6559"), principal=True,
            ),
            AddressModel(
                client_id=2, street="Rua Harmonia", number="77", neighborhood="Vila Madalena",
                city="Sao Paulo", state="SP", zip_code="05435-000", principal=True,
            ),
            AddressModel(
                restaurant_id=RESTAURANT_ID, street="Praca da Se", number="1", neighborhood="Se",
                city="Sao Paulo", state="SP", zip_code="01001-000",
                latitude=Decimal("-23.5505"), longitude=Decimal("-46.6333"), principal=True,
            ),
            ProductModel(id=COMBO, restaurant_id=RESTAURANT_ID, name="Combo", price=Decimal("45.00")),
            ProductModel(id=FRIES, restaurant_id=RESTAURANT_ID, name="Fries", price=Decimal("15.00")),
            ProductModel(id=FAMILY_BOX, restaurant_id=RESTAURANT_ID, name="Family Box", price=Decimal("50.00")),
            ProductModel(id=SUSHI_PLATTER, restaurant_id=RESTAURANT_ID, name="Sushi Platter", price=Decimal("49.99")),
            ProductModel(
                id=SEASONAL_PIE, restaurant_id=RESTAURANT_ID, name="Seasonal Pie",
                price=Decimal("20.00"), available=False,
            ),
            ProductModel(id=PIZZA, restaurant_id=OTHER_RESTAURANT_ID, name="Pizza", price=Decimal("40.00")),
            CourierModel(
                id=1, user_id=300, name="Carlos Moto", email="carlos@example.com", phone="+5511988880001",
                status="APPROVED", vehicle_type="MOTORCYCLE", plate="ABC1D23",
            ),
            CourierModel(
                id=2, user_id=301, name="Duda Bike", email="duda@example.com",
                status="APPROVED", vehicle_type="BICYCLE",
            ),
            CourierModel(
                id=3, user_id=302, name="Edu Pending", status="PENDING_APPROVAL", vehicle_type="CAR",
            ),
            FeeConfigurationModel(category="RESTAURANT", percent=Decimal("10.00"), active=True),
            FeeConfigurationModel(category="COURIER", percent=Decimal("10.00"), active=True),
        ])
        await session.commit()


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Fresh database per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'fulfillment.db'}")
    await init_database(engine)
    await _seed(create_session_factory(engine))

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def actors():
    return SimpleNamespace(
        admin=Actor(user_id=1, role=ActorRole.ADMIN),
        system=Actor.system(),
        client=Actor(user_id=100, role=ActorRole.CLIENT),
        other_client=Actor(user_id=101, role=ActorRole.CLIENT),
        restaurant=Actor(user_id=200, role=ActorRole.RESTAURANT),
        other_restaurant=Actor(user_id=201, role=ActorRole.RESTAURANT),
        courier=Actor(user_id=300, role=ActorRole.COURIER),
        bike_courier=Actor(user_id=301, role=ActorRole.COURIER),
        pending_courier=Actor(user_id=302, role=ActorRole.COURIER),
    )


@pytest.fixture
def delivery_settings():
    return DeliverySettings()


@pytest.fixture
def payments():
    return MockPaymentGateway()


@pytest.fixture
def notifications():
    return MockNotificationService()


@pytest.fixture
def bus():
    return InMemoryEventBus()


@pytest.fixture
def fee_service(session_factory):
    return FeeConfigurationService(session_factory)


@pytest.fixture
def settlement(fee_service, payments, delivery_settings):
    return SettlementService(UnitOfWorkCatalog, fee_service, payments, delivery_settings)


@pytest.fixture
def lifecycle(session_factory, settlement, bus):
    return OrderLifecycleService(session_factory, settlement, bus, RestaurantOriginPositionTracker())


@pytest.fixture
def assignment(session_factory, bus, delivery_settings):
    return DeliveryAssignmentService(session_factory, EtaEstimator(None, delivery_settings), bus)


@pytest.fixture
def coupon_service(session_factory):
    return CouponService(session_factory)


@pytest.fixture
def cart_service(session_factory):
    return CartService(session_factory)


@pytest.fixture
def add_coupon(session_factory):
    """Insert a coupon valid today; returns its id."""

    async def _add(code, discount_type="PERCENTAGE", discount_value="10", **overrides):
        today = date.today()
        fields = dict(
            code=code,
            discount_type=discount_type,
            discount_value=Decimal(discount_value),
            minimum_order_value=Decimal("0.00"),
            start_date=today - timedelta(days=1),
            end_date=today + timedelta(days=30),
            max_uses=100,
            current_uses=0,
            active=True,
        )
        fields.update(overrides)
        async with session_factory() as session:
            model = CouponModel(**fields)
            session.add(model)
            await session.commit()
            return model.id

    return _add


@pytest.fixture
def place_order(lifecycle, actors):
    """Place an order for the default client with (product_id, quantity) pairs."""

    async def _place(*items, actor=None, **request_fields):
        request = CreateOrderRequest(
            restaurant_id=request_fields.pop("restaurant_id", RESTAURANT_ID),
            payment_method=request_fields.pop("payment_method", PaymentMethod.PIX),
            items=[OrderItemRequest(product_id=p, quantity=q) for p, q in items or [(COMBO, 1)]],
            **request_fields,
        )
        return await lifecycle.create_order(actor or actors.client, request)

    return _place


@pytest.fixture
def prepared_order(place_order, lifecycle, actors):
    """Place an order and drive it to PREPARING; returns the order id."""

    async def _prepare(*items, **request_fields):
        order = await place_order(*items, **request_fields)
        await lifecycle.confirm_order(actors.system, order.id)
        await lifecycle.start_preparing(actors.restaurant, order.id)
        return order.id

    return _prepare


@pytest.fixture
def catalog():
    """Product ids of the seeded catalog."""
    return SimpleNamespace(
        combo=COMBO,
        fries=FRIES,
        family_box=FAMILY_BOX,
        sushi_platter=SUSHI_PLATTER,
        seasonal_pie=SEASONAL_PIE,
        pizza=PIZZA,
    )
