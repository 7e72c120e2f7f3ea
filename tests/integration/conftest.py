"""Pytest configuration and fixtures for API integration tests."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from apps.api import deps
from apps.api.main import app


def headers(actor) -> dict:
    """Identity headers the gateway would set for an actor."""
    result = {"X-User-Role": actor.role.value}
    if actor.user_id is not None:
        result["X-User-Id"] = str(actor.user_id)
    return result


@pytest_asyncio.fixture
async def api(lifecycle, assignment, coupon_service, cart_service, fee_service):
    """HTTP client against the app, with every service bound to the test database."""
    app.dependency_overrides[deps.get_order_lifecycle_service] = lambda: lifecycle
    app.dependency_overrides[deps.get_delivery_assignment_service] = lambda: assignment
    app.dependency_overrides[deps.get_coupon_service] = lambda: coupon_service
    app.dependency_overrides[deps.get_cart_service] = lambda: cart_service
    app.dependency_overrides[deps.get_fee_configuration_service] = lambda: fee_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def as_actor(actors):
    """Headers by actor name: as_actor("client")."""
    return lambda name: headers(getattr(actors, name))
