"""Integration tests for cart endpoints and cart checkout."""

from decimal import Decimal

import pytest


@pytest.mark.asyncio
async def test_cart_round_trip(api, as_actor, add_coupon, catalog):
    await add_coupon("TENPCT")
    client = as_actor("client")

    empty = await api.get("/api/v1/cart", headers=client)
    assert empty.status_code == 200
    assert empty.json()["items"] == []

    await api.post("/api/v1/cart/items", json={"product_id": catalog.combo, "quantity": 1}, headers=client)
    added = await api.post("/api/v1/cart/items", json={"product_id": catalog.fries, "quantity": 1}, headers=client)
    fries_line = added.json()["items"][1]["id"]

    updated = await api.patch(f"/api/v1/cart/items/{fries_line}", json={"quantity": 3}, headers=client)
    assert Decimal(updated.json()["subtotal"]) == Decimal("90.00")

    discounted = await api.put("/api/v1/cart/coupon", json={"code": "TENPCT"}, headers=client)
    assert discounted.json()["coupon_code"] == "TENPCT"
    assert Decimal(discounted.json()["total"]) == Decimal("81.00")

    without_coupon = await api.delete("/api/v1/cart/coupon", headers=client)
    assert Decimal(without_coupon.json()["total"]) == Decimal("90.00")

    removed = await api.delete(f"/api/v1/cart/items/{fries_line}", headers=client)
    assert [i["product_name"] for i in removed.json()["items"]] == ["Combo"]

    cleared = await api.delete("/api/v1/cart", headers=client)
    assert cleared.json()["items"] == []


@pytest.mark.asyncio
async def test_checkout_from_cart(api, as_actor, catalog):
    client = as_actor("client")
    cart = await api.post("/api/v1/cart/items", json={"product_id": catalog.sushi_platter, "quantity": 1}, headers=client)

    order = await api.post(
        "/api/v1/orders",
        json={"restaurant_id": 1, "payment_method": "CREDIT_CARD", "cart_id": cart.json()["id"]},
        headers=client,
    )

    assert order.status_code == 201, order.text
    assert Decimal(order.json()["total"]) == Decimal("54.99")
    assert (await api.get("/api/v1/cart", headers=client)).json()["items"] == []


@pytest.mark.asyncio
async def test_cart_errors(api, as_actor, catalog):
    unavailable = await api.post(
        "/api/v1/cart/items", json={"product_id": catalog.seasonal_pie, "quantity": 1}, headers=as_actor("client")
    )
    missing_line = await api.delete("/api/v1/cart/items/12345", headers=as_actor("client"))
    not_a_client = await api.get("/api/v1/cart", headers=as_actor("courier"))
    bad_quantity = await api.post(
        "/api/v1/cart/items", json={"product_id": catalog.combo, "quantity": -2}, headers=as_actor("client")
    )

    assert unavailable.status_code == 409
    assert missing_line.status_code == 404
    assert not_a_client.status_code == 403
    assert bad_quantity.status_code == 422
