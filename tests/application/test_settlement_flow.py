"""Order pricing, post-delivery settlement and refunds through the services."""

from decimal import Decimal

import pytest

from core.application.interfaces import IFeeRateProvider
from core.application.services import SettlementService
from core.domain.entities import Order, OrderItem
from core.domain.enums import OrderStatus, PaymentMethod, PaymentStatus
from core.domain.exceptions import (
    AccessDenied,
    CouponMinimumNotMet,
    CouponNotFound,
    InvalidArgument,
    PaymentGatewayError,
    ProductNotFound,
    ProductUnavailable,
)
from core.infrastructure.adapters.payments.mock_payment_gateway import MockPaymentGateway
from core.infrastructure.adapters.persistence.catalog import UnitOfWorkCatalog


class TestPricing:
    """Totals computed when an order is placed."""

    @pytest.mark.asyncio
    async def test_free_delivery_above_threshold(self, place_order, catalog):
        """Scenario A: subtotal 90.00, no coupon."""
        order = await place_order((catalog.combo, 2))

        assert order.subtotal == Decimal("90.00")
        assert order.delivery_fee == Decimal("0.00")
        assert order.discount == Decimal("0.00")
        assert order.total == Decimal("90.00")

    @pytest.mark.asyncio
    async def test_fixed_coupon(self, place_order, add_coupon, catalog):
        """Scenario B: fixed 5.00 coupon on 30.00."""
        await add_coupon("FIVEOFF", "FIXED_AMOUNT", "5.00")

        order = await place_order((catalog.fries, 2), coupon_code="fiveoff")

        assert order.subtotal == Decimal("30.00")
        assert order.discount == Decimal("5.00")
        assert order.delivery_fee == Decimal("5.00")
        assert order.total == Decimal("30.00")
        assert order.coupon_id is not None

    @pytest.mark.asyncio
    async def test_percentage_coupon(self, place_order, add_coupon, coupon_service, actors, catalog):
        """Scenario C: 10% coupon on 100.00."""
        await add_coupon("TENPCT")

        order = await place_order((catalog.family_box, 2), coupon_code="TENPCT")

        assert order.discount == Decimal("10.00")
        assert order.delivery_fee == Decimal("0.00")
        assert order.total == Decimal("90.00")

        coupon = await coupon_service.get_by_code(actors.admin, "TENPCT")
        assert coupon.current_uses == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "product, fee, total",
        [
            ("sushi_platter", Decimal("5.00"), Decimal("54.99")),
            ("family_box", Decimal("0.00"), Decimal("50.00")),
        ],
    )
    async def test_delivery_fee_threshold(self, place_order, catalog, product, fee, total):
        """Test 49.99 pays the fee and 50.00 does not."""
        order = await place_order((getattr(catalog, product), 1))

        assert order.delivery_fee == fee
        assert order.total == total

    @pytest.mark.asyncio
    async def test_items_are_snapshotted(self, place_order, catalog):
        order = await place_order((catalog.combo, 1), (catalog.fries, 3))

        assert [(i.product_name, i.quantity, i.subtotal) for i in order.items] == [
            ("Combo", 1, Decimal("45.00")),
            ("Fries", 3, Decimal("45.00")),
        ]

    @pytest.mark.asyncio
    async def test_unavailable_product(self, place_order, catalog):
        with pytest.raises(ProductUnavailable):
            await place_order((catalog.seasonal_pie, 1))

    @pytest.mark.asyncio
    async def test_product_from_another_restaurant(self, place_order, catalog):
        with pytest.raises(InvalidArgument):
            await place_order((catalog.combo, 1), (catalog.pizza, 1))

    @pytest.mark.asyncio
    async def test_unknown_product(self, place_order):
        with pytest.raises(ProductNotFound):
            await place_order((999, 1))

    @pytest.mark.asyncio
    async def test_unknown_coupon(self, place_order, catalog):
        with pytest.raises(CouponNotFound):
            await place_order((catalog.combo, 1), coupon_code="NOPE123")

    @pytest.mark.asyncio
    async def test_rejected_coupon_leaves_nothing_behind(
        self, place_order, add_coupon, coupon_service, lifecycle, actors, catalog
    ):
        await add_coupon("BIGSPEND", minimum_order_value=Decimal("200.00"))

        with pytest.raises(CouponMinimumNotMet):
            await place_order((catalog.combo, 1), coupon_code="BIGSPEND")

        assert await lifecycle.list_client_orders(actors.client) == []
        coupon = await coupon_service.get_by_code(actors.admin, "BIGSPEND")
        assert coupon.current_uses == 0


class TestFinalSettlement:
    """Platform fees and net values applied on delivery."""

    async def deliver(self, prepared_order, assignment, lifecycle, actors, *items):
        order_id = await prepared_order(*items)
        await assignment.accept_order(actors.courier, order_id)
        await lifecycle.mark_out_for_delivery(actors.courier, order_id)
        return await lifecycle.mark_delivered(actors.courier, order_id)

    @pytest.mark.asyncio
    async def test_restaurant_commission(self, prepared_order, assignment, lifecycle, actors, catalog):
        """Scenario E: 10% commission on a 100.00 subtotal."""
        order = await self.deliver(prepared_order, assignment, lifecycle, actors, (catalog.family_box, 2))

        assert order.status == OrderStatus.DELIVERED
        assert order.restaurant_platform_fee == Decimal("10.00")
        assert order.restaurant_net_value == Decimal("90.00")
        assert order.courier_platform_fee == Decimal("0.00")
        assert order.courier_net_value == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_courier_commission_on_delivery_fee(
        self, prepared_order, assignment, lifecycle, actors, catalog
    ):
        order = await self.deliver(prepared_order, assignment, lifecycle, actors, (catalog.sushi_platter, 1))

        assert order.restaurant_platform_fee == Decimal("5.00")
        assert order.restaurant_net_value == Decimal("44.99")
        assert order.courier_platform_fee == Decimal("0.50")
        assert order.courier_net_value == Decimal("4.50")

    @pytest.mark.asyncio
    async def test_settlement_is_persisted(self, prepared_order, assignment, lifecycle, actors, catalog):
        delivered = await self.deliver(prepared_order, assignment, lifecycle, actors, (catalog.combo, 1))

        reloaded = await lifecycle.get_order(actors.admin, delivered.id)
        assert reloaded.restaurant_net_value == Decimal("40.50")
        assert reloaded.courier_net_value == Decimal("4.50")

    @pytest.mark.asyncio
    async def test_missing_rate_settles_with_zero_fee(self):
        class NoRates(IFeeRateProvider):
            async def get_active_rate(self, category):
                return None

        settlement = SettlementService(UnitOfWorkCatalog, NoRates(), MockPaymentGateway())
        order = Order.place(
            client_id=1,
            restaurant_id=1,
            payment_method=PaymentMethod.CASH,
            items=[OrderItem(product_id=1, product_name="Combo", quantity=1, unit_price=Decimal("45.00"))],
            delivery_fee=Decimal("5.00"),
        )
        order.status = OrderStatus.DELIVERED

        result = await settlement.calculate_and_apply_final_values(order)

        assert result.restaurant_platform_fee == Decimal("0.00")
        assert result.restaurant_net_value == Decimal("45.00")
        assert result.courier_net_value == Decimal("5.00")


class TestRefunds:

    @pytest.mark.asyncio
    async def test_cancel_refunds_captured_payment(self, place_order, lifecycle, payments, actors, catalog):
        order = await place_order((catalog.combo, 1))
        payments.register_payment(order.id, PaymentStatus.PAID, order.total)

        canceled = await lifecycle.cancel_order(actors.client, order.id, "Changed my mind")

        assert canceled.status == OrderStatus.CANCELED
        assert [r.order_id for r in payments.refunds] == [order.id]
        assert (await payments.get_payment_for_order(order.id)).status == PaymentStatus.REFUNDED

    @pytest.mark.asyncio
    async def test_cancel_without_captured_payment(self, place_order, lifecycle, payments, actors, catalog):
        pending = await place_order((catalog.combo, 1))
        payments.register_payment(pending.id, PaymentStatus.PENDING, pending.total)
        unpaid = await place_order((catalog.combo, 1))

        await lifecycle.cancel_order(actors.client, pending.id)
        await lifecycle.cancel_order(actors.client, unpaid.id)

        assert payments.refunds == []

    @pytest.mark.asyncio
    async def test_cancel_survives_gateway_failure(
        self, place_order, lifecycle, payments, actors, catalog, monkeypatch
    ):
        order = await place_order((catalog.combo, 1))

        async def unavailable(order_id):
            raise PaymentGatewayError("gateway down", status_code=503)

        monkeypatch.setattr(payments, "get_payment_for_order", unavailable)

        canceled = await lifecycle.cancel_order(actors.client, order.id)
        assert canceled.status == OrderStatus.CANCELED

    @pytest.mark.asyncio
    async def test_admin_refund(self, place_order, lifecycle, payments, actors, catalog):
        order = await place_order((catalog.combo, 1))
        payments.register_payment(order.id, PaymentStatus.AUTHORIZED, order.total)

        refund = await lifecycle.refund_order(actors.admin, order.id, "Damaged packaging")

        assert refund.status == PaymentStatus.REFUNDED
        assert refund.amount == order.total
        assert refund.reason == "Damaged packaging"

    @pytest.mark.asyncio
    async def test_refund_requires_admin(self, place_order, lifecycle, actors, catalog):
        order = await place_order((catalog.combo, 1))
        with pytest.raises(AccessDenied):
            await lifecycle.refund_order(actors.client, order.id, "Please")

    @pytest.mark.asyncio
    async def test_refund_of_unpaid_order_fails(self, place_order, lifecycle, actors, catalog):
        order = await place_order((catalog.combo, 1))
        with pytest.raises(PaymentGatewayError):
            await lifecycle.refund_order(actors.admin, order.id, "No payment")
