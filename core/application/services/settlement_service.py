"""Financial settlement: order pricing, post-delivery split and refunds."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, List, Optional, Sequence, Tuple

from core.application.interfaces import ICatalog, IFeeRateProvider, IPaymentGateway, RefundInfo
from core.data.uow import UnitOfWork
from core.domain.entities import Cart, Coupon, Order, OrderItem, Settlement
from core.domain.enums import FeeCategory
from core.domain.exceptions import (
    AccessDenied,
    CouponExhausted,
    CouponNotFound,
    InvalidArgument,
    ProductUnavailable,
    ResourceNotFound,
)
from core.domain.services.coupon_resolver import calculate_discount, validate_applicable
from core.domain.services.monetary import ZERO, money, net_value, platform_fee
from core.domain.value_objects import Actor
from core.settings.modules.delivery_settings import DeliverySettings

logger = logging.getLogger(__name__)

CatalogFactory = Callable[[UnitOfWork], ICatalog]


@dataclass(frozen=True)
class OrderPricing:
    """Priced line items and totals, ready to become an Order."""
    items: List[OrderItem]
    subtotal: Decimal
    discount: Decimal
    delivery_fee: Decimal
    total: Decimal
    coupon: Optional[Coupon] = None


class SettlementService:
    """
    Computes every monetary figure of an order.

    Pricing runs inside the caller's unit of work; the coupon usage counter
    is only touched by redeem_coupon(), in that same unit of work.
    """

    def __init__(
        self,
        catalog_factory: CatalogFactory,
        fee_rates: IFeeRateProvider,
        payment_gateway: IPaymentGateway,
        settings: Optional[DeliverySettings] = None,
    ) -> None:
        self._catalog_factory = catalog_factory
        self._fee_rates = fee_rates
        self._payments = payment_gateway
        self._settings = settings or DeliverySettings()

    # =========================================================================
    # PRICING
    # =========================================================================

    def delivery_fee_for(self, subtotal: Decimal) -> Decimal:
        """Free delivery at or above the configured threshold."""
        if money(subtotal) >= money(self._settings.free_delivery_threshold):
            return ZERO
        return money(self._settings.delivery_fee)

    async def price_items(
        self,
        uow: UnitOfWork,
        restaurant_id: int,
        requested: Sequence[Tuple[int, int]],
        coupon_code: Optional[str] = None,
        today: Optional[date] = None,
    ) -> OrderPricing:
        """
        Price explicit (product_id, quantity) pairs.

        Raises:
            ProductNotFound: unknown product
            ProductUnavailable: product is not sellable
            InvalidArgument: product from another restaurant, invalid coupon
            CouponNotFound: unknown coupon code
        """
        catalog = self._catalog_factory(uow)
        items = []
        for product_id, quantity in requested:
            product = await catalog.get_product(product_id)
            self._check_product(product, restaurant_id)
            items.append(
                OrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=quantity,
                    unit_price=product.price,
                )
            )

        coupon = None
        if coupon_code:
            coupon = await uow.coupons.find_by_code(coupon_code)
            if coupon is None:
                raise CouponNotFound(f"Coupon {coupon_code} not found")
        return self._price(items, coupon, today)

    async def price_cart(
        self,
        uow: UnitOfWork,
        client_id: int,
        cart_id: int,
        restaurant_id: int,
        today: Optional[date] = None,
    ) -> Tuple[OrderPricing, Cart]:
        """
        Price a client's cart using the prices captured when items were added.

        Raises:
            ResourceNotFound: cart missing or owned by someone else
            InvalidArgument: cart is empty
            ProductUnavailable: an item is no longer sellable
        """
        cart = await uow.carts.find_by_id(cart_id)
        if cart is None or cart.client_id != client_id:
            raise ResourceNotFound(f"Cart {cart_id} not found")
        if cart.is_empty:
            raise InvalidArgument("Cart is empty")

        catalog = self._catalog_factory(uow)
        items = []
        for cart_item in cart.items:
            product = await catalog.get_product(cart_item.product_id)
            self._check_product(product, restaurant_id)
            items.append(
                OrderItem(
                    product_id=cart_item.product_id,
                    product_name=cart_item.product_name,
                    quantity=cart_item.quantity,
                    unit_price=cart_item.unit_price,
                )
            )

        # Usage counters move; re-read the attached coupon
        coupon = None
        if cart.coupon is not None:
            coupon = await uow.coupons.find_by_id(cart.coupon.id)
            if coupon is None:
                raise CouponNotFound(f"Coupon {cart.coupon.code} not found")
        return self._price(items, coupon, today), cart

    async def redeem_coupon(self, uow: UnitOfWork, coupon: Coupon) -> None:
        """
        Count one usage of the coupon in the caller's unit of work.

        Raises:
            CouponExhausted: the cap was reached by a concurrent order
        """
        if not await uow.coupons.try_redeem(coupon.id):
            raise CouponExhausted(f"Coupon {coupon.code} has reached its usage limit")
        logger.info(f"[{uow.execution_id}] Coupon {coupon.code} redeemed")

    def _price(self, items: List[OrderItem], coupon: Optional[Coupon], today: Optional[date]) -> OrderPricing:
        subtotal = money(sum((item.subtotal for item in items), ZERO))

        discount = ZERO
        if coupon is not None:
            validate_applicable(coupon, subtotal, today)
            discount = calculate_discount(coupon, subtotal)

        delivery_fee = self.delivery_fee_for(subtotal)
        return OrderPricing(
            items=items,
            subtotal=subtotal,
            discount=discount,
            delivery_fee=delivery_fee,
            total=money(subtotal - discount + delivery_fee),
            coupon=coupon,
        )

    @staticmethod
    def _check_product(product, restaurant_id: int) -> None:
        if product.restaurant_id != restaurant_id:
            raise InvalidArgument(
                f"Product {product.id} does not belong to restaurant {restaurant_id}"
            )
        if not product.available:
            raise ProductUnavailable(f"Product {product.name} is not available")

    # =========================================================================
    # POST-DELIVERY SETTLEMENT
    # =========================================================================

    async def calculate_and_apply_final_values(self, order: Order) -> Settlement:
        """
        Split gross values into platform fee and net payout for both sides.

        Restaurant gross is the subtotal, courier gross is the delivery fee.
        A category without an active rate is settled with a zero fee.
        """
        restaurant_rate = await self._active_rate(FeeCategory.RESTAURANT)
        courier_rate = await self._active_rate(FeeCategory.COURIER)

        restaurant_fee = platform_fee(order.subtotal, restaurant_rate)
        courier_fee = platform_fee(order.delivery_fee, courier_rate)
        settlement = Settlement(
            restaurant_platform_fee=restaurant_fee,
            restaurant_net_value=net_value(order.subtotal, restaurant_fee),
            courier_platform_fee=courier_fee,
            courier_net_value=net_value(order.delivery_fee, courier_fee),
        )

        order.apply_settlement(settlement)
        logger.info(
            f"Order {order.id} settled: restaurant net {settlement.restaurant_net_value}, "
            f"courier net {settlement.courier_net_value}"
        )
        return settlement

    async def _active_rate(self, category: FeeCategory) -> Optional[Decimal]:
        rate = await self._fee_rates.get_active_rate(category)
        if rate is None:
            logger.warning(f"No active {category.value} fee configuration; settling with zero fee")
        return rate

    # =========================================================================
    # REFUNDS
    # =========================================================================

    async def refund_if_captured(self, order_id: int) -> Optional[RefundInfo]:
        """
        Refund a canceled order's payment if it was captured or authorized.

        Best effort: gateway failures are logged and swallowed.
        """
        try:
            payment = await self._payments.get_payment_for_order(order_id)
            if payment is None:
                logger.info(f"Order {order_id} has no payment; nothing to refund")
                return None
            if not payment.status.is_refundable:
                logger.info(f"Order {order_id} payment is {payment.status.value}; no refund needed")
                return None

            refund = await self._payments.refund(
                order_id, f"Automatic refund for canceled order #{order_id}"
            )
            logger.info(f"Order {order_id} refunded ({refund.amount})")
            return refund
        except Exception as e:
            logger.warning(f"Automatic refund failed for order {order_id}: {e}", exc_info=True)
            return None

    async def refund(self, actor: Actor, order_id: int, reason: str) -> RefundInfo:
        """
        Explicit refund requested by an administrator.

        Raises:
            AccessDenied: actor is not an admin
            PaymentGatewayError: gateway refused or failed
        """
        if not actor.is_admin:
            raise AccessDenied("Only administrators can issue refunds")
        logger.info(f"Refund of order {order_id} requested by {actor}: {reason}")
        return await self._payments.refund(order_id, reason)
