"""Static mappers for domain entities ↔ database models."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.entities import (
    Cart,
    CartItem,
    Client,
    Coupon,
    Courier,
    FeeConfiguration,
    Order,
    OrderItem,
    Product,
    Restaurant,
)
from core.domain.enums import (
    CourierStatus,
    DiscountType,
    FeeCategory,
    OrderStatus,
    PaymentMethod,
    VehicleType,
)
from core.domain.value_objects import Address

from .models import (
    AddressModel,
    CartItemModel,
    CartModel,
    ClientModel,
    CouponModel,
    CourierModel,
    FeeConfigurationModel,
    OrderItemModel,
    OrderModel,
    ProductModel,
    RestaurantModel,
)


def _utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands timestamps back without an offset; they are stored as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _decimal(value) -> Optional[Decimal]:
    """Normalize DB numeric values (may come back as float on some drivers)."""
    if value is None:
        return None
    return Decimal(str(value))


class OrderItemMapper:
    """Static mapper for OrderItem ↔ OrderItemModel transformation."""

    @staticmethod
    def to_domain(model: OrderItemModel) -> OrderItem:
        return OrderItem(
            product_id=model.product_id,
            product_name=model.product_name,
            quantity=model.quantity,
            unit_price=_decimal(model.unit_price),
        )

    @staticmethod
    def to_persistence(entity: OrderItem) -> OrderItemModel:
        return OrderItemModel(
            product_id=entity.product_id,
            product_name=entity.product_name,
            quantity=entity.quantity,
            unit_price=entity.unit_price,
            subtotal=entity.subtotal,
        )


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation with nested items."""

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Convert ORM model to domain aggregate (with nested items).

        Args:
            model: OrderModel instance with items loaded

        Returns:
            Order domain aggregate
        """
        items = [OrderItemMapper.to_domain(item_model) for item_model in model.items]

        address = None
        if model.delivery_street is not None:
            address = Address(
                street=model.delivery_street,
                number=model.delivery_number,
                complement=model.delivery_complement,
                neighborhood=model.delivery_neighborhood,
                city=model.delivery_city,
                state=model.delivery_state,
                zip_code=model.delivery_zip_code,
                latitude=_decimal(model.delivery_latitude),
                longitude=_decimal(model.delivery_longitude),
            )

        return Order(
            id=model.id,
            client_id=model.client_id,
            restaurant_id=model.restaurant_id,
            courier_id=model.courier_id,
            coupon_id=model.coupon_id,
            status=OrderStatus(model.status),
            payment_method=PaymentMethod(model.payment_method),
            change_for=_decimal(model.change_for),
            notes=model.notes,
            items=items,
            delivery_address=address,
            subtotal=_decimal(model.subtotal),
            delivery_fee=_decimal(model.delivery_fee),
            discount=_decimal(model.discount),
            total=_decimal(model.total),
            restaurant_platform_fee=_decimal(model.restaurant_platform_fee),
            restaurant_net_value=_decimal(model.restaurant_net_value),
            courier_platform_fee=_decimal(model.courier_platform_fee),
            courier_net_value=_decimal(model.courier_net_value),
            estimated_delivery_at=_utc(model.estimated_delivery_at),
            created_at=_utc(model.created_at),
            version=model.version,
        )

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert a new domain aggregate to ORM model (with nested items)."""
        order_model = OrderModel(
            client_id=entity.client_id,
            restaurant_id=entity.restaurant_id,
            payment_method=entity.payment_method.value,
            created_at=entity.created_at,
        )
        OrderMapper.update_persistence(entity, order_model)
        order_model.items = [OrderItemMapper.to_persistence(item) for item in entity.items]
        return order_model

    @staticmethod
    def update_persistence(entity: Order, model: OrderModel) -> None:
        """Copy mutable order state onto an existing ORM model.

        Line items and the creation timestamp are never rewritten.
        """
        model.status = entity.status.value
        model.courier_id = entity.courier_id
        model.coupon_id = entity.coupon_id
        model.change_for = entity.change_for
        model.notes = entity.notes

        address = entity.delivery_address
        model.delivery_street = address.street if address else None
        model.delivery_number = address.number if address else None
        model.delivery_complement = address.complement if address else None
        model.delivery_neighborhood = address.neighborhood if address else None
        model.delivery_city = address.city if address else None
        model.delivery_state = address.state if address else None
        model.delivery_zip_code = address.zip_code if address else None
        model.delivery_latitude = address.latitude if address else None
        model.delivery_longitude = address.longitude if address else None

        model.subtotal = entity.subtotal
        model.delivery_fee = entity.delivery_fee
        model.discount = entity.discount
        model.total = entity.total
        model.restaurant_platform_fee = entity.restaurant_platform_fee
        model.restaurant_net_value = entity.restaurant_net_value
        model.courier_platform_fee = entity.courier_platform_fee
        model.courier_net_value = entity.courier_net_value
        model.estimated_delivery_at = entity.estimated_delivery_at


class CouponMapper:
    @staticmethod
    def to_domain(model: CouponModel) -> Coupon:
        return Coupon(
            id=model.id,
            code=model.code,
            description=model.description,
            discount_type=DiscountType(model.discount_type),
            discount_value=_decimal(model.discount_value),
            minimum_order_value=_decimal(model.minimum_order_value),
            start_date=model.start_date,
            end_date=model.end_date,
            max_uses=model.max_uses,
            current_uses=model.current_uses,
            active=model.active,
            created_at=_utc(model.created_at),
            updated_at=_utc(model.updated_at),
        )

    @staticmethod
    def update_persistence(entity: Coupon, model: CouponModel) -> None:
        """Copy editable coupon fields. current_uses is owned by the redeem update."""
        model.code = entity.code
        model.description = entity.description
        model.discount_type = entity.discount_type.value
        model.discount_value = entity.discount_value
        model.minimum_order_value = entity.minimum_order_value
        model.start_date = entity.start_date
        model.end_date = entity.end_date
        model.max_uses = entity.max_uses
        model.active = entity.active

    @staticmethod
    def to_persistence(entity: Coupon) -> CouponModel:
        model = CouponModel(current_uses=entity.current_uses)
        CouponMapper.update_persistence(entity, model)
        return model


class CourierMapper:
    @staticmethod
    def to_domain(model: CourierModel) -> Courier:
        return Courier(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            status=CourierStatus(model.status),
            vehicle_type=VehicleType(model.vehicle_type),
            plate=model.plate,
            latitude=_decimal(model.latitude),
            longitude=_decimal(model.longitude),
        )

    @staticmethod
    def update_persistence(entity: Courier, model: CourierModel) -> None:
        model.name = entity.name
        model.email = entity.email
        model.phone = entity.phone
        model.status = entity.status.value
        model.vehicle_type = entity.vehicle_type.value
        model.plate = entity.plate
        model.latitude = entity.latitude
        model.longitude = entity.longitude


class PartyMapper:
    """Clients, restaurants and address book rows."""

    @staticmethod
    def client_to_domain(model: ClientModel) -> Client:
        return Client(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            email=model.email,
            phone=model.phone,
        )

    @staticmethod
    def restaurant_to_domain(model: RestaurantModel) -> Restaurant:
        return Restaurant(
            id=model.id,
            owner_user_id=model.owner_user_id,
            name=model.name,
            email=model.email,
        )

    @staticmethod
    def address_to_domain(model: AddressModel) -> Address:
        return Address(
            address_id=model.id,
            street=model.street,
            number=model.number,
            complement=model.complement,
            neighborhood=model.neighborhood,
            city=model.city,
            state=model.state,
            zip_code=model.zip_code,
            latitude=_decimal(model.latitude),
            longitude=_decimal(model.longitude),
        )


class ProductMapper:
    @staticmethod
    def to_domain(model: ProductModel) -> Product:
        return Product(
            id=model.id,
            restaurant_id=model.restaurant_id,
            name=model.name,
            description=model.description,
            price=_decimal(model.price),
            available=model.available,
        )


class CartMapper:
    """Static mapper for Cart ↔ CartModel with nested items and coupon."""

    @staticmethod
    def to_domain(model: CartModel) -> Cart:
        return Cart(
            id=model.id,
            client_id=model.client_id,
            items=[
                CartItem(
                    id=item.id,
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=_decimal(item.unit_price),
                )
                for item in model.items
            ],
            coupon=CouponMapper.to_domain(model.coupon) if model.coupon is not None else None,
            subtotal=_decimal(model.subtotal),
            discount=_decimal(model.discount),
            total=_decimal(model.total),
            version=model.version or 0,
        )

    @staticmethod
    def update_persistence(entity: Cart, model: CartModel) -> None:
        """Synchronize cart state, matching existing item rows by id."""
        model.coupon_id = entity.coupon.id if entity.coupon else None
        model.subtotal = entity.subtotal
        model.discount = entity.discount
        model.total = entity.total

        existing = {item.id: item for item in model.items}
        rows = []
        for item in entity.items:
            row = existing.get(item.id) if item.id is not None else None
            if row is None:
                row = CartItemModel(product_id=item.product_id)
            row.product_name = item.product_name
            row.quantity = item.quantity
            row.unit_price = item.unit_price
            row.subtotal = item.subtotal
            rows.append(row)
        model.items = rows


class FeeConfigurationMapper:
    @staticmethod
    def to_domain(model: FeeConfigurationModel) -> FeeConfiguration:
        return FeeConfiguration(
            id=model.id,
            category=FeeCategory(model.category),
            percent=_decimal(model.percent),
            active=model.active,
            created_at=_utc(model.created_at),
            updated_at=_utc(model.updated_at),
        )

    @staticmethod
    def to_persistence(entity: FeeConfiguration) -> FeeConfigurationModel:
        return FeeConfigurationModel(
            category=entity.category.value,
            percent=entity.percent,
            active=entity.active,
        )
