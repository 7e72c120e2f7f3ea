"""
Cart aggregate.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from ..exceptions import InvalidArgument, ResourceNotFound
from ..services.coupon_resolver import calculate_discount
from ..services.monetary import ZERO, money
from .coupon import Coupon
from .product import Product


@dataclass
class CartItem:
    """Selected product with the price captured when it was added."""
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal
    id: Optional[int] = None

    @property
    def subtotal(self) -> Decimal:
        return money(self.unit_price * self.quantity)


@dataclass
class Cart:
    """
    A client's in-progress selection plus an optional coupon.

    Cached totals are recomputed after every change:
    total = subtotal - discount (the delivery fee is decided at checkout).
    """
    client_id: int
    items: List[CartItem] = field(default_factory=list)
    coupon: Optional[Coupon] = None
    subtotal: Decimal = ZERO
    discount: Decimal = ZERO
    total: Decimal = ZERO
    id: Optional[int] = None
    version: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.items

    def add_product(self, product: Product, quantity: int) -> CartItem:
        """Add a product, merging with an existing line for the same product."""
        if quantity <= 0:
            raise InvalidArgument("Quantity must be greater than zero")

        for item in self.items:
            if item.product_id == product.id:
                item.quantity += quantity
                self.recalculate()
                return item

        item = CartItem(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            unit_price=money(product.price),
        )
        self.items.append(item)
        self.recalculate()
        return item

    def update_quantity(self, item_id: int, quantity: int) -> None:
        if quantity <= 0:
            raise InvalidArgument("Quantity must be greater than zero")
        self._find_item(item_id).quantity = quantity
        self.recalculate()

    def remove_item(self, item_id: int) -> None:
        self.items.remove(self._find_item(item_id))
        self.recalculate()

    def attach_coupon(self, coupon: Coupon) -> None:
        self.coupon = coupon
        self.recalculate()

    def detach_coupon(self) -> None:
        self.coupon = None
        self.recalculate()

    def clear(self) -> None:
        self.items.clear()
        self.coupon = None
        self.recalculate()

    def recalculate(self) -> None:
        self.subtotal = money(sum((item.subtotal for item in self.items), ZERO))
        self.discount = calculate_discount(self.coupon, self.subtotal)
        self.total = money(self.subtotal - self.discount)

    def _find_item(self, item_id: int) -> CartItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise ResourceNotFound(f"Item {item_id} not found in cart")
