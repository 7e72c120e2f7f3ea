"""Application DTOs for carts."""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from core.domain.entities.cart import Cart


class CartItemRequest(BaseModel):
    product_id: int = Field(..., description="Catalog product id")
    quantity: int = Field(1, description="Quantity to add")

    model_config = {"frozen": True}


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(..., description="New quantity (> 0)")

    model_config = {"frozen": True}


class ApplyCouponRequest(BaseModel):
    code: str = Field(..., description="Coupon code")

    model_config = {"frozen": True}


class CartItemDTO(BaseModel):
    id: int
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal

    model_config = {"frozen": True}


class CartDTO(BaseModel):
    id: int
    client_id: int
    items: List[CartItemDTO] = Field(default_factory=list)
    coupon_code: Optional[str] = None
    subtotal: Decimal
    discount: Decimal
    total: Decimal

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, cart: Cart) -> "CartDTO":
        return cls(
            id=cart.id,
            client_id=cart.client_id,
            items=[
                CartItemDTO(
                    id=item.id,
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    subtotal=item.subtotal,
                )
                for item in cart.items
            ],
            coupon_code=cart.coupon.code if cart.coupon else None,
            subtotal=cart.subtotal,
            discount=cart.discount,
            total=cart.total,
        )
