"""Application DTOs for coupon administration."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from core.domain.entities.coupon import Coupon
from core.domain.enums import DiscountType


class CouponRequest(BaseModel):
    """Create/update payload for a coupon."""

    code: str = Field(..., description="Unique code (stored upper-case)")
    discount_type: DiscountType = Field(..., description="PERCENTAGE or FIXED_AMOUNT")
    discount_value: Decimal = Field(..., description="Percent or fixed amount")
    minimum_order_value: Decimal = Field(Decimal("0.00"), description="Minimum subtotal")
    start_date: date = Field(..., description="First valid day (inclusive)")
    end_date: date = Field(..., description="Last valid day (inclusive)")
    max_uses: int = Field(..., description="Usage cap")
    description: Optional[str] = Field(None, max_length=255)

    model_config = {"frozen": True}


class CouponDTO(BaseModel):
    id: int
    code: str
    description: Optional[str] = None
    discount_type: DiscountType
    discount_value: Decimal
    minimum_order_value: Decimal
    start_date: date
    end_date: date
    max_uses: int
    current_uses: int
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, coupon: Coupon) -> "CouponDTO":
        return cls(
            id=coupon.id,
            code=coupon.code,
            description=coupon.description,
            discount_type=coupon.discount_type,
            discount_value=coupon.discount_value,
            minimum_order_value=coupon.minimum_order_value,
            start_date=coupon.start_date,
            end_date=coupon.end_date,
            max_uses=coupon.max_uses,
            current_uses=coupon.current_uses,
            active=coupon.active,
            created_at=coupon.created_at,
            updated_at=coupon.updated_at,
        )


class CouponCheckDTO(BaseModel):
    """Preview of a coupon applied to a subtotal (nothing redeemed)."""

    code: str
    subtotal: Decimal
    discount: Decimal
    total: Decimal

    model_config = {"frozen": True}
