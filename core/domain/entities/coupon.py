"""
Coupon entity.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..enums import DiscountType


@dataclass
class Coupon:
    """
    Redeemable discount code.

    current_uses only ever grows and never passes max_uses. The increment
    itself happens in the repository as one conditional update.
    """
    code: str
    discount_type: DiscountType
    discount_value: Decimal
    minimum_order_value: Decimal
    start_date: date
    end_date: date
    max_uses: int
    current_uses: int = 0
    active: bool = True
    description: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.code = self.code.strip().upper()

    def is_within_validity(self, today: date) -> bool:
        """Inclusive check against [start_date, end_date]."""
        return self.start_date <= today <= self.end_date

    def is_exhausted(self) -> bool:
        return self.current_uses >= self.max_uses

    @property
    def remaining_uses(self) -> int:
        return max(0, self.max_uses - self.current_uses)

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False
