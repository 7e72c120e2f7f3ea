"""Repository interface for coupons."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.coupon import Coupon


class CouponRepository(ABC):

    @abstractmethod
    async def add(self, coupon: Coupon) -> Coupon:
        pass

    @abstractmethod
    async def save(self, coupon: Coupon) -> None:
        pass

    @abstractmethod
    async def find_by_id(self, coupon_id: int) -> Optional[Coupon]:
        pass

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[Coupon]:
        pass

    @abstractmethod
    async def find_all(self, active_only: bool = False) -> List[Coupon]:
        pass

    @abstractmethod
    async def try_redeem(self, coupon_id: int) -> bool:
        """Increment usage if the cap still allows it, as one atomic decision.

        Returns:
            True if the usage was recorded, False if the cap was already reached
        """
        pass
