"""Interfaces consumed by settlement and delivery coordination."""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from core.domain.entities import Courier
from core.domain.enums import FeeCategory
from core.domain.value_objects import Address


class IFeeRateProvider(ABC):

    @abstractmethod
    async def get_active_rate(self, category: FeeCategory) -> Optional[Decimal]:
        """
        Percent of the active configuration for a category.

        Returns:
            Percent, or None if no configuration is active
        """
        pass


class ICourierPositionTracker(ABC):
    """
    Source of courier live position.

    The shipped implementation only seeds a starting point; a real GPS
    feed can replace it without touching settlement or lifecycle code.
    """

    @abstractmethod
    async def initialize_position(self, courier: Courier, origin: Optional[Address]) -> bool:
        """
        Seed the courier position if it was never set.

        Args:
            courier: Courier leaving for delivery
            origin: Restaurant principal address, None when it has none

        Returns:
            True if the position was changed
        """
        pass
