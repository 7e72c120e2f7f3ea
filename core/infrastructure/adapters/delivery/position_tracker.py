"""Seed courier positions from the restaurant they pick up at."""
import logging
from typing import Optional

from core.application.interfaces import ICourierPositionTracker
from core.domain.entities import Courier
from core.domain.value_objects import Address


logger = logging.getLogger(__name__)


class RestaurantOriginPositionTracker(ICourierPositionTracker):
    """Places a courier with no known position at the pickup restaurant."""

    async def initialize_position(self, courier: Courier, origin: Optional[Address]) -> bool:
        if courier.has_position:
            return False

        if origin is None or not origin.is_complete():
            logger.info(
                f"Courier {courier.id}: restaurant has no geocoded principal address, "
                f"position not initialized"
            )
            return False

        courier.move_to(origin.coordinates)
        logger.info(f"Courier {courier.id} position initialized at {origin.coordinates}")
        return True
