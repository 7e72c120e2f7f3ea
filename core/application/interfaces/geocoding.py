"""Geocoding interface."""
from abc import ABC, abstractmethod
from typing import Optional

from core.domain.value_objects import Coordinates


class IGeocodingService(ABC):

    @abstractmethod
    async def geocode(self, query: str) -> Optional[Coordinates]:
        """
        Resolve a free-form address to coordinates.

        Returns:
            Coordinates, or None when nothing matched
        """
        pass
