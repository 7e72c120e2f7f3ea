"""Routing service interface."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class RouteResult:
    """Route distance/duration, with optional decoded waypoints."""
    distance_km: Decimal
    duration_minutes: int
    waypoints: List[Tuple[float, float]] = field(default_factory=list)


class IRoutingService(ABC):
    """Interface for road routing between two coordinates."""

    @abstractmethod
    async def route(
        self,
        origin_lat: Decimal,
        origin_lon: Decimal,
        dest_lat: Decimal,
        dest_lon: Decimal,
        profile: str,
        with_geometry: bool = False,
    ) -> Optional[RouteResult]:
        """
        Compute a route.

        Args:
            profile: "cycling" or "driving"
            with_geometry: Also return decoded waypoints

        Returns:
            RouteResult, or None if the service has no route
        """
        pass
