"""
OSRM Routing Service Implementation.

Queries an OSRM server for road distance and travel time.
"""
import asyncio
import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import aiohttp

from core.application.interfaces import IRoutingService, RouteResult
from core.domain.services.polyline import decode_polyline
from core.settings.modules.routing_settings import RoutingSettings


logger = logging.getLogger(__name__)


class OsrmRoutingService(IRoutingService):
    """
    OSRM implementation of routing service.

    Any transport error, timeout, malformed body or non-"Ok" answer yields
    None; callers fall back to their own estimate.
    """

    def __init__(self, settings: RoutingSettings):
        """
        Initialize OSRM routing service.

        Args:
            settings: Routing settings with base URL and timeout
        """
        self.settings = settings
        self.base_url = settings.base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=settings.timeout_seconds)
        logger.info(f"OsrmRoutingService initialized ({self.base_url})")

    async def route(
        self,
        origin_lat: Decimal,
        origin_lon: Decimal,
        dest_lat: Decimal,
        dest_lon: Decimal,
        profile: str,
        with_geometry: bool = False,
    ) -> Optional[RouteResult]:
        if not self.settings.enabled:
            return None
        if None in (origin_lat, origin_lon, dest_lat, dest_lon):
            return None

        # OSRM expects lon,lat pairs
        coordinates = f"{origin_lon},{origin_lat};{dest_lon},{dest_lat}"
        url = f"{self.base_url}/route/v1/{profile or 'driving'}/{coordinates}"
        params = {
            "overview": "full" if with_geometry else "false",
            "alternatives": "false",
            "steps": "false",
        }
        if with_geometry:
            params["geometries"] = "polyline"

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(url, params=params) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.warning(f"OSRM API error: {response.status} - {error_text}")
                        return None
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"OSRM request failed: {e}")
            return None
        except ValueError as e:
            logger.warning(f"OSRM returned a body that is not JSON: {e}")
            return None

        try:
            return self._parse(data, with_geometry)
        except (AttributeError, KeyError, TypeError, ValueError, ArithmeticError) as e:
            logger.warning(f"OSRM returned a malformed route: {e!r}")
            return None

    @staticmethod
    def _parse(data: dict, with_geometry: bool) -> Optional[RouteResult]:
        routes = data.get("routes") or []
        if data.get("code") != "Ok" or not routes:
            logger.warning(f"OSRM returned no valid route (code={data.get('code')})")
            return None

        best = routes[0]
        distance_km = (Decimal(str(best["distance"])) / Decimal("1000")).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )
        duration_minutes = math.ceil(float(best["duration"]) / 60.0)

        waypoints = []
        if with_geometry and best.get("geometry"):
            try:
                waypoints = decode_polyline(best["geometry"])
            except ValueError as e:
                logger.warning(f"Could not decode OSRM geometry: {e}")

        logger.debug(f"OSRM route: {distance_km} km, {duration_minutes} min")
        return RouteResult(
            distance_km=distance_km,
            duration_minutes=duration_minutes,
            waypoints=waypoints,
        )
