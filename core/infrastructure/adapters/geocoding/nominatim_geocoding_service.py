"""
Nominatim Geocoding Service Implementation.

Resolves free-form addresses through the OpenStreetMap Nominatim API.
"""
import asyncio
import logging
import time
from typing import Dict, Optional

import aiohttp

from core.application.interfaces import IGeocodingService
from core.domain.value_objects import Coordinates
from core.settings.modules.routing_settings import GeocodingSettings


logger = logging.getLogger(__name__)

# Nominatim usage policy: at most one request per second
MIN_REQUEST_INTERVAL_SECONDS = 1.0


class NominatimGeocodingService(IGeocodingService):
    """
    Nominatim implementation of geocoding service.

    Successful lookups are cached for the life of the instance. Failures are
    logged and reported as None.
    """

    def __init__(self, settings: GeocodingSettings):
        self.settings = settings
        self.base_url = settings.base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=settings.timeout_seconds)
        self._cache: Dict[str, Coordinates] = {}
        self._lock = asyncio.Lock()
        self._last_request_at = 0.0
        logger.info(f"NominatimGeocodingService initialized ({self.base_url})")

    async def geocode(self, query: str) -> Optional[Coordinates]:
        if not self.settings.enabled or not query or not query.strip():
            return None

        key = query.strip().lower()
        if key in self._cache:
            return self._cache[key]

        async with self._lock:
            await self._respect_rate_limit()
            coordinates = await self._search(query.strip())

        if coordinates is not None:
            self._cache[key] = coordinates
        return coordinates

    async def _search(self, query: str) -> Optional[Coordinates]:
        params = {"q": query, "format": "json", "limit": "1", "addressdetails": "1"}
        headers = {"User-Agent": self.settings.user_agent}

        try:
            async with aiohttp.ClientSession(timeout=self.timeout, headers=headers) as session:
                async with session.get(f"{self.base_url}/search", params=params) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.warning(f"Nominatim API error: {response.status} - {error_text}")
                        return None
                    results = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Nominatim request failed: {e}")
            return None

        if not results:
            logger.warning(f"No geocoding result for: {query}")
            return None

        first = results[0]
        try:
            coordinates = Coordinates(latitude=first["lat"], longitude=first["lon"])
        except (KeyError, ValueError, ArithmeticError) as e:
            logger.warning(f"Unusable geocoding result for {query}: {e}")
            return None

        logger.info(f"Geocoded '{query}' -> ({coordinates})")
        return coordinates

    async def _respect_rate_limit(self) -> None:
        elapsed = time.monotonic() - self._last_request_at
        if elapsed < MIN_REQUEST_INTERVAL_SECONDS:
            await asyncio.sleep(MIN_REQUEST_INTERVAL_SECONDS - elapsed)
        self._last_request_at = time.monotonic()
