"""Tiered distance / ETA estimation."""

import logging
from decimal import Decimal
from typing import Optional

from core.application.interfaces import IRoutingService
from core.domain.enums import VehicleType
from core.domain.services.geo import haversine_km, travel_minutes
from core.domain.value_objects import EtaEstimate, EtaSource
from core.settings.modules.delivery_settings import DeliverySettings

logger = logging.getLogger(__name__)


class EtaEstimator:
    """
    Estimates delivery distance and travel time.

    Tiers, in order:
    1. Routing service (road distance and duration)
    2. Great-circle distance at the vehicle's average speed
    3. Configured default ETA

    Routing failures never reach the caller.
    """

    def __init__(
        self,
        routing_service: Optional[IRoutingService],
        settings: Optional[DeliverySettings] = None,
    ) -> None:
        self._routing = routing_service
        self._settings = settings or DeliverySettings()

    async def estimate(
        self,
        origin_lat: Optional[Decimal],
        origin_lon: Optional[Decimal],
        dest_lat: Optional[Decimal],
        dest_lon: Optional[Decimal],
        vehicle_type: Optional[VehicleType],
    ) -> EtaEstimate:
        if None in (origin_lat, origin_lon, dest_lat, dest_lon):
            return EtaEstimate(
                distance_km=None,
                eta_minutes=self._settings.default_eta_minutes,
                source=EtaSource.DEFAULT,
            )

        estimate = await self._from_routing(origin_lat, origin_lon, dest_lat, dest_lon, vehicle_type)
        if estimate is None:
            estimate = self._from_great_circle(origin_lat, origin_lon, dest_lat, dest_lon, vehicle_type)

        return self._normalize(estimate)

    async def _from_routing(self, origin_lat, origin_lon, dest_lat, dest_lon, vehicle_type):
        if self._routing is None:
            return None

        profile = (vehicle_type or VehicleType.MOTORCYCLE).routing_profile
        try:
            route = await self._routing.route(origin_lat, origin_lon, dest_lat, dest_lon, profile)
        except Exception as e:
            logger.debug(f"Routing service unavailable, falling back to great-circle: {e}")
            return None

        if route is None:
            return None
        return EtaEstimate(
            distance_km=route.distance_km,
            eta_minutes=route.duration_minutes,
            source=EtaSource.ROUTING_SERVICE,
        )

    def _from_great_circle(self, origin_lat, origin_lon, dest_lat, dest_lon, vehicle_type):
        distance = haversine_km(origin_lat, origin_lon, dest_lat, dest_lon)
        minutes = travel_minutes(
            distance,
            vehicle_type,
            bicycle_speed=self._settings.bicycle_speed_kmh,
            motor_speed=self._settings.motor_speed_kmh,
            min_minutes=self._settings.min_eta_minutes,
            max_minutes=self._settings.max_eta_minutes,
        )
        return EtaEstimate(distance_km=distance, eta_minutes=minutes, source=EtaSource.GREAT_CIRCLE)

    def _normalize(self, estimate: EtaEstimate) -> EtaEstimate:
        min_distance = self._settings.min_distance_km

        if estimate.distance_km is None or estimate.distance_km <= 0:
            return EtaEstimate(
                distance_km=min_distance,
                eta_minutes=self._settings.default_eta_minutes,
                source=EtaSource.DEFAULT,
            )

        if estimate.distance_km < min_distance:
            return EtaEstimate(
                distance_km=min_distance,
                eta_minutes=max(self._settings.min_eta_minutes, estimate.eta_minutes),
                source=estimate.source,
            )

        return estimate
