"""Main facade for finding charging stations and estimating sessions."""

import logging
from typing import List, Optional

from . import config
from .backend_client import StationBackendClient
from .cache import StationCache
from .charging import DEFAULT_START_PCT, DEFAULT_TARGET_PCT, estimate_charge, estimate_cost
from .models import AnnotatedStation, ChargeEstimate, GeoPoint, Occupancy, Station, VehicleProfile
from .occupancy import classify_station
from .ranking import rank

logger = logging.getLogger(__name__)


class ChargingStationFinder:
    """
    Finds nearby charging stations for one user session.

    This class provides methods to:
    - List stations sorted by distance from the user
    - Get station details through a per-session cache
    - Estimate charging time and cost for the user's vehicle
    - Classify station occupancy

    The station cache lives as long as the finder. Call close() (or use the
    finder as a context manager) when the session ends, e.g. on logout.
    """

    def __init__(
        self,
        client: Optional[StationBackendClient] = None,
        cache: Optional[StationCache] = None,
    ):
        """
        Initialize the finder.

        Args:
            client: Backend client. Built from environment configuration when omitted.
            cache: Station cache. Built from EVCHARGE_STATION_CACHE_* settings when omitted.
        """
        self.client = client if client is not None else StationBackendClient()
        self.cache = cache if cache is not None else StationCache(
            ttl_seconds=config.station_cache_ttl(),
            max_entries=config.station_cache_max_entries(),
        )

    def nearby_stations(
        self,
        origin: GeoPoint,
        query: Optional[str] = None,
        connector_type: Optional[str] = None,
    ) -> List[AnnotatedStation]:
        """
        Get stations sorted by distance from origin.

        Args:
            origin: The user's resolved position.
            query: Optional case-insensitive text matched against name and address.
            connector_type: Optional connector the station must offer.

        Returns:
            List of AnnotatedStation objects, nearest first.
        """
        stations = self.client.fetch_stations()
        ranked = rank(origin, stations)

        if query:
            needle = query.lower()
            ranked = [
                a for a in ranked
                if needle in a.station.name.lower() or needle in a.station.address.lower()
            ]
        if connector_type:
            ranked = [a for a in ranked if a.station.supports_connector(connector_type)]

        return ranked

    def get_station(self, station_id: str) -> Station:
        """
        Get station details, from the cache when possible.

        Raises:
            StationNotFoundError: If the backend has no such station.
            BackendError: If the backend could not be queried.
        """
        return self.cache.get_or_fetch(station_id, self.client.fetch_station)

    @staticmethod
    def effective_power_kw(station: Station, vehicle: VehicleProfile) -> float:
        """Power actually delivered: the lesser of station output and vehicle acceptance."""
        return min(station.power_kw, vehicle.charging_power_kw)

    def estimate_charge(
        self,
        station: Station,
        vehicle: VehicleProfile,
        start_pct: float = DEFAULT_START_PCT,
        target_pct: float = DEFAULT_TARGET_PCT,
    ) -> ChargeEstimate:
        """
        Estimate how long the vehicle takes to charge at this station.

        Raises:
            InvalidRangeError: If target_pct is below start_pct or out of range.
        """
        power = self.effective_power_kw(station, vehicle)
        return estimate_charge(vehicle.battery_capacity_kwh, power, start_pct, target_pct)

    @staticmethod
    def estimate_cost(
        station: Station,
        vehicle: VehicleProfile,
        start_pct: float = DEFAULT_START_PCT,
        target_pct: float = DEFAULT_TARGET_PCT,
    ) -> float:
        """Estimate the session cost at the station's price per kWh."""
        return estimate_cost(vehicle.battery_capacity_kwh, station.price_per_kwh, start_pct, target_pct)

    @staticmethod
    def occupancy(station: Station) -> Occupancy:
        """
        Classify how busy a station is.

        Raises:
            InvalidInputError: If the station reports no connectors.
        """
        return classify_station(station)

    def close(self) -> None:
        """Release resources and clear the station cache."""
        self.cache.clear()
        self.client.close()
        logger.info("Closed station finder session")

    def __enter__(self) -> "ChargingStationFinder":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
