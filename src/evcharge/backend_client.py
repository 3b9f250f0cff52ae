"""Client for the station backend (Supabase REST API)."""

import logging
from typing import Any, Dict, List, Optional

import requests

from . import config
from .exceptions import BackendError, StationNotFoundError
from .models import Station, VehicleProfile

logger = logging.getLogger(__name__)

STATIONS_TABLE = "charging_stations"
VEHICLES_TABLE = "vehicles"
USERS_TABLE = "users"

STATION_SELECT = "*,station_connectors(connector_type,power_kw,status)"
VEHICLE_COLUMNS = "brand,model,year,battery_capacity,connector_type,range_km,charging_power"


class StationBackendClient:
    """Fetches stations and vehicles from the backend and parses them into models."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Project URL, e.g. "https://xyz.supabase.co". Read from
                      EVCHARGE_SUPABASE_URL when omitted.
            api_key: Anonymous API key. Read from EVCHARGE_SUPABASE_ANON_KEY when omitted.
            timeout: Request timeout in seconds.
            session: Optional requests.Session to reuse connections.
        """
        self.base_url = (base_url or config.supabase_url()).rstrip("/")
        self.api_key = api_key or config.supabase_anon_key()
        self.timeout = timeout if timeout is not None else config.request_timeout()
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    def fetch_stations(self) -> List[Station]:
        """
        Get every charging station with its connectors.

        Returns:
            List of Station objects in backend order.
        """
        rows = self._get(STATIONS_TABLE, {"select": STATION_SELECT})
        stations = [Station.from_record(row) for row in rows]
        logger.info(f"Fetched {len(stations)} stations")
        return stations

    def fetch_station(self, station_id: str) -> Station:
        """
        Get a single station by id.

        Raises:
            StationNotFoundError: If the backend has no such station.
        """
        rows = self._get(STATIONS_TABLE, {"select": STATION_SELECT, "id": f"eq.{station_id}"})
        if not rows:
            raise StationNotFoundError(f"Station {station_id} not found")
        return Station.from_record(rows[0])

    def fetch_vehicles(self) -> List[VehicleProfile]:
        """Get the vehicle catalogue, ordered by brand."""
        rows = self._get(VEHICLES_TABLE, {"select": "*", "order": "brand.asc"})
        return [VehicleProfile.from_record(row) for row in rows]

    def fetch_user_vehicle(self, user_id: str, access_token: str) -> Optional[VehicleProfile]:
        """
        Get the vehicle selected by a signed-in user.

        Args:
            user_id: The user's id.
            access_token: The user's session token.

        Returns:
            VehicleProfile, or None if the user has not chosen a vehicle.
        """
        rows = self._get(
            USERS_TABLE,
            {"select": f"vehicle_id,vehicles({VEHICLE_COLUMNS})", "id": f"eq.{user_id}"},
            access_token=access_token,
        )
        if not rows or not rows[0].get("vehicles"):
            return None
        return VehicleProfile.from_record(rows[0]["vehicles"])

    def _get(self, table: str, params: Dict[str, str], access_token: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Query a table through the REST endpoint.

        Returns:
            Decoded JSON rows.

        Raises:
            BackendError: On transport failure or a non-2xx response.
        """
        url = f"{self.base_url}/rest/v1/{table}"
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {access_token or self.api_key}",
            "Accept": "application/json",
        }

        logger.debug(f"GET {url} {params}")
        try:
            response = self._session.get(url, params=params, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"Backend returned {status} for {table}: {e}")
            raise BackendError(f"Backend request for {table} failed with status {status}", status) from e
        except requests.RequestException as e:
            logger.error(f"Failed to reach backend for {table}: {e}")
            raise BackendError(f"Could not reach backend: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from backend for {table}: {e}")
            raise BackendError(f"Invalid response for {table}") from e

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self._session.close()
