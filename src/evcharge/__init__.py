"""evcharge - Nearby EV charging stations and charging-time estimates."""

__version__ = "0.1.0"

from .models import (
    AnnotatedStation,
    ChargeEstimate,
    Connector,
    GeoPoint,
    Occupancy,
    OccupancyLevel,
    Station,
    StationStatus,
    VehicleProfile,
)
from .exceptions import (
    BackendError,
    EVChargeError,
    InvalidInputError,
    InvalidRangeError,
    StationNotFoundError,
)
from .geo import distance_km, format_distance
from .ranking import rank
from .charging import estimate_charge, estimate_cost, estimate_minutes
from .occupancy import classify, classify_station
from .cache import Claim, StationCache
from .backend_client import StationBackendClient
from .station_finder import ChargingStationFinder

__all__ = [
    "ChargingStationFinder",
    "StationBackendClient",
    "StationCache",
    "Claim",
    "AnnotatedStation",
    "ChargeEstimate",
    "Connector",
    "GeoPoint",
    "Occupancy",
    "OccupancyLevel",
    "Station",
    "StationStatus",
    "VehicleProfile",
    "EVChargeError",
    "InvalidRangeError",
    "InvalidInputError",
    "StationNotFoundError",
    "BackendError",
    "distance_km",
    "format_distance",
    "rank",
    "estimate_minutes",
    "estimate_charge",
    "estimate_cost",
    "classify",
    "classify_station",
]
