"""Data models for EV charging station lookup."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .exceptions import InvalidInputError


class StationStatus(Enum):
    """Backend-supplied station status."""

    AVAILABLE = "available"
    WAITING = "waiting"
    UNAVAILABLE = "unavailable"

    @classmethod
    def parse(cls, value: str) -> "StationStatus":
        try:
            return cls(value.lower())
        except (AttributeError, ValueError):
            raise InvalidInputError(f"Unknown station status: {value!r}")

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def color(self) -> str:
        return _STATUS_COLORS[self]

    @property
    def action_label(self) -> str:
        """Label for the primary action offered on a station in this state."""
        return _STATUS_ACTIONS[self]

    @property
    def is_reservable(self) -> bool:
        return self is not StationStatus.UNAVAILABLE


_STATUS_LABELS = {
    StationStatus.AVAILABLE: "No wait",
    StationStatus.WAITING: "Waiting",
    StationStatus.UNAVAILABLE: "Unavailable",
}

_STATUS_COLORS = {
    StationStatus.AVAILABLE: "#10B981",
    StationStatus.WAITING: "#F59E0B",
    StationStatus.UNAVAILABLE: "#EF4444",
}

_STATUS_ACTIONS = {
    StationStatus.AVAILABLE: "Reserve charger",
    StationStatus.WAITING: "Join queue",
    StationStatus.UNAVAILABLE: "Unavailable",
}


class OccupancyLevel(Enum):
    """Locally derived occupancy bucket, independent of StationStatus."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def label(self) -> str:
        return _OCCUPANCY_LABELS[self]

    @property
    def color(self) -> str:
        return _OCCUPANCY_COLORS[self]


_OCCUPANCY_LABELS = {
    OccupancyLevel.LOW: "Low occupancy",
    OccupancyLevel.MEDIUM: "Medium occupancy",
    OccupancyLevel.HIGH: "High occupancy",
}

_OCCUPANCY_COLORS = {
    OccupancyLevel.LOW: "#10B981",
    OccupancyLevel.MEDIUM: "#F59E0B",
    OccupancyLevel.HIGH: "#EF4444",
}


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in degrees."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Connector:
    """A physical charging outlet at a station."""
    connector_type: str  # e.g. "CCS2", "CHAdeMO", "Type 2"
    power_kw: float
    status: str


@dataclass(frozen=True)
class Station:
    """Represents a charging station as returned by the backend."""
    id: str
    name: str
    address: str
    location: GeoPoint
    status: StationStatus
    total_connectors: int
    available_connectors: int
    power_kw: float
    price_per_kwh: float
    connectors: Tuple[Connector, ...] = ()
    images: Tuple[str, ...] = ()

    def supports_connector(self, connector_type: str) -> bool:
        """Check whether any connector at this station matches the given type."""
        wanted = connector_type.strip().lower()
        return any(c.connector_type.strip().lower() == wanted for c in self.connectors)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Station":
        """
        Build a Station from a backend row.

        Args:
            record: Row from the charging_stations table, optionally with the
                    embedded station_connectors relation.

        Returns:
            Station object.

        Raises:
            InvalidInputError: If a field is missing or violates a station invariant.
        """
        try:
            station_id = str(record["id"])
            total = int(record["total_connectors"])
            available = int(record["available_connectors"])
            power_kw = float(record["power_kw"])
            price = float(record["price_per_kwh"])
            location = GeoPoint(float(record["latitude"]), float(record["longitude"]))
            connectors = tuple(
                Connector(
                    connector_type=str(c["connector_type"]),
                    power_kw=float(c.get("power_kw") or power_kw),
                    status=str(c.get("status") or ""),
                )
                for c in record.get("station_connectors") or []
            )
            name = record["name"]
            address = record["address"]
            status = StationStatus.parse(record["status"])
        except KeyError as e:
            raise InvalidInputError(f"Station record missing field {e}")
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Malformed station record {record.get('id')!r}: {e}")

        if total < 0 or available < 0:
            raise InvalidInputError(f"Station {station_id} has negative connector counts")
        if available > total:
            raise InvalidInputError(
                f"Station {station_id} reports {available} available of {total} connectors"
            )
        if power_kw <= 0:
            raise InvalidInputError(f"Station {station_id} has non-positive power {power_kw}")
        if price < 0:
            raise InvalidInputError(f"Station {station_id} has negative price {price}")

        return cls(
            id=station_id,
            name=name,
            address=address,
            location=location,
            status=status,
            total_connectors=total,
            available_connectors=available,
            power_kw=power_kw,
            price_per_kwh=price,
            connectors=connectors,
            images=tuple(record.get("images") or ()),
        )


@dataclass(frozen=True)
class AnnotatedStation:
    """A station with its distance from the user for one ranking pass."""
    station: Station
    distance_km: float
    distance_label: str  # e.g. "850m", "12.3km"

    @property
    def id(self) -> str:
        return self.station.id

    @property
    def name(self) -> str:
        return self.station.name


@dataclass(frozen=True)
class VehicleProfile:
    """Charging-relevant description of the user's vehicle."""
    battery_capacity_kwh: float
    charging_power_kw: float  # Maximum power the vehicle accepts
    connector_type: str
    brand: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    range_km: Optional[float] = None

    def __post_init__(self):
        if self.battery_capacity_kwh <= 0:
            raise InvalidInputError(f"Battery capacity must be positive, got {self.battery_capacity_kwh}")
        if self.charging_power_kw <= 0:
            raise InvalidInputError(f"Charging power must be positive, got {self.charging_power_kw}")

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.brand, self.model) if p]
        name = " ".join(parts) or self.connector_type
        return f"{name} ({self.year})" if self.year else name

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "VehicleProfile":
        """Build a VehicleProfile from a row of the vehicles table."""
        try:
            return cls(
                battery_capacity_kwh=float(record["battery_capacity"]),
                charging_power_kw=float(record["charging_power"]),
                connector_type=str(record["connector_type"]),
                brand=record.get("brand"),
                model=record.get("model"),
                year=int(record["year"]) if record.get("year") is not None else None,
                range_km=float(record["range_km"]) if record.get("range_km") is not None else None,
            )
        except KeyError as e:
            raise InvalidInputError(f"Vehicle record missing field {e}")
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Malformed vehicle record: {e}")


@dataclass(frozen=True)
class ChargeEstimate:
    """Estimated charging session duration."""
    minutes: int
    hours: int = field(init=False)
    remainder_minutes: int = field(init=False)

    def __post_init__(self):
        # frozen dataclass, so derived fields go through object.__setattr__
        object.__setattr__(self, "hours", self.minutes // 60)
        object.__setattr__(self, "remainder_minutes", self.minutes % 60)

    @classmethod
    def from_minutes(cls, minutes: int) -> "ChargeEstimate":
        return cls(minutes=minutes)

    def as_dict(self) -> Dict[str, int]:
        return {
            "minutes": self.minutes,
            "hours": self.hours,
            "remainderMinutes": self.remainder_minutes,
        }

    def __str__(self) -> str:
        if self.hours > 0:
            return f"{self.hours}h {self.remainder_minutes}min"
        return f"{self.minutes}min"


@dataclass(frozen=True)
class Occupancy:
    """Occupancy classification derived from connector counts."""
    level: OccupancyLevel
    percentage: float
