"""Occupancy classification from connector counts."""

from .exceptions import InvalidInputError
from .models import Occupancy, OccupancyLevel, Station

HIGH_OCCUPANCY_PCT = 80.0
MEDIUM_OCCUPANCY_PCT = 40.0


def classify(available: int, total: int) -> Occupancy:
    """
    Classify how busy a station is.

    Args:
        available: Connectors currently free.
        total: Connectors at the station.

    Returns:
        Occupancy with the share of connectors in use and its level.

    Raises:
        InvalidInputError: If total is not positive or available is outside [0, total].
    """
    if total <= 0:
        raise InvalidInputError(f"Total connectors must be positive, got {total}")
    if available < 0 or available > total:
        raise InvalidInputError(f"Available connectors {available} outside [0, {total}]")

    percentage = (total - available) / total * 100

    if percentage >= HIGH_OCCUPANCY_PCT:
        level = OccupancyLevel.HIGH
    elif percentage >= MEDIUM_OCCUPANCY_PCT:
        level = OccupancyLevel.MEDIUM
    else:
        level = OccupancyLevel.LOW

    return Occupancy(level=level, percentage=percentage)


def classify_station(station: Station) -> Occupancy:
    return classify(station.available_connectors, station.total_connectors)
