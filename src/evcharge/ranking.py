"""Order stations by distance from the user."""

from typing import Iterable, List

from .geo import distance_km, format_distance
from .models import AnnotatedStation, GeoPoint, Station


def rank(origin: GeoPoint, stations: Iterable[Station]) -> List[AnnotatedStation]:
    """
    Annotate stations with their distance from origin and sort nearest first.

    Sorting uses the numeric distance; the label is display-only. Stations at
    the same distance keep their input order.

    Args:
        origin: The user's position. Callers must have resolved it already.
        stations: Stations from the backend.

    Returns:
        List of AnnotatedStation objects sorted by distance_km.
    """
    annotated = []
    for station in stations:
        km = distance_km(origin, station.location)
        annotated.append(AnnotatedStation(station=station, distance_km=km, distance_label=format_distance(km)))

    # list.sort is stable
    annotated.sort(key=lambda a: a.distance_km)
    return annotated
