"""Shared test data builders."""

from evcharge.models import Connector, GeoPoint, Station, StationStatus


def station_record(**overrides):
    """A backend row for a charging station."""
    record = {
        "id": "s1",
        "name": "Central Station",
        "address": "Av. Universidad 123",
        "latitude": 17.0654,
        "longitude": -96.7236,
        "status": "available",
        "total_connectors": 4,
        "available_connectors": 3,
        "power_kw": 150.0,
        "price_per_kwh": 4.5,
        "images": ["https://example.com/s1.jpg"],
        "station_connectors": [
            {"connector_type": "CCS2", "power_kw": 150.0, "status": "available"},
            {"connector_type": "Type 2", "power_kw": 22.0, "status": "occupied"},
        ],
    }
    record.update(overrides)
    return record


def make_station(station_id="s1", latitude=0.0, longitude=0.0, **overrides):
    fields = dict(
        id=station_id,
        name=f"Station {station_id}",
        address=f"{station_id} Main St",
        location=GeoPoint(latitude, longitude),
        status=StationStatus.AVAILABLE,
        total_connectors=4,
        available_connectors=2,
        power_kw=50.0,
        price_per_kwh=0.3,
        connectors=(Connector("CCS2", 50.0, "available"),),
    )
    fields.update(overrides)
    return Station(**fields)
