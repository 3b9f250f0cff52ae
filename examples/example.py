"""Example usage of ChargingStationFinder."""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path so we can import evcharge
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from evcharge import ChargingStationFinder, EVChargeError, GeoPoint, VehicleProfile

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def print_nearby_stations(finder: ChargingStationFinder, origin: GeoPoint, vehicle: VehicleProfile,
                          start_pct: float, target_pct: float, limit: int, query: str = None):
    """
    Display the closest stations with charging estimates for a vehicle.

    Args:
        finder: Open finder session.
        origin: User position.
        vehicle: The user's vehicle.
        start_pct: Current battery level.
        target_pct: Desired battery level.
        limit: Maximum number of stations to show.
        query: Optional text filter on name and address.
    """
    stations = finder.nearby_stations(origin, query=query)

    print(f"\n{'='*70}")
    print(f"Chargers near {origin.latitude:.4f}, {origin.longitude:.4f}")
    print(f"{'='*70}\n")

    if not stations:
        print("  No stations found")
        return

    for entry in stations[:limit]:
        station = entry.station
        print(f"{station.name} - {entry.distance_label}")
        print(f"  {station.address}")
        print(f"  Status: {station.status.label} | {station.power_kw:g}kW | ${station.price_per_kwh:g}/kWh")

        if station.total_connectors > 0:
            occupancy = finder.occupancy(station)
            print(f"  {occupancy.level.label}: {station.available_connectors} of "
                  f"{station.total_connectors} connectors free")

        estimate = finder.estimate_charge(station, vehicle, start_pct, target_pct)
        cost = finder.estimate_cost(station, vehicle, start_pct, target_pct)
        print(f"  {estimate} to {target_pct:g}% (~${cost:.2f})")
        if not station.supports_connector(vehicle.connector_type):
            print(f"  No {vehicle.connector_type} connector at this station")
        print()


def main():
    parser = argparse.ArgumentParser(description="List nearby EV charging stations")
    parser.add_argument("latitude", type=float)
    parser.add_argument("longitude", type=float)
    parser.add_argument("--battery", type=float, default=60.0, help="Battery capacity in kWh")
    parser.add_argument("--power", type=float, default=100.0, help="Vehicle max charging power in kW")
    parser.add_argument("--connector", default="CCS2")
    parser.add_argument("--start", type=float, default=20.0)
    parser.add_argument("--target", type=float, default=80.0)
    parser.add_argument("--limit", type=int, default=5)
    parser.add_argument("--query")
    args = parser.parse_args()

    try:
        vehicle = VehicleProfile(
            battery_capacity_kwh=args.battery,
            charging_power_kw=args.power,
            connector_type=args.connector,
        )
        with ChargingStationFinder() as finder:
            print_nearby_stations(
                finder,
                GeoPoint(args.latitude, args.longitude),
                vehicle,
                args.start,
                args.target,
                args.limit,
                args.query,
            )
    except (EVChargeError, ValueError) as e:
        logger.error(f"Failed to load stations: {e}")
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
