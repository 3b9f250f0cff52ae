"""Tests for StationBackendClient."""

import unittest
from unittest.mock import MagicMock, patch
import sys
from pathlib import Path

import requests

# Add src and tests to path so we can import evcharge and the fixtures
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from evcharge.backend_client import StationBackendClient
from evcharge.exceptions import BackendError, InvalidInputError, StationNotFoundError
from fixtures import station_record


def json_response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        error = requests.HTTPError(f"{status_code} Error")
        error.response = response
        response.raise_for_status.side_effect = error
    return response


class TestStationBackendClient(unittest.TestCase):
    """Test querying and parsing backend rows."""

    def setUp(self):
        self.session = MagicMock()
        self.client = StationBackendClient(
            base_url="https://example.supabase.co/",
            api_key="anon-key",
            timeout=5,
            session=self.session,
        )

    def test_fetch_stations(self):
        self.session.get.return_value = json_response([
            station_record(id="s1"),
            station_record(id="s2", status="waiting"),
        ])

        stations = self.client.fetch_stations()

        self.assertEqual([s.id for s in stations], ["s1", "s2"])
        args, kwargs = self.session.get.call_args
        self.assertEqual(args[0], "https://example.supabase.co/rest/v1/charging_stations")
        self.assertIn("station_connectors", kwargs["params"]["select"])
        self.assertEqual(kwargs["headers"]["apikey"], "anon-key")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer anon-key")
        self.assertEqual(kwargs["timeout"], 5)

    def test_fetch_station_filters_by_id(self):
        self.session.get.return_value = json_response([station_record(id="abc")])

        station = self.client.fetch_station("abc")

        self.assertEqual(station.id, "abc")
        _, kwargs = self.session.get.call_args
        self.assertEqual(kwargs["params"]["id"], "eq.abc")

    def test_fetch_station_not_found(self):
        self.session.get.return_value = json_response([])
        with self.assertRaises(StationNotFoundError):
            self.client.fetch_station("missing")

    def test_invalid_record_fails_loudly(self):
        self.session.get.return_value = json_response([
            station_record(available_connectors=9, total_connectors=2),
        ])
        with self.assertRaises(InvalidInputError):
            self.client.fetch_stations()

    def test_http_error_raises_backend_error(self):
        self.session.get.return_value = json_response({"message": "boom"}, status_code=500)
        with self.assertRaises(BackendError) as ctx:
            self.client.fetch_stations()
        self.assertEqual(ctx.exception.status_code, 500)

    def test_connection_error_raises_backend_error(self):
        self.session.get.side_effect = requests.ConnectionError("offline")
        with self.assertRaises(BackendError) as ctx:
            self.client.fetch_stations()
        self.assertIsNone(ctx.exception.status_code)

    def test_fetch_vehicles(self):
        self.session.get.return_value = json_response([
            {"brand": "BYD", "model": "Dolphin", "year": 2024, "battery_capacity": 60.4,
             "connector_type": "CCS2", "range_km": 427, "charging_power": 88},
        ])

        vehicles = self.client.fetch_vehicles()

        self.assertEqual(len(vehicles), 1)
        self.assertEqual(vehicles[0].charging_power_kw, 88.0)
        _, kwargs = self.session.get.call_args
        self.assertEqual(kwargs["params"]["order"], "brand.asc")

    def test_fetch_user_vehicle_uses_access_token(self):
        self.session.get.return_value = json_response([
            {"vehicle_id": "v1", "vehicles": {"brand": "Tesla", "model": "Model 3", "year": 2023,
                                              "battery_capacity": 57.5, "connector_type": "CCS2",
                                              "range_km": 491, "charging_power": 170}},
        ])

        vehicle = self.client.fetch_user_vehicle("user-1", "user-token")

        self.assertEqual(vehicle.brand, "Tesla")
        _, kwargs = self.session.get.call_args
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer user-token")
        self.assertEqual(kwargs["params"]["id"], "eq.user-1")

    def test_fetch_user_vehicle_none_selected(self):
        self.session.get.return_value = json_response([{"vehicle_id": None, "vehicles": None}])
        self.assertIsNone(self.client.fetch_user_vehicle("user-1", "token"))

    def test_missing_configuration(self):
        with patch.dict("os.environ", {}, clear=True):
            with self.assertRaises(ValueError):
                StationBackendClient(session=self.session)

    def test_close_leaves_supplied_session_open(self):
        self.client.close()
        self.session.close.assert_not_called()

    @patch("evcharge.backend_client.requests.Session")
    def test_close_closes_own_session(self, mock_session_cls):
        client = StationBackendClient(base_url="https://example.supabase.co", api_key="anon-key", timeout=5)
        client.close()
        mock_session_cls.return_value.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
