"""API tests for the parking router, exception handlers and health endpoint."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import MagicMock, patch
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
from parking_ledger.exceptions import AlreadyExited
from parking_ledger.main import APIKeyMiddleware, app
from parking_ledger.routers.parking import get_parking_service
from parking_ledger.services.parking_service import ParkingLedgerService

BASE = "/api/v1/parking"
T0 = datetime(2026, 3, 1, 8, 0, 0)


def enter(client, plate="ABC123", vehicle_class="CAR"):
    return client.post(f"{BASE}/entries", json={"plate": plate, "vehicle_class": vehicle_class})


class TestEntries:
    def test_enter_returns_created_record(self, client):
        resp = enter(client, "abc123")

        assert resp.status_code == 201
        body = resp.json()
        assert body["plate"] == "ABC123"
        assert body["vehicle_class"] == "CAR"
        assert body["active"] is True
        assert body["exit_time"] is None
        assert body["entry_time"]

    def test_invalid_plate_is_bad_request(self, client):
        resp = enter(client, "AB1")

        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == 400
        assert body["path"] == f"{BASE}/entries"
        assert "plate" in body["detail"]
        assert client.get(f"{BASE}/history").json() == []

    def test_unknown_vehicle_class_is_bad_request(self, client):
        assert enter(client, vehicle_class="TRUCK").status_code == 400

    def test_duplicate_is_conflict(self, client):
        assert enter(client, "DUP001").status_code == 201
        resp = enter(client, "DUP001")

        assert resp.status_code == 409
        assert resp.json()["code"] == 409
        active = [v for v in client.get(f"{BASE}/active").json() if v["plate"] == "DUP001"]
        assert len(active) == 1


class TestExitAndCost:
    def test_full_flow(self, client):
        enter(client, "ABC123")

        resp = client.get(f"{BASE}/cost/ABC123")
        assert resp.status_code == 400

        resp = client.put(f"{BASE}/exits/ABC123")
        assert resp.status_code == 200
        body = resp.json()
        assert body["active"] is False
        assert body["exit_time"] is not None
        assert body["cost"] == 1000

        resp = client.get(f"{BASE}/cost/ABC123")
        assert resp.status_code == 200
        assert resp.json() == {
            "plate": "ABC123", "vehicle_class": "CAR",
            "hours": 1, "rate_per_hour": 1000, "cost": 1000,
        }
        assert client.get(f"{BASE}/active").json() == []
        assert len(client.get(f"{BASE}/history").json()) == 1

    def test_two_hour_motorcycle_stay(self, client):
        with patch("parking_ledger.domain.vehicle.utcnow", return_value=T0):
            enter(client, "XYZ789", "MOTORCYCLE")
        with patch("parking_ledger.domain.vehicle.utcnow", return_value=T0 + timedelta(hours=2)):
            resp = client.put(f"{BASE}/exits/XYZ789")

        assert resp.json()["cost"] == 1000
        assert client.get(f"{BASE}/cost/XYZ789").json()["hours"] == 2

    def test_unknown_plate_is_not_found(self, client):
        assert client.put(f"{BASE}/exits/NOP000").status_code == 404
        assert client.get(f"{BASE}/cost/NOP000").status_code == 404

    def test_second_exit_is_not_found(self, client):
        enter(client, "ABC123")
        client.put(f"{BASE}/exits/ABC123")
        assert client.put(f"{BASE}/exits/ABC123").status_code == 404


class TestListings:
    def test_empty_lists(self, client):
        assert client.get(f"{BASE}/active").json() == []
        assert client.get(f"{BASE}/history").json() == []

    def test_multiple_vehicles(self, client):
        for plate, cls in [("AAA111", "CAR"), ("BBB222", "MOTORCYCLE"), ("CCC3333", "CAR")]:
            assert enter(client, plate, cls).status_code == 201
        client.put(f"{BASE}/exits/BBB222")

        active = sorted(v["plate"] for v in client.get(f"{BASE}/active").json())
        history = sorted(v["plate"] for v in client.get(f"{BASE}/history").json())
        assert active == ["AAA111", "CCC3333"]
        assert history == ["AAA111", "BBB222", "CCC3333"]


class TestHealth:
    def test_health_ok(self, client):
        body = client.get("/api/v1/health").json()
        assert body["status"] == "ok"
        assert body["database"] == "ok"


def failing_service(exc):
    service = MagicMock(spec=ParkingLedgerService)
    service.exit_with_cost.side_effect = exc
    service.list_active.side_effect = exc
    return lambda: service


class TestErrorHandlers:
    def test_already_exited_is_conflict(self, client):
        app.dependency_overrides[get_parking_service] = failing_service(
            AlreadyExited("Vehicle ABC123 has already left the lot", plate="ABC123")
        )
        resp = client.put(f"{BASE}/exits/ABC123")

        assert resp.status_code == 409
        body = resp.json()
        assert body["code"] == 409
        assert body["detail"] == "Vehicle ABC123 has already left the lot"
        assert body["path"] == f"{BASE}/exits/ABC123"

    def test_unexpected_error_is_internal_server_error(self, client):
        app.dependency_overrides[get_parking_service] = failing_service(RuntimeError("disk on fire"))
        resp = TestClient(app, raise_server_exceptions=False).get(f"{BASE}/active")

        assert resp.status_code == 500
        assert resp.json() == {"detail": "Internal server error"}


class TestApiKey:
    def setup_method(self):
        self.secured = TestClient(APIKeyMiddleware(app, api_key="secret"))

    def test_missing_key_rejected(self, client):
        resp = self.secured.get(f"{BASE}/active")
        assert resp.status_code == 401
        assert resp.json() == {"detail": "Invalid or missing API key"}

    def test_wrong_key_rejected(self, client):
        assert self.secured.get(f"{BASE}/active", headers={"X-API-Key": "nope"}).status_code == 401

    def test_key_in_header_or_query(self, client):
        assert self.secured.get(f"{BASE}/active", headers={"X-API-Key": "secret"}).status_code == 200
        assert self.secured.get(f"{BASE}/active", params={"api_key": "secret"}).status_code == 200

    def test_health_is_open(self, client):
        resp = self.secured.get("/api/v1/health")
        assert resp.status_code == 200
        assert resp.json()["database"] == "ok"
