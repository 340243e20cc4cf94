import pytest
from fastapi.testclient import TestClient

from evsite.main import create_app
from evsite.models.domain import SnapResult
from evsite.services.providers.elevation import ElevationPoint
from evsite.services.providers.osrm_client import RouteResponse


def _unsnapped(lat, lng, max_radius_m):
    return SnapResult(lat=lat, lng=lng, snapped=False)


@pytest.fixture
def api_client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    from evsite.services.energy import service as energy_service
    from evsite.services.siting import service as siting_service

    # Keep every request offline.
    monkeypatch.setattr(siting_service, "road_snapper", _unsnapped)
    monkeypatch.setattr(
        energy_service,
        "fetch_route",
        lambda start, end: RouteResponse(
            coordinates=[start, end], distance=None, duration=None, success=False, error="offline"
        ),
    )
    monkeypatch.setattr(
        energy_service,
        "fetch_elevations",
        lambda coords: [ElevationPoint(c.lat, c.lng, 185.0, True) for c in coords],
    )
    return TestClient(create_app())


def test_health(api_client: TestClient):
    response = api_client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_campus_dataset(api_client: TestClient):
    payload = api_client.get("/api/campus").json()

    assert len(payload["locations"]) == 7
    assert [station["id"] for station in payload["stations"]] == ["cs-001"]
    assert len(payload["routes"]) == 4
    assert payload["bounds"] == [15.3865, 73.875, 15.394, 73.885]


def test_energy_consumption(api_client: TestClient):
    response = api_client.post(
        "/api/energy/consumption",
        json={"distance_m": 1000, "elevation_gain_m": 10, "elevation_loss_m": 5},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["distance_km"] == 1
    assert payload["total_energy"] == pytest.approx(0.10496, abs=1e-4)


def test_charging_time(api_client: TestClient):
    response = api_client.post("/api/energy/charging-time", json={"current_battery": 20})

    assert response.status_code == 200
    plan = response.json()
    assert (plan["hours"], plan["minutes"], plan["total_minutes"]) == (4, 52, 292)
    assert plan["energy_needed"] == pytest.approx(36.0)


def test_charging_time_rejects_target_below_current(api_client: TestClient):
    response = api_client.post(
        "/api/energy/charging-time", json={"current_battery": 90, "target_battery": 50}
    )

    assert response.status_code == 400


def test_remaining_battery(api_client: TestClient):
    response = api_client.post(
        "/api/energy/remaining-battery", json={"current_battery": 50, "energy_consumed_kwh": 6}
    )

    assert response.json()["remaining_battery"] == pytest.approx(40)


def test_charging_intervals_reject_negative_energy(api_client: TestClient):
    response = api_client.post("/api/energy/charging-intervals", json={"trip_energies_kwh": [5, -1]})

    assert response.status_code == 400


def test_trip_report(api_client: TestClient):
    response = api_client.post(
        "/api/energy/trip", json={"start_id": "main-gate", "end_id": "library", "battery_level": 60}
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["route_type"] == "straight"
    assert payload["route_error"] == "offline"
    assert payload["elevation_estimated"] is True
    assert payload["charging"]["needed"] is False


def test_trip_unknown_location(api_client: TestClient):
    response = api_client.post(
        "/api/energy/trip", json={"start_id": "nowhere", "end_id": "library", "battery_level": 60}
    )

    assert response.status_code == 404


def test_optimize_single_station_defaults(api_client: TestClient):
    response = api_client.post("/api/siting/optimize", json={})

    assert response.status_code == 200
    payload = response.json()
    assert payload["num_stations"] == 1
    assert payload["metadata"]["method"] == "weighted_centroid"
    assert payload["metadata"]["include_midpoints"] is True
    assert payload["metadata"]["route_count"] == 4
    location = payload["locations"][0]
    assert location["snapped"] is False
    assert location["within_campus"] is True
    assert location["metrics"]["improvement_vs_existing"] is not None


def test_optimize_multiple_stations(api_client: TestClient):
    response = api_client.post(
        "/api/siting/optimize", json={"num_stations": 2, "seeding": "random", "random_state": 3}
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["metadata"]["method"] == "weighted_kmeans"
    assert payload["metadata"]["random_state"] == 3
    assert 1 <= len(payload["locations"]) <= 2
    assert payload["locations"][0]["id"] == "optimal-station-1"
    assigned = [route for location in payload["locations"] for route in location["assigned_routes"]]
    assert set(assigned) == {"route-1", "route-2", "route-3", "route-4"}


def test_optimize_rejects_unknown_location(api_client: TestClient):
    response = api_client.post(
        "/api/siting/optimize", json={"routes": [{"start_id": "main-gate", "end_id": "moon"}]}
    )

    assert response.status_code == 404


def test_optimize_validates_station_count(api_client: TestClient):
    response = api_client.post("/api/siting/optimize", json={"num_stations": 0})

    assert response.status_code == 422


def test_optimize_with_custom_routes(api_client: TestClient):
    response = api_client.post(
        "/api/siting/optimize",
        json={
            "routes": [{"start_id": "hostels", "end_id": "admin-block", "frequency": 6}],
            "existing_station_ids": [],
        },
    )

    location = response.json()["locations"][0]
    assert location["metrics"]["route_metrics"][0]["route_id"] == "route-1"
    assert location["metrics"]["improvement_vs_existing"] is None


def test_metrics_endpoint(api_client: TestClient):
    response = api_client.post(
        "/api/siting/metrics",
        json={"location": {"lat": 15.3915, "lng": 73.88}, "existing_station_ids": ["cs-001"]},
    )

    assert response.status_code == 200
    payload = response.json()
    assert len(payload["route_metrics"]) == 4
    assert payload["improvement_vs_existing"] == pytest.approx(0)


def test_compare_endpoint_ranks_scenarios(api_client: TestClient):
    response = api_client.post(
        "/api/siting/compare",
        json={
            "scenarios": [
                {"id": "remote", "name": "Remote lot", "lat": 15.30, "lng": 73.80},
                {"id": "current", "name": "Main station", "lat": 15.3915, "lng": 73.88},
            ]
        },
    )

    assert response.status_code == 200
    ranked = response.json()
    assert [item["scenario"]["id"] for item in ranked] == ["current", "remote"]


def test_suggest_improvement_defaults_to_campus_station(api_client: TestClient):
    response = api_client.post("/api/siting/suggest-improvement", json={})

    assert response.status_code == 200
    payload = response.json()
    assert payload["improvement_distance"] >= 0
    assert payload["should_relocate"] == (payload["improvement_distance"] > 100)
    assert payload["optimal_location"]["method"] == "weighted_centroid"


def test_osrm_health_reports_failure_instead_of_erroring(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from evsite.services.providers import osrm_client

    def broken_check():
        raise RuntimeError("unexpected payload")

    monkeypatch.setattr(osrm_client, "check_health", broken_check)

    response = api_client.get("/api/health/osrm")

    assert response.status_code == 200
    assert response.json() == {"service": "osrm", "healthy": False, "error": "unexpected payload"}
