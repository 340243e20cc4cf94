import httpx
import pytest

from evsite.models.domain import Coordinate
from evsite.services.providers.osrm_client import (
    OSRMClient,
    get_route,
    simplify_route,
    snap_to_nearest_road,
)


def _client(handler) -> OSRMClient:
    return OSRMClient(
        base_url="http://osrm.test/",
        profile="driving",
        max_retries=0,
        backoff_seconds=0,
        transport=httpx.MockTransport(handler),
    )


def _nearest_payload(distance: float, name: str = "Ring Road") -> dict:
    return {
        "code": "Ok",
        "waypoints": [{"location": [73.8801, 15.3922], "distance": distance, "name": name}],
    }


def test_nearest_request_shape():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_nearest_payload(12.0))

    snap = snap_to_nearest_road(15.392, 73.880, 1000, client=_client(handler))

    assert seen[0].url.path == "/nearest/v1/driving/73.88,15.392"
    assert seen[0].url.params["number"] == "1"
    assert snap.snapped is True
    assert (snap.lat, snap.lng) == (15.3922, 73.8801)
    assert snap.distance == 12.0
    assert snap.name == "Ring Road"


def test_unnamed_road_gets_placeholder():
    client = _client(lambda request: httpx.Response(200, json=_nearest_payload(5.0, name="")))

    assert snap_to_nearest_road(15.392, 73.880, 1000, client=client).name == "Unnamed road"


def test_road_beyond_radius_is_rejected():
    client = _client(lambda request: httpx.Response(200, json=_nearest_payload(1500.0)))

    snap = snap_to_nearest_road(15.392, 73.880, 1000, client=client)

    assert snap.snapped is False
    assert (snap.lat, snap.lng) == (15.392, 73.880)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="boom"),
        httpx.Response(400, text="bad request"),
        httpx.Response(200, json={"code": "NoSegment", "message": "No road nearby"}),
        httpx.Response(200, json={"code": "Ok", "waypoints": []}),
        httpx.Response(200, json={"code": "Ok", "waypoints": [{"distance": None}]}),
        httpx.Response(200, json={"code": "Ok", "waypoints": [{"distance": 4.0, "location": None}]}),
        httpx.Response(200, json=[1, 2]),
    ],
)
def test_snap_failures_return_original_point(response):
    client = _client(lambda request: response)

    snap = snap_to_nearest_road(15.392, 73.880, 1000, client=client)

    assert snap.snapped is False
    assert (snap.lat, snap.lng) == (15.392, 73.880)


def test_network_errors_are_retried(monkeypatch):
    monkeypatch.setattr("evsite.services.providers.osrm_client.time.sleep", lambda seconds: None)
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        if len(attempts) < 3:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json=_nearest_payload(3.0))

    client = OSRMClient(
        base_url="http://osrm.test",
        max_retries=2,
        backoff_seconds=0.5,
        transport=httpx.MockTransport(handler),
    )

    assert client.nearest(15.392, 73.880)["waypoints"]
    assert len(attempts) == 3


def test_connection_error_after_retries_exhausted(monkeypatch):
    monkeypatch.setattr("evsite.services.providers.osrm_client.time.sleep", lambda seconds: None)

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = OSRMClient(base_url="http://osrm.test", max_retries=1, transport=httpx.MockTransport(handler))

    with pytest.raises(ConnectionError):
        client.nearest(15.392, 73.880)


def test_route_parses_geojson_geometry():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/route/v1/driving/73.8758,15.3874;73.8804,15.3916")
        assert request.url.params["geometries"] == "geojson"
        return httpx.Response(
            200,
            json={
                "code": "Ok",
                "routes": [
                    {
                        "distance": 812.4,
                        "duration": 95.0,
                        "geometry": {"coordinates": [[73.8758, 15.3874], [73.878, 15.389], [73.8804, 15.3916]]},
                    }
                ],
            },
        )

    route = get_route(Coordinate(15.3874, 73.8758), Coordinate(15.3916, 73.8804), client=_client(handler))

    assert route.success is True
    assert route.distance == 812.4
    assert route.coordinates[1] == Coordinate(15.389, 73.878)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503, text="unavailable"),
        httpx.Response(200, json={"code": "Ok", "routes": []}),
        httpx.Response(200, json={"code": "Ok", "routes": [{"distance": 10.0}]}),
        httpx.Response(200, json={"code": "Ok", "routes": [{"distance": 10.0, "duration": 2.0, "geometry": None}]}),
    ],
)
def test_route_failure_falls_back_to_straight_line(response):
    start, end = Coordinate(15.3874, 73.8758), Coordinate(15.3916, 73.8804)
    client = _client(lambda request: response)

    route = get_route(start, end, client=client)

    assert route.success is False
    assert route.coordinates == [start, end]
    assert route.distance is None
    assert route.error == "Failed to fetch route. Using straight line."


def test_simplify_route_keeps_short_paths():
    path = [Coordinate(15.0 + i * 0.001, 73.0) for i in range(10)]

    assert simplify_route(path, 50) == path


def test_simplify_route_samples_long_paths_and_keeps_last_point():
    path = [Coordinate(15.0 + i * 0.0001, 73.0) for i in range(120)]

    simplified = simplify_route(path, 50)

    # Stride of 2 gives 60 samples, then the final vertex.
    assert len(simplified) == 61
    assert simplified[0] == path[0]
    assert simplified[-1] == path[-1]
