# tests/test_directions.py
import asyncio

import httpx
import pytest

from looproute.core.config import Settings
from looproute.core.errors import MalformedPolyline, ProviderUnavailable
from looproute.models.routing import Coordinate
from looproute.services.directions import (
    GoogleDirectionsProvider,
    OfflineDirectionsProvider,
    build_directions_provider,
)

START = Coordinate(lat=38.5, lon=-120.2)
WAYPOINTS = [Coordinate(lat=38.51, lon=-120.2), Coordinate(lat=38.5, lon=-120.19)]

OK_BODY = {
    "status": "OK",
    "routes": [
        {
            "overview_polyline": {"points": "_p~iF~ps|U_ulLnnqC_mqNvxq`@"},
            "legs": [
                {"distance": {"text": "1.2 km", "value": 1200}, "duration": {"text": "15 mins", "value": 900}},
                {"distance": {"text": "0.8 km", "value": 800}, "duration": {"text": "10 mins", "value": 600}},
            ],
        }
    ],
}


def run_provider(handler):
    async def _call():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            provider = GoogleDirectionsProvider("test-key", base_url="https://directions.test/api", client=client)
            return await provider.loop_path(START, WAYPOINTS)

    return asyncio.run(_call())


def test_successful_response_is_parsed():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json=OK_BODY)

    path = run_provider(handler)

    assert path.leg_distances_m == [1200.0, 800.0]
    assert path.leg_durations_s == [900.0, 600.0]
    assert path.coordinates[0] == Coordinate(lat=38.5, lon=-120.2)
    assert len(path.coordinates) == 3

    url = seen["url"]
    assert url.path == "/api/directions/json"
    assert url.params["origin"] == url.params["destination"] == "38.500000,-120.200000"
    assert url.params["mode"] == "walking"
    assert url.params["key"] == "test-key"
    assert url.params["waypoints"].startswith("optimize:true|")
    assert url.params["waypoints"].count("|") == 2


@pytest.mark.parametrize(
    "body",
    [
        {"status": "ZERO_RESULTS", "routes": []},
        {"status": "REQUEST_DENIED", "error_message": "bad key", "routes": []},
        {"status": "OK", "routes": []},
        {"status": "OK", "routes": [{"legs": []}]},
    ],
)
def test_non_ok_responses_are_unavailable(body):
    with pytest.raises(ProviderUnavailable):
        run_provider(lambda request: httpx.Response(200, json=body))


def test_http_error_status_is_unavailable():
    with pytest.raises(ProviderUnavailable):
        run_provider(lambda request: httpx.Response(503, text="unavailable"))


def test_transport_error_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderUnavailable):
        run_provider(handler)


def test_invalid_json_is_unavailable():
    with pytest.raises(ProviderUnavailable):
        run_provider(lambda request: httpx.Response(200, text="<html>oops</html>"))


def test_malformed_polyline_is_not_converted():
    body = {
        "status": "OK",
        "routes": [
            {
                "overview_polyline": {"points": "_p~iF~ps|"},
                "legs": [{"distance": {"value": 1000}, "duration": {"value": 600}}],
            }
        ],
    }
    with pytest.raises(MalformedPolyline):
        run_provider(lambda request: httpx.Response(200, json=body))


def test_offline_provider_is_always_unavailable():
    with pytest.raises(ProviderUnavailable):
        asyncio.run(OfflineDirectionsProvider().loop_path(START, WAYPOINTS))


def test_provider_selection_follows_settings():
    assert build_directions_provider(Settings(DIRECTIONS_API_KEY="")).name == "offline"

    provider = build_directions_provider(
        Settings(DIRECTIONS_API_KEY="abc", DIRECTIONS_MODE="bicycling")
    )
    assert provider.name == "google"
    assert provider.mode == "bicycling"


def test_invalid_url_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.InvalidURL("Invalid URL")

    with pytest.raises(ProviderUnavailable):
        run_provider(handler)
