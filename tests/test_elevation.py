# tests/test_elevation.py
import asyncio
import json

import httpx

from looproute.core.config import Settings
from looproute.models.routing import Coordinate
from looproute.services.elevation import (
    OpenElevationProvider,
    build_elevation_provider,
    elevation_gain,
    sample_evenly,
)

PATH = [Coordinate(lat=45.0 + i * 0.001, lon=9.0) for i in range(10)]


def run_lookup(handler, coordinates=PATH, max_samples=64):
    async def _call():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            provider = OpenElevationProvider(
                "https://elevation.test/lookup", max_samples=max_samples, client=client
            )
            return await provider.elevation_gain(coordinates)

    return asyncio.run(_call())


def test_elevation_gain_sums_climbs_only():
    assert elevation_gain([10, 15, 12, 20, 20, 5]) == 13
    assert elevation_gain([]) == 0
    assert elevation_gain([100.0]) == 0


def test_sample_evenly_keeps_endpoints():
    sampled = sample_evenly(PATH, 4)
    assert len(sampled) == 4
    assert sampled[0] == PATH[0]
    assert sampled[-1] == PATH[-1]
    assert sample_evenly(PATH, 64) == PATH


def test_lookup_returns_gain():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        count = len(body["locations"])
        return httpx.Response(
            200,
            json={"results": [{"elevation": 100.0 + (i % 2) * 5} for i in range(count)]},
        )

    # 10 samples alternating 100/105: five climbs of 5 m.
    assert run_lookup(handler) == 25


def test_lookup_sends_sampled_points():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        seen["count"] = len(body["locations"])
        return httpx.Response(200, json={"results": [{"elevation": 1.0}] * seen["count"]})

    assert run_lookup(handler, max_samples=5) == 0
    assert seen["count"] == 5


def test_lookup_failure_returns_none():
    assert run_lookup(lambda request: httpx.Response(500)) is None
    assert run_lookup(lambda request: httpx.Response(200, json={"unexpected": True})) is None


def test_empty_path_returns_none():
    assert run_lookup(lambda request: httpx.Response(500), coordinates=[]) is None


def test_provider_disabled_without_url():
    assert build_elevation_provider(Settings(ELEVATION_URL="")) is None
    assert build_elevation_provider(Settings(ELEVATION_URL="https://e.test")) is not None
