# tests/conftest.py
import os
import random
import sys

import pytest

# Add the project root directory to sys.path so that "import looproute" works
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from looproute.models.routing import Coordinate, RouteRequest  # noqa: E402


@pytest.fixture
def milan() -> Coordinate:
    return Coordinate(lat=45.4642, lon=9.19)


@pytest.fixture
def loop_request(milan: Coordinate) -> RouteRequest:
    return RouteRequest(start_location=milan, target_distance=5.0)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
