# looproute/services/validation.py

import math
from typing import Iterable, List

from looproute.core.errors import InvalidDistance
from looproute.models.routing import Route, RouteRequest

MAX_DISTANCE_KM = 50.0
MAX_ROUTES = 3


def validate_route_request(request: RouteRequest) -> None:
    """
    Raise InvalidDistance unless the target distance lies in (0, 50] km.

    Mile requests are converted first, so the ceiling is the same in
    either unit.
    """
    distance_km = request.target_distance_km

    # NaN compares false against both bounds.
    if math.isnan(distance_km) or distance_km <= 0:
        raise InvalidDistance("Distance must be greater than 0")

    if distance_km > MAX_DISTANCE_KM:
        raise InvalidDistance(f"Distance cannot exceed {MAX_DISTANCE_KM:g}km")


def select_valid_routes(routes: Iterable[Route], limit: int = MAX_ROUTES) -> List[Route]:
    """
    Drop routes without geometry and keep at most `limit` of the rest.
    """
    return [route for route in routes if route.coordinates][:limit]
