# looproute/services/mock_routes.py

import math
from typing import List, Tuple

from looproute.core.logger import logger
from looproute.models.routing import Coordinate, Route, RouteDifficulty, RouteRequest
from looproute.services.route_builder import new_route_id, round_half_up
from looproute.services.waypoints import KM_PER_DEGREE, offset_coordinate

MOCK_LABELS: Tuple[str, str, str] = ("Scenic Park Loop", "Urban Explorer", "Quiet Streets")
MOCK_DESCRIPTION = "A mock route generated while the directions provider was unavailable."

# Difficulty is assigned by position, not by the distance/elevation thresholds
# used for provider routes.
_POSITIONAL_DIFFICULTY = (RouteDifficulty.EASY, RouteDifficulty.MODERATE)


def mock_label(variant_index: int) -> str:
    return MOCK_LABELS[variant_index % len(MOCK_LABELS)]


class MockRouteGenerator:
    """
    Synthetic loop routes for when the directions provider is unavailable.

    The shape is a tri-lobed ring around the start point; its size follows
    the requested distance. Output is fully deterministic for a given request
    and variant.
    """

    PACE_MIN_PER_KM = 8.0
    POINTS_PER_KM = 20
    MIN_POINTS = 3
    BASE_ELEVATION_M = 50
    ELEVATION_STEP_M = 30
    VARIANT_ROTATION = math.pi / 3

    def generate_mock_route(self, request: RouteRequest, variant_index: int, label: str) -> Route:
        distance_km = request.target_distance_km
        start = request.start_location

        if variant_index < len(_POSITIONAL_DIFFICULTY):
            difficulty = _POSITIONAL_DIFFICULTY[variant_index]
        else:
            difficulty = RouteDifficulty.HARD

        return Route(
            id=new_route_id(variant_index, prefix="mock_route"),
            distance_km=distance_km,
            duration_min=max(1, round_half_up(distance_km * self.PACE_MIN_PER_KM)),
            elevation_m=self.BASE_ELEVATION_M + self.ELEVATION_STEP_M * variant_index,
            difficulty=difficulty,
            coordinates=self.mock_coordinates(start, distance_km, variant_index),
            start_point=start,
            end_point=start,
            is_loop=True,
            label=label,
            description=MOCK_DESCRIPTION,
        )

    def mock_coordinates(
        self, start: Coordinate, distance_km: float, variant_index: int
    ) -> List[Coordinate]:
        num_points = max(self.MIN_POINTS, round_half_up(distance_km * self.POINTS_PER_KM))
        ring_radius = distance_km / KM_PER_DEGREE / 4.0
        rotation = variant_index * self.VARIANT_ROTATION

        coordinates: List[Coordinate] = []
        for i in range(num_points + 1):
            angle = 2 * math.pi * i / num_points + rotation
            radius = ring_radius * (0.8 + 0.4 * math.sin(3 * angle))
            coordinates.append(
                offset_coordinate(start, radius * math.cos(angle), radius * math.sin(angle))
            )
        return coordinates

    def generate_batch(self, request: RouteRequest) -> List[Route]:
        routes = [
            self.generate_mock_route(request, index, label)
            for index, label in enumerate(MOCK_LABELS)
        ]
        logger.info(
            "Generated {} mock routes for {:.2f} km around ({:.6f}, {:.6f})",
            len(routes),
            request.target_distance_km,
            request.start_location.lat,
            request.start_location.lon,
        )
        return routes
