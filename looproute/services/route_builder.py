# looproute/services/route_builder.py

import math
import random
import time
import uuid
from typing import Optional, Sequence

from looproute.core.errors import EmptyPath
from looproute.core.logger import logger
from looproute.models.routing import Coordinate, Route, RouteDifficulty, RouteRequest

# Difficulty policy constants (not configurable).
EASY_MAX_DISTANCE_KM = 2.0
EASY_MAX_ELEVATION_M = 50
HARD_MIN_DISTANCE_KM = 7.0
HARD_MIN_ELEVATION_M = 150


def classify_difficulty(distance_km: float, elevation_m: int) -> RouteDifficulty:
    """
    Easy below 2 km and 50 m of climbing, Hard above 7 km or 150 m,
    Moderate otherwise.
    """
    if distance_km < EASY_MAX_DISTANCE_KM and elevation_m < EASY_MAX_ELEVATION_M:
        return RouteDifficulty.EASY
    if distance_km > HARD_MIN_DISTANCE_KM or elevation_m > HARD_MIN_ELEVATION_M:
        return RouteDifficulty.HARD
    return RouteDifficulty.MODERATE


def new_route_id(variant_index: int, prefix: str = "route") -> str:
    """
    Identifier unique across batches and concurrent generation:
    millisecond timestamp, variant and a random suffix.
    """
    return f"{prefix}_{int(time.time() * 1000)}_{variant_index}_{uuid.uuid4().hex[:8]}"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class RouteBuilder:
    """
    Turns a directions-provider path into a fully populated loop Route.
    """

    # Heuristic elevation when no elevation collaborator answered:
    # 20 m + 30 m per variant + jitter in [0, 50).
    HEURISTIC_BASE_ELEVATION_M = 20
    HEURISTIC_ELEVATION_STEP_M = 30
    HEURISTIC_ELEVATION_JITTER_M = 50

    def from_directions_path(
        self,
        path_coordinates: Sequence[Coordinate],
        leg_distances_m: Sequence[float],
        leg_durations_s: Sequence[float],
        request: RouteRequest,
        variant_index: int,
        elevation_m: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> Route:
        if not path_coordinates:
            raise EmptyPath(f"variant {variant_index}: directions path has no coordinates")

        distance_km = sum(leg_distances_m) / 1000.0
        if distance_km <= 0:
            raise EmptyPath(f"variant {variant_index}: directions path has zero length")

        # A sub-30 s route still takes a minute.
        duration_min = max(1, round_half_up(sum(leg_durations_s) / 60.0))

        if elevation_m is None:
            elevation_m = self.heuristic_elevation(variant_index, rng)

        difficulty = classify_difficulty(distance_km, elevation_m)
        start = request.start_location

        route = Route(
            id=new_route_id(variant_index),
            distance_km=distance_km,
            duration_min=duration_min,
            elevation_m=elevation_m,
            difficulty=difficulty,
            coordinates=list(path_coordinates),
            start_point=start,
            end_point=start,
            is_loop=True,
        )

        logger.info(
            "Built route {} (variant {}): {:.2f} km, {} min, {} m, {}",
            route.id,
            variant_index,
            distance_km,
            duration_min,
            elevation_m,
            difficulty.value,
        )
        return route

    def heuristic_elevation(
        self, variant_index: int, rng: Optional[random.Random] = None
    ) -> int:
        rng = rng or random.Random()
        return (
            self.HEURISTIC_BASE_ELEVATION_M
            + self.HEURISTIC_ELEVATION_STEP_M * variant_index
            + rng.randrange(self.HEURISTIC_ELEVATION_JITTER_M)
        )
