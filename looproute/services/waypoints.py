# looproute/services/waypoints.py

import math
import random
from typing import List, Optional

from looproute.core.logger import logger
from looproute.models.routing import Coordinate

# Rough conversion; the equirectangular approximation is fine at city scale.
KM_PER_DEGREE = 111.0


def offset_coordinate(start: Coordinate, dlat: float, dlon: float) -> Coordinate:
    """
    Shift `start` by (dlat, dlon) degrees, clamping latitude to the poles and
    wrapping longitude around the antimeridian.
    """
    lat = max(-90.0, min(90.0, start.lat + dlat))
    lon = start.lon + dlon
    if lon > 180.0 or lon < -180.0:
        lon = (lon + 180.0) % 360.0 - 180.0
    return Coordinate(lat=lat, lon=lon)


class WaypointSynthesizer:
    """
    Builds a ring of routing hints around a start point for a loop of a
    given length.

    Variant `k` gets `3 + k` waypoints on a ring rotated by k * pi/6, each
    pulled in by an independent random factor in [0.5, 1.0) so candidates
    are not perfect circles.
    """

    BASE_WAYPOINTS = 3
    # A loop's bounding radius is roughly a quarter of its length.
    RADIUS_FRACTION = 0.25
    VARIANT_ROTATION = math.pi / 6
    MIN_RADIAL_SCALE = 0.5

    def generate(
        self,
        start: Coordinate,
        target_distance_km: float,
        variant_index: int,
        rng: Optional[random.Random] = None,
    ) -> List[Coordinate]:
        rng = rng or random.Random()

        num_waypoints = self.BASE_WAYPOINTS + variant_index
        radius_degrees = target_distance_km * self.RADIUS_FRACTION / KM_PER_DEGREE
        rotation = variant_index * self.VARIANT_ROTATION

        waypoints: List[Coordinate] = []
        for i in range(num_waypoints):
            angle = 2 * math.pi * i / num_waypoints + rotation
            radial_scale = self.MIN_RADIAL_SCALE + rng.random() * (1.0 - self.MIN_RADIAL_SCALE)
            radius = radius_degrees * radial_scale
            waypoints.append(
                offset_coordinate(start, radius * math.cos(angle), radius * math.sin(angle))
            )

        logger.debug(
            "Variant {} -> {} waypoints on a ring of {:.5f} deg around ({:.6f}, {:.6f})",
            variant_index,
            num_waypoints,
            radius_degrees,
            start.lat,
            start.lon,
        )
        return waypoints
