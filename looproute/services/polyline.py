# looproute/services/polyline.py
"""
Encoded polyline format (signed deltas, 5-bit chunks, ASCII offset 63).

Thin wrapper around the `polyline` package that reports bad input as
MalformedPolyline and returns Coordinate values. Precision is 5 decimals.
"""
from typing import Iterable, List

import polyline
from pydantic import ValidationError

from looproute.core.errors import MalformedPolyline
from looproute.models.routing import Coordinate

PRECISION = 5

_MIN_CHAR = "?"
_MAX_CHAR = "~"


def decode_polyline(encoded: str) -> List[Coordinate]:
    """
    Decode an encoded polyline into an ordered list of coordinates.

    An empty string yields an empty list. Raises MalformedPolyline when the
    string is truncated, contains a character outside '?'..'~', or decodes
    to an out-of-range coordinate.
    """
    for position, char in enumerate(encoded):
        if not _MIN_CHAR <= char <= _MAX_CHAR:
            raise MalformedPolyline(
                f"invalid polyline character {char!r} at position {position}"
            )

    try:
        pairs = polyline.decode(encoded, PRECISION)
    except IndexError as exc:
        raise MalformedPolyline("polyline ends inside a value") from exc

    try:
        return [Coordinate(lat=lat, lon=lon) for lat, lon in pairs]
    except ValidationError as exc:
        raise MalformedPolyline("polyline decodes to an out-of-range coordinate") from exc


def encode_polyline(points: Iterable[Coordinate]) -> str:
    """
    Encode coordinates into the polyline format (inverse of decode_polyline
    for coordinates already rounded to 5 decimals).
    """
    return polyline.encode([(point.lat, point.lon) for point in points], PRECISION)
