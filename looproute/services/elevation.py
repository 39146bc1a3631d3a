# looproute/services/elevation.py

from typing import Iterable, List, Optional, Protocol, Sequence

import httpx

from looproute.core.config import Settings
from looproute.core.logger import logger
from looproute.models.routing import Coordinate


class ElevationProvider(Protocol):
    """
    Optional collaborator returning the metres climbed along a path, or
    None when it cannot tell.
    """

    async def elevation_gain(self, coordinates: Sequence[Coordinate]) -> Optional[int]:
        ...


def elevation_gain(samples: Iterable[float]) -> int:
    """
    Total ascent of an elevation profile: the sum of positive steps.
    """
    total = 0.0
    previous: Optional[float] = None
    for sample in samples:
        if previous is not None and sample > previous:
            total += sample - previous
        previous = sample
    return int(round(total))


def sample_evenly(coordinates: Sequence[Coordinate], max_samples: int) -> List[Coordinate]:
    """
    Keep at most `max_samples` points, evenly spaced, always including the
    first and last point.
    """
    if max_samples < 2 or len(coordinates) <= max_samples:
        return list(coordinates)
    step = (len(coordinates) - 1) / (max_samples - 1)
    return [coordinates[round(i * step)] for i in range(max_samples)]


class OpenElevationProvider:
    """
    Elevation lookup against an Open-Elevation compatible endpoint
    (POST {"locations": [{"latitude": .., "longitude": ..}, ...]}).
    """

    def __init__(
        self,
        url: str,
        timeout_s: float = 10.0,
        max_samples: int = 64,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = url
        self.timeout_s = timeout_s
        self.max_samples = max_samples
        self._client = client

    async def elevation_gain(self, coordinates: Sequence[Coordinate]) -> Optional[int]:
        if not coordinates:
            return None

        points = sample_evenly(coordinates, self.max_samples)
        body = {"locations": [{"latitude": p.lat, "longitude": p.lon} for p in points]}

        try:
            if self._client is not None:
                response = await self._client.post(self.url, json=body, timeout=self.timeout_s)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                    response = await client.post(self.url, json=body)
            response.raise_for_status()
            elevations = [float(r["elevation"]) for r in response.json()["results"]]
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as exc:
            logger.warning("Elevation lookup failed for {} points: {}", len(points), exc)
            return None

        gain = elevation_gain(elevations)
        logger.debug("Elevation gain over {} samples: {} m", len(elevations), gain)
        return gain


def build_elevation_provider(settings: Settings) -> Optional[ElevationProvider]:
    if not settings.ELEVATION_URL:
        return None
    return OpenElevationProvider(
        url=settings.ELEVATION_URL,
        timeout_s=settings.ELEVATION_TIMEOUT_S,
        max_samples=settings.ELEVATION_SAMPLE_SIZE,
    )
