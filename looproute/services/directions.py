# looproute/services/directions.py

from typing import Any, Dict, List, Optional, Protocol, Sequence

import httpx

from looproute.core.config import Settings
from looproute.core.errors import ProviderUnavailable
from looproute.core.logger import logger
from looproute.models.routing import Coordinate, DirectionsPath
from looproute.services.polyline import decode_polyline


class DirectionsProvider(Protocol):
    """
    Anything that can turn a start point and a ring of waypoints into a
    walking loop. Implementations raise ProviderUnavailable for every kind
    of failure (transport, HTTP status, provider status, unusable body).
    """

    name: str

    async def loop_path(
        self, start: Coordinate, waypoints: Sequence[Coordinate]
    ) -> DirectionsPath:
        ...


def _format_point(point: Coordinate) -> str:
    return f"{point.lat:.6f},{point.lon:.6f}"


class GoogleDirectionsProvider:
    """
    Directions backed by the Google Directions JSON API (or anything that
    speaks the same format).
    """

    name = "google"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://maps.googleapis.com/maps/api",
        mode: str = "walking",
        timeout_s: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.mode = mode
        self.timeout_s = timeout_s
        self._client = client

    async def loop_path(
        self, start: Coordinate, waypoints: Sequence[Coordinate]
    ) -> DirectionsPath:
        origin = _format_point(start)
        params = {
            "origin": origin,
            "destination": origin,
            "mode": self.mode,
            "key": self.api_key,
        }
        if waypoints:
            params["waypoints"] = "optimize:true|" + "|".join(
                _format_point(w) for w in waypoints
            )

        payload = await self._get_json(f"{self.base_url}/directions/json", params)
        return self._parse_response(payload)

    async def _get_json(self, url: str, params: Dict[str, str]) -> Dict[str, Any]:
        try:
            if self._client is not None:
                response = await self._client.get(url, params=params, timeout=self.timeout_s)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                    response = await client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ProviderUnavailable(f"directions request failed: {exc}") from exc
        except ValueError as exc:
            raise ProviderUnavailable("directions response is not valid JSON") from exc

    @staticmethod
    def _parse_response(payload: Dict[str, Any]) -> DirectionsPath:
        """
        Extract overview geometry and per-leg metrics from a Directions
        response. MalformedPolyline from the decoder is not converted: a bad
        polyline drops the candidate instead of falling back to a mock.
        """
        status = payload.get("status")
        if status != "OK":
            message = payload.get("error_message") or "no error message"
            raise ProviderUnavailable(f"directions status {status}: {message}")

        routes = payload.get("routes") or []
        if not routes:
            raise ProviderUnavailable("directions response contains no routes")

        route = routes[0]
        try:
            encoded = route["overview_polyline"]["points"]
            legs = route["legs"]
            leg_distances: List[float] = [float(leg["distance"]["value"]) for leg in legs]
            leg_durations: List[float] = [float(leg["duration"]["value"]) for leg in legs]
        except (KeyError, TypeError, ValueError) as exc:
            raise ProviderUnavailable(f"unexpected directions response shape: {exc}") from exc

        return DirectionsPath(
            coordinates=decode_polyline(encoded),
            leg_distances_m=leg_distances,
            leg_durations_s=leg_durations,
        )


class OfflineDirectionsProvider:
    """
    Provider used when no directions backend is configured. Every call is
    unavailable, so every candidate becomes a mock route.
    """

    name = "offline"

    async def loop_path(
        self, start: Coordinate, waypoints: Sequence[Coordinate]
    ) -> DirectionsPath:
        raise ProviderUnavailable("no directions provider configured")


def build_directions_provider(settings: Settings) -> DirectionsProvider:
    if not settings.DIRECTIONS_API_KEY:
        logger.warning("DIRECTIONS_API_KEY not set: routes will be generated offline (mock).")
        return OfflineDirectionsProvider()

    logger.info("Using Google Directions provider at {}", settings.DIRECTIONS_BASE_URL)
    return GoogleDirectionsProvider(
        api_key=settings.DIRECTIONS_API_KEY,
        base_url=settings.DIRECTIONS_BASE_URL,
        mode=settings.DIRECTIONS_MODE,
        timeout_s=settings.DIRECTIONS_TIMEOUT_S,
    )
