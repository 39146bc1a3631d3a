# looproute/services/route_generation.py

import asyncio
import random
import uuid
from time import perf_counter
from typing import List, Optional, Tuple

from looproute.core.errors import (
    EmptyPath,
    MalformedPolyline,
    ProviderUnavailable,
    UnsupportedRouteType,
)
from looproute.core.logger import logger
from looproute.models.routing import Route, RouteGenerationResponse, RouteRequest, RouteType
from looproute.services.annotation import RouteAnnotator, RuleBasedRouteAnnotator, annotate_routes
from looproute.services.directions import DirectionsProvider, OfflineDirectionsProvider
from looproute.services.elevation import ElevationProvider
from looproute.services.mock_routes import MockRouteGenerator, mock_label
from looproute.services.route_builder import RouteBuilder
from looproute.services.route_store import InMemoryRouteStore, RouteStore
from looproute.services.validation import MAX_ROUTES, select_valid_routes, validate_route_request
from looproute.services.waypoints import WaypointSynthesizer

# (route or None when dropped, whether it is a mock)
CandidateResult = Tuple[Optional[Route], bool]


class RouteGenerationService:
    """
    High-level route generation service:
    - validates the request
    - generates up to three loop candidates concurrently
    - falls back to mock routes when the directions provider is unavailable
    - annotates and stores the surviving routes
    """

    CANDIDATE_COUNT = 3

    def __init__(
        self,
        directions: Optional[DirectionsProvider] = None,
        elevation: Optional[ElevationProvider] = None,
        annotator: Optional[RouteAnnotator] = None,
        store: Optional[RouteStore] = None,
        max_routes: int = MAX_ROUTES,
    ) -> None:
        self.directions = directions or OfflineDirectionsProvider()
        self.elevation = elevation
        self.annotator = annotator or RuleBasedRouteAnnotator()
        self.store = store if store is not None else InMemoryRouteStore()
        self.max_routes = max_routes

        self.waypoints = WaypointSynthesizer()
        self.builder = RouteBuilder()
        self.mock_generator = MockRouteGenerator()
        logger.info(
            "RouteGenerationService initialised (directions={}, elevation={}).",
            self.directions.name,
            "on" if self.elevation is not None else "off",
        )

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def generate_routes(self, request: RouteRequest) -> RouteGenerationResponse:
        """
        Main entry point for the /routes/generate endpoint.

        1. Validate distance and route type.
        2. Generate the candidates concurrently (each independently fallible).
        3. Drop empty geometry and cap the result size.
        4. Annotate, store and return.

        An empty route list is a valid outcome, not an error.
        """
        t0 = perf_counter()
        validate_route_request(request)
        if request.route_type != RouteType.LOOP:
            raise UnsupportedRouteType("Only loop routes can be generated")

        request_id = uuid.uuid4().hex
        logger.info(
            "Request {}: {:.2f} {} loop from ({:.6f}, {:.6f})",
            request_id,
            request.target_distance,
            request.units.value,
            request.start_location.lat,
            request.start_location.lon,
        )

        results: List[CandidateResult] = await asyncio.gather(
            *(self._generate_candidate(request, index) for index in range(self.CANDIDATE_COUNT))
        )

        candidates = [route for route, _ in results if route is not None]
        routes = select_valid_routes(candidates, limit=self.max_routes)
        mock_ids = {route.id for route, is_mock in results if route is not None and is_mock}

        routes = await annotate_routes(routes, self.annotator)
        for route in routes:
            self.store.save(route)

        mock_count = sum(1 for route in routes if route.id in mock_ids)
        logger.info(
            "Request {}: {} routes ({} mock) in {:.2f} ms",
            request_id,
            len(routes),
            mock_count,
            (perf_counter() - t0) * 1000.0,
        )

        return RouteGenerationResponse(
            request_id=request_id,
            routes=routes,
            target_distance=request.target_distance,
            units=request.units,
            mock_count=mock_count,
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    async def _generate_candidate(self, request: RouteRequest, variant_index: int) -> CandidateResult:
        """
        Build one candidate. Provider failures become a mock route; bad
        geometry drops the candidate. Nothing here aborts the batch.
        """
        # Independent random source per candidate.
        rng = random.Random()
        start = request.start_location

        waypoints = self.waypoints.generate(
            start, request.target_distance_km, variant_index, rng=rng
        )

        try:
            path = await self.directions.loop_path(start, waypoints)
        except ProviderUnavailable as exc:
            logger.warning("Variant {}: provider unavailable ({}), using mock route", variant_index, exc)
            route = self.mock_generator.generate_mock_route(
                request, variant_index, mock_label(variant_index)
            )
            return route, True
        except MalformedPolyline as exc:
            logger.warning("Variant {}: dropped, malformed polyline ({})", variant_index, exc)
            return None, False

        elevation_m: Optional[int] = None
        if self.elevation is not None:
            try:
                elevation_m = await self.elevation.elevation_gain(path.coordinates)
            except Exception as exc:
                # Elevation is optional; fall back to the heuristic.
                logger.warning("Variant {}: elevation lookup failed ({})", variant_index, exc)

        try:
            route = self.builder.from_directions_path(
                path.coordinates,
                path.leg_distances_m,
                path.leg_durations_s,
                request,
                variant_index,
                elevation_m=elevation_m,
                rng=rng,
            )
        except EmptyPath as exc:
            logger.warning("Variant {}: dropped ({})", variant_index, exc)
            return None, False

        return route, False
