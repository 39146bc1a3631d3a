# looproute/api/v1/routes_routing.py
from typing import List

from fastapi import APIRouter, Response, status

from looproute.core.config import settings
from looproute.models.routing import (
    FilterRoutesRequest,
    Route,
    RouteGenerationResponse,
    RouteRequest,
)
from looproute.services.annotation import RuleBasedRouteAnnotator
from looproute.services.directions import build_directions_provider
from looproute.services.elevation import build_elevation_provider
from looproute.services.route_filter import filter_routes
from looproute.services.route_generation import RouteGenerationService
from looproute.services.route_store import FavoritesService, InMemoryRouteStore

router = APIRouter(
    prefix="/routes",
    tags=["routing"],
)

# Single shared instances
route_store = InMemoryRouteStore()
generation_service = RouteGenerationService(
    directions=build_directions_provider(settings),
    elevation=build_elevation_provider(settings),
    annotator=RuleBasedRouteAnnotator(),
    store=route_store,
    max_routes=settings.MAX_ROUTES,
)
favorites_service = FavoritesService(route_store)


@router.post(
    "/generate",
    response_model=RouteGenerationResponse,
    summary="Generate up to three loop routes around a start point",
)
async def generate_routes(request: RouteRequest) -> RouteGenerationResponse:
    """
    Generate loop candidates for the requested distance.

    - Uses the configured directions provider when available.
    - Falls back to synthetic routes per candidate otherwise.
    """
    return await generation_service.generate_routes(request)


@router.post(
    "/filter",
    response_model=List[Route],
    summary="Reorder routes by a criterion",
)
async def filter_route_list(body: FilterRoutesRequest) -> List[Route]:
    return filter_routes(body.routes, body.criterion)


@router.get(
    "/favorites",
    response_model=List[Route],
    summary="List favourite routes",
)
async def list_favorites() -> List[Route]:
    return favorites_service.favorites()


@router.post(
    "/{route_id}/favorite",
    response_model=Route,
    summary="Toggle the favourite flag of a generated route",
)
async def toggle_favorite(route_id: str) -> Route:
    return favorites_service.toggle_favorite(route_id)


@router.delete(
    "/{route_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a stored route",
)
async def delete_route(route_id: str) -> Response:
    favorites_service.delete(route_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
