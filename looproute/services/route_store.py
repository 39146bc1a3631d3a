# looproute/services/route_store.py

from typing import Dict, List, Optional, Protocol

from looproute.core.errors import RouteNotFound
from looproute.core.logger import logger
from looproute.models.routing import Route


class RouteStore(Protocol):
    """
    Storage collaborator. Routes are values: saving a route with a known id
    replaces the previous value.
    """

    def save(self, route: Route) -> None:
        ...

    def get(self, route_id: str) -> Optional[Route]:
        ...

    def delete(self, route_id: str) -> bool:
        ...

    def favorites(self) -> List[Route]:
        ...


class InMemoryRouteStore:
    """
    Process-local store keyed by route id.
    """

    def __init__(self) -> None:
        self._routes: Dict[str, Route] = {}

    def save(self, route: Route) -> None:
        self._routes[route.id] = route

    def get(self, route_id: str) -> Optional[Route]:
        return self._routes.get(route_id)

    def delete(self, route_id: str) -> bool:
        return self._routes.pop(route_id, None) is not None

    def favorites(self) -> List[Route]:
        return [route for route in self._routes.values() if route.is_favorite]


class FavoritesService:
    """
    Favourite toggling as an explicit update: read, copy with the flag
    flipped, save the new value, return it.
    """

    def __init__(self, store: RouteStore) -> None:
        self.store = store

    def toggle_favorite(self, route_id: str) -> Route:
        route = self.store.get(route_id)
        if route is None:
            raise RouteNotFound(route_id)

        updated = route.with_favorite(not route.is_favorite)
        self.store.save(updated)
        logger.info("Route {} favorite -> {}", route_id, updated.is_favorite)
        return updated

    def favorites(self) -> List[Route]:
        return self.store.favorites()

    def delete(self, route_id: str) -> None:
        if not self.store.delete(route_id):
            raise RouteNotFound(route_id)
        logger.info("Deleted route {}", route_id)
