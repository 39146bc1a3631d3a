# looproute/services/route_filter.py

from typing import Callable, Dict, List, Sequence

from looproute.models.routing import Route, RouteFilter


def scenic_score(route: Route) -> float:
    """
    Placeholder scenic heuristic: climbing and length both count a little.
    """
    return route.elevation_m * 0.1 + route.distance_km * 0.2


_SORT_KEYS: Dict[RouteFilter, Callable[[Route], float]] = {
    RouteFilter.SHORTEST: lambda r: r.distance_km,
    RouteFilter.FASTEST: lambda r: r.duration_min,
    RouteFilter.FLATTEST: lambda r: r.elevation_m,
    # Negated so the sort stays ascending and ties keep input order.
    RouteFilter.MOST_SCENIC: lambda r: -scenic_score(r),
}


def filter_routes(routes: Sequence[Route], criterion: RouteFilter) -> List[Route]:
    """
    Reorder `routes` by `criterion`. Same routes, new order; ties keep
    their input order, so applying the same criterion twice is a no-op.
    """
    return sorted(routes, key=_SORT_KEYS[RouteFilter(criterion)])
