# looproute/core/errors.py


class RouteEngineError(Exception):
    """
    Base class for every error raised by the route generation engine.
    """


class InvalidDistance(RouteEngineError):
    """Target distance outside (0, 50] km. User-correctable."""


class UnsupportedRouteType(RouteEngineError):
    """Only loop routes can be generated."""


class MalformedPolyline(RouteEngineError):
    """Encoded polyline is truncated or contains an invalid character."""


class EmptyPath(RouteEngineError):
    """A Route cannot be built from an empty (or zero-length) geometry."""


class ProviderUnavailable(RouteEngineError):
    """
    Transport error or non-OK status from the directions provider.

    Always recovered from by falling back to a mock route.
    """


class RouteNotFound(RouteEngineError):
    """No stored route with the given identifier."""

    def __init__(self, route_id: str) -> None:
        super().__init__(f"Route {route_id!r} not found")
        self.route_id = route_id
