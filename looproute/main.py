# looproute/main.py

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from looproute.api.v1 import routes_health, routes_routing
from looproute.core.config import settings
from looproute.core.errors import InvalidDistance, RouteNotFound, UnsupportedRouteType
from looproute.core.logger import logger


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Generates closed-loop jogging routes for a start point and target distance.",
    )

    # Routers
    app.include_router(routes_health.router, prefix="", tags=["health"])
    app.include_router(routes_routing.router, prefix="", tags=["routing"])

    @app.exception_handler(InvalidDistance)
    @app.exception_handler(UnsupportedRouteType)
    async def bad_request_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.info("Rejected {} {}: {}", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )

    @app.exception_handler(RouteNotFound)
    async def not_found_handler(request: Request, exc: RouteNotFound) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc)},
        )

    return app


app = create_app()
