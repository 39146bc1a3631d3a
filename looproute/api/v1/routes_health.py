# looproute/api/v1/routes_health.py
from fastapi import APIRouter

from looproute.api.v1.routes_routing import generation_service
from looproute.core.config import settings

router = APIRouter(
    prefix="/health",
    tags=["health"],
)


@router.get("/", summary="Health check")
async def health_check():
    """
    Simple health check endpoint to verify that the API is running.
    """
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "directions_provider": generation_service.directions.name,
    }
