"""
Health check endpoints
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from variant_badges.api.dependencies import ServiceContainer, get_services
from variant_badges.shared.helpers import now_utc

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(services: ServiceContainer = Depends(get_services)):
    """Basic health check with database connectivity"""
    database_ok = await services.database.check_health()
    return JSONResponse(
        status_code=200 if database_ok else 503,
        content={
            "status": "healthy" if database_ok else "unhealthy",
            "service": services.settings.PROJECT_NAME,
            "version": services.settings.VERSION,
            "timestamp": now_utc().isoformat(),
            "checks": {"database": "healthy" if database_ok else "unhealthy"},
        },
    )
