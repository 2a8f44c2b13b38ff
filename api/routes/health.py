"""
Health check endpoints.

Provides endpoints for monitoring and load balancer health checks.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_blog_service
from core.config import settings
from core.logging import get_logger
from manager.blog_service import BlogService


logger = get_logger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """
    Basic health check.

    Returns 200 if the service is running.
    Used by load balancers and orchestration systems.
    """
    return {
        "status": "healthy",
        "service": settings.service_name,
    }


@router.get("/ready")
async def readiness_check(
    service: BlogService = Depends(get_blog_service),
) -> JSONResponse:
    """
    Readiness check.

    Returns 200 if both repositories answer a ping, 503 otherwise.
    """
    checks = await service.is_ready()
    ready = all(checks.values())

    if not ready:
        logger.warning("Readiness check failed", checks=checks)

    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "unavailable",
            "checks": {
                name: "ok" if ok else "unreachable"
                for name, ok in checks.items()
            },
        },
    )
