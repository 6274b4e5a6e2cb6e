"""
Health check routes.
"""
from datetime import datetime, timezone
from fastapi import APIRouter

from jobly.core import database
from jobly.core.logging import get_logger
from jobly.schemas.base import BaseSchema

router = APIRouter(tags=["health"])

logger = get_logger(__name__)


class HealthResponse(BaseSchema):
    """Health check response."""

    status: str
    timestamp: str
    checks: dict


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Opens its own connection rather than taking one per request, so an
    unreachable database reports "degraded" instead of failing.
    """
    checks = {}

    try:
        await database.ping_db()
        checks["database"] = "healthy"
    except Exception as e:
        logger.warning("health_check_failed", check="database", error=str(e))
        checks["database"] = f"unhealthy: {str(e)}"

    all_healthy = all(v == "healthy" for v in checks.values())

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc).isoformat(),
        checks=checks,
    )
