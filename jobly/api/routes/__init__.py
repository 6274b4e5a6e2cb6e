"""
API Routes package.
"""
from fastapi import APIRouter

from jobly.api.routes.health import router as health_router
from jobly.api.routes.companies import router as companies_router
from jobly.api.routes.jobs import router as jobs_router

# Main API router
api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(companies_router)
api_router.include_router(jobs_router)

__all__ = [
    "api_router",
    "health_router",
    "companies_router",
    "jobs_router",
]
