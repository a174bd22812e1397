"""API Routes."""

from fastapi import APIRouter

from .health import router as health_router
from .newsletters import router as newsletters_router
from .subscriptions import router as subscriptions_router

# Create main API router
api_router = APIRouter()

# Include route modules
api_router.include_router(health_router, tags=["Health"])
api_router.include_router(subscriptions_router)
api_router.include_router(newsletters_router)
