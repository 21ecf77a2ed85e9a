"""
API router.

Aggregates all endpoints under ``/api``.
"""

from fastapi import APIRouter

from app.api.endpoints import health, users

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    users.router, prefix="/users", tags=["Users"]
)
api_router.include_router(
    health.router, tags=["Health"]
)
