"""API v1 Router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from .endpoints import users

api_router = APIRouter()

# Include user endpoints
api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Users"]
)
