"""
API router.

Aggregates all endpoints.
"""

from fastapi import APIRouter

from app.api.endpoints import data, imports, players

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    data.router, prefix="/data", tags=["Dataset"]
)
api_router.include_router(
    players.router, prefix="/players", tags=["Players and sessions"]
)
api_router.include_router(
    imports.router, prefix="/import", tags=["Import"]
)
