"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import content, history, player, preferences

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    content.router, prefix="/content", tags=["Content"]
)
api_router.include_router(
    player.router, prefix="/player", tags=["Player"]
)
api_router.include_router(
    history.router, prefix="/history", tags=["History"]
)
api_router.include_router(
    preferences.router, prefix="/preferences", tags=["Preferences"]
)
