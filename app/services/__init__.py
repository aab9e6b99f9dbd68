"""Business logic services."""

from app.services.history_service import HistoryService
from app.services.player_service import PlayerService

__all__ = [
    "HistoryService",
    "PlayerService",
]
