"""
Shared API dependencies.

Reusable FastAPI dependencies for storage, content and playback.
"""

from pathlib import Path

from fastapi import Depends
from sqlmodel import Session

from app.content.provider import ContentProvider
from app.core.config import settings
from app.db.session import get_db
from app.services.history_service import record_completion
from app.services.player_service import PlayerService
from app.storage.base import KeyValueStore
from app.storage.sql import SQLKeyValueStore

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _content_path() -> Path:
    path = Path(settings.CONTENT_PATH)
    return path if path.is_absolute() else PROJECT_ROOT / path


# Process-wide instances: the content cache and the live players.
content_provider = ContentProvider(_content_path())
player_service = PlayerService(content_provider, on_complete=record_completion,
                               server_ticks=settings.PLAYER_SERVER_TICKS,
                               tick_interval=settings.TICK_INTERVAL_SECONDS,
                               idle_timeout=settings.PLAYER_IDLE_TIMEOUT_SECONDS, )


def get_content_provider() -> ContentProvider:
    return content_provider


def get_player_service() -> PlayerService:
    return player_service


def get_store(db: Session = Depends(get_db)) -> KeyValueStore:
    """Key-value store scoped to the request's database session."""
    return SQLKeyValueStore(db)
