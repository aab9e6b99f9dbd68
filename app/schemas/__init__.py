"""Pydantic schemas for request/response validation."""

from app.schemas.content import (
    ContentStats,
    Section,
    SessionPlan,
    SessionStep,
    Technique,
)
from app.schemas.history import (
    AggregateStats,
    CompletedSessionRecord,
    CompletionCreate,
    HistoryDayGroup,
    ProfileResponse,
)
from app.schemas.player import PlaybackState, PlayerCreate, PlayerResponse, SessionCompleted
from app.schemas.preferences import ThemePreference

__all__ = [
    "ContentStats",
    "Section",
    "SessionPlan",
    "SessionStep",
    "Technique",
    "AggregateStats",
    "CompletedSessionRecord",
    "CompletionCreate",
    "HistoryDayGroup",
    "ProfileResponse",
    "PlaybackState",
    "PlayerCreate",
    "PlayerResponse",
    "SessionCompleted",
    "ThemePreference",
]
