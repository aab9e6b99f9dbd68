"""
Session history and statistics schemas.

Records and stats are persisted as JSON documents in the key-value
store using the camelCase aliases::

    {id, completedAt, duration, sessionName, notes?}
    {totalSessions, totalMinutes, currentStreak, lastSessionDate}
"""

import datetime
from typing import Optional

from pydantic import Field

from app.schemas.content import CamelModel


class CompletedSessionRecord(CamelModel):
    """A completed meditation.  Immutable once written."""

    id: str
    completed_at: datetime.datetime
    duration: int = Field(..., ge=0, description="Total session duration in seconds")
    session_name: str
    notes: Optional[str] = None


class AggregateStats(CamelModel):
    """Summary derived from the full set of completed sessions."""

    total_sessions: int = 0
    total_minutes: int = 0
    current_streak: int = 0
    last_session_date: str = Field("", description="ISO date of the most recent session, empty if none")


class CompletionCreate(CamelModel):
    """Schema for recording a completed session."""

    session_name: str = Field("Standard Meditation", min_length=1, max_length=255)
    duration: int = Field(..., ge=0, description="Duration in seconds")
    notes: Optional[str] = Field(None, max_length=1000, description="Optional reflections")


class HistoryDayGroup(CamelModel):
    """Completed sessions of a single local calendar day."""

    date: datetime.date
    sessions: list[CompletedSessionRecord]


class ProfileResponse(CamelModel):
    """Meditation journey overview."""

    stats: AggregateStats
    favorite_time_of_day: str = Field(..., description="morning, afternoon, evening, night or no_data")
    total_time: str = Field(..., description="Total meditation time, human readable")
    recent_sessions: list[CompletedSessionRecord]
