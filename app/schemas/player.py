"""
Playback schemas.

:class:`PlaybackState` is a read-only snapshot of a running player.  It
is never persisted: a player lost on restart starts over from the
beginning.
"""

from typing import Optional

from pydantic import Field

from app.schemas.content import MAX_SESSION_STEPS, CamelModel, SessionPlan, SessionStep


class PlaybackState(CamelModel):
    """Snapshot of the playback engine's transient state."""

    current_step_index: int = Field(..., ge=0)
    elapsed_in_step: int = Field(..., ge=0, description="Seconds elapsed in the current step")
    is_running: bool
    completed: bool = Field(False, description="Whether the last run reached the end of the plan")
    total_elapsed: int = Field(..., ge=0, description="Seconds elapsed across the whole session")
    total_duration: int = Field(..., ge=0, description="Sum of all step durations")


class SessionCompleted(CamelModel):
    """Emitted once when the last step of a plan finishes."""

    session_name: str
    total_duration: int = Field(..., ge=0)


class PlayerCreate(CamelModel):
    """Schema for creating a player.

    Without ``steps`` the standard daily session is played.
    """

    session_name: str = Field("Standard Meditation", min_length=1, max_length=255)
    steps: Optional[list[SessionStep]] = Field(None, max_length=MAX_SESSION_STEPS, description="Custom session steps")


class PlayerResponse(CamelModel):
    """Schema for a player in API responses."""

    id: str
    plan: SessionPlan
    state: PlaybackState
    current_step: Optional[SessionStep] = None
    is_playable: bool
    last_completion: Optional[SessionCompleted] = None
