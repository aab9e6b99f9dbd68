"""
Meditation content schemas.

A meditation is a journey through six ordered sections (Welcome, Mind,
Body, Spirit, Meditation, Incorporate).  Each section offers a set of
techniques; a session picks at most one technique per section, with a
duration in seconds.  A section whose technique is ``None`` is skipped.

Field names are snake_case in Python and camelCase on the wire, matching
the content JSON file.
"""

from __future__ import annotations

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SECTION_NAMES = ["welcome", "mind", "body", "spirit", "meditation", "incorporate", ]

MAX_SESSION_STEPS = len(SECTION_NAMES)

SectionName = Literal["welcome", "mind", "body", "spirit", "meditation", "incorporate"]
Difficulty = Literal["beginner", "intermediate", "advanced"]


class CamelModel(BaseModel):
    """Base model serialising to camelCase and accepting either case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Section(CamelModel):
    """One of the six meditation sections."""

    id: str
    name: SectionName
    display_name: str
    description: str = ""
    order: int = Field(..., ge=1, le=MAX_SESSION_STEPS)


class Technique(CamelModel):
    """A meditation technique belonging to a section."""

    id: str
    section_id: str
    name: str
    description: str = ""
    script_template: str = ""
    default_duration: int = Field(..., ge=0, description="Default duration in seconds")
    min_duration: int = Field(0, ge=0, description="Minimum allowed duration in seconds")
    max_duration: int = Field(3600, ge=0, description="Maximum allowed duration in seconds")
    scripture_references: Optional[list[str]] = None
    difficulty: Difficulty = "beginner"
    created_at: Optional[datetime.datetime] = None
    released_at: Optional[datetime.datetime] = None


class SessionStep(CamelModel):
    """One section-technique-duration triple of a session plan."""

    section_id: str
    technique_id: Optional[str] = Field(None, description="Technique ID, or null to skip this section")
    duration: int = Field(..., ge=0, description="Duration in whole seconds")
    order: int = Field(1, ge=1, le=MAX_SESSION_STEPS)

    @property
    def is_skipped(self) -> bool:
        return self.technique_id is None

    @property
    def effective_duration(self) -> int:
        """Seconds this step actually plays.  Skipped steps play for 0."""
        return 0 if self.is_skipped else self.duration


class SessionPlan(CamelModel):
    """Ordered list of steps handed to the playback engine."""

    name: str = "Standard Meditation"
    steps: list[SessionStep] = Field(default_factory=list, max_length=MAX_SESSION_STEPS)

    @property
    def durations(self) -> list[int]:
        return [s.effective_duration for s in self.steps]

    @property
    def total_duration(self) -> int:
        return sum(self.durations)

    @property
    def is_playable(self) -> bool:
        """``True`` if at least one step has a technique."""
        return any(not s.is_skipped for s in self.steps)


class SectionTechniqueCount(CamelModel):
    section_name: str
    count: int


class ContentStats(CamelModel):
    """Summary of the loaded content catalogue."""

    section_count: int
    technique_count: int
    techniques_by_section: list[SectionTechniqueCount]
    difficulty_breakdown: dict[str, int]
