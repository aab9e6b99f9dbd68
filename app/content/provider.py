"""
Meditation content provider.

Loads sections and techniques from a JSON document and answers catalogue
queries.  The document is parsed once and kept in memory until
:meth:`ContentProvider.clear_cache` is called.  Consumers only rely on
the resulting :class:`SessionPlan` shape, so the JSON file can later be
replaced by a database or an API without touching the player.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from app.schemas.content import (
    ContentStats,
    Difficulty,
    Section,
    SectionName,
    SectionTechniqueCount,
    SessionPlan,
    SessionStep,
    Technique,
)

logger = logging.getLogger(__name__)


class ContentError(Exception):
    """The content document is missing or invalid."""


class ContentDocument(BaseModel):
    sections: list[Section]
    techniques: list[Technique]


class ContentProvider:
    """Load-once cache over the content JSON document."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data: Optional[ContentDocument] = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> ContentDocument:
        """Return the cached document, reading the file on first use.

        Raises :class:`ContentError` if the file cannot be read or does
        not hold ``sections`` and ``techniques`` arrays.
        """
        if self._data is not None:
            return self._data

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ContentError(f"Failed to load content from {self.path}: {e}") from e

        if not isinstance(raw, dict) or not isinstance(raw.get("sections"), list):
            raise ContentError("Invalid content: sections array not found")
        if not isinstance(raw.get("techniques"), list):
            raise ContentError("Invalid content: techniques array not found")

        try:
            self._data = ContentDocument.model_validate(raw)
        except ValidationError as e:
            raise ContentError(f"Invalid content: {e}") from e

        logger.info("Loaded %d sections and %d techniques from %s", len(self._data.sections),
                    len(self._data.techniques), self.path)
        return self._data

    def clear_cache(self) -> None:
        """Forget the parsed document; the next query reloads it."""
        self._data = None

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def get_sections(self) -> list[Section]:
        return sorted(self.load().sections, key=lambda s: s.order)

    def get_section_by_id(self, section_id: str) -> Optional[Section]:
        return next((s for s in self.load().sections if s.id == section_id), None)

    def get_section_by_name(self, name: SectionName) -> Optional[Section]:
        return next((s for s in self.load().sections if s.name == name), None)

    # ------------------------------------------------------------------
    # Techniques
    # ------------------------------------------------------------------

    def get_techniques(self) -> list[Technique]:
        return list(self.load().techniques)

    def get_technique_by_id(self, technique_id: str) -> Optional[Technique]:
        return next((t for t in self.load().techniques if t.id == technique_id), None)

    def get_techniques_by_section(self, section_id: str) -> list[Technique]:
        return [t for t in self.load().techniques if t.section_id == section_id]

    def get_techniques_by_difficulty(self, difficulty: Difficulty) -> list[Technique]:
        return [t for t in self.load().techniques if t.difficulty == difficulty]

    # ------------------------------------------------------------------
    # Session builders
    # ------------------------------------------------------------------

    def get_standard_daily_session(self) -> list[SessionStep]:
        """One step per section using the section's first technique.

        A section without techniques yields a skipped step of 0 seconds.
        """
        steps: list[SessionStep] = []
        for section in self.get_sections():
            techniques = self.get_techniques_by_section(section.id)
            selected = techniques[0] if techniques else None
            steps.append(SessionStep(section_id=section.id, technique_id=selected.id if selected else None,
                                     duration=selected.default_duration if selected else 0,
                                     order=section.order, ))
        return steps

    def build_plan(self, name: str, steps: Optional[list[SessionStep]] = None) -> SessionPlan:
        """Build a plan from *steps*, or the standard daily session."""
        if steps is None:
            steps = self.get_standard_daily_session()
        return SessionPlan(name=name, steps=sorted(steps, key=lambda s: s.order))

    def get_data_stats(self) -> ContentStats:
        data = self.load()
        by_section = [SectionTechniqueCount(section_name=s.display_name,
                                            count=len(self.get_techniques_by_section(s.id))) for s in
                      self.get_sections()]
        breakdown = {level: len(self.get_techniques_by_difficulty(level)) for level in
                     ("beginner", "intermediate", "advanced")}
        return ContentStats(section_count=len(data.sections), technique_count=len(data.techniques),
                            techniques_by_section=by_section, difficulty_breakdown=breakdown, )


def calculate_session_duration(steps: list[SessionStep]) -> int:
    """Total seconds of *steps*, skipped steps counting 0."""
    return sum(s.effective_duration for s in steps)
