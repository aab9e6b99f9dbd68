"""Meditation content (sections, techniques, standard sessions)."""

from app.content.provider import ContentError, ContentProvider, calculate_session_duration

__all__ = ["ContentError", "ContentProvider", "calculate_session_duration"]
