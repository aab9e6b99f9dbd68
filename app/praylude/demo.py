"""
Demo history for trying out the profile and history views.

Ten sessions spread over the last three weeks: a three-day streak
ending today, mostly mornings, with a few evening, night and afternoon
sessions.
"""

import datetime
from typing import Optional

from app.schemas.history import CompletedSessionRecord

# (days ago, hour, minute, duration seconds, session name, notes)
_DEMO_SESSIONS: list[tuple[int, int, int, int, str, Optional[str]]] = [
    (0, 7, 0, 1200, "Standard Meditation", "Felt peaceful and centered this morning"),
    (1, 7, 15, 1260, "Standard Meditation", None),
    (2, 6, 45, 900, "Standard Meditation", None),
    (3, 7, 30, 1500, "Custom Session - Deep Prayer", "Focused on gratitude and thanksgiving"),
    (5, 18, 0, 1080, "Standard Meditation", None),
    (6, 7, 0, 1200, "Standard Meditation", None),
    (7, 7, 15, 1320, "Standard Meditation", None),
    (10, 21, 0, 600, "Quick Evening Prayer", "Short session before bed"),
    (14, 13, 0, 1800, "Extended Meditation", "Longest session yet"),
    (20, 7, 0, 1200, "Standard Meditation", None),
]


def generate_demo_sessions(today: Optional[datetime.date] = None) -> list[CompletedSessionRecord]:
    """Build the demo records relative to *today* (local time)."""
    today = today or datetime.date.today()
    records = []
    for i, (days_ago, hour, minute, duration, name, notes) in enumerate(_DEMO_SESSIONS, start=1):
        day = today - datetime.timedelta(days=days_ago)
        completed_at = datetime.datetime.combine(day, datetime.time(hour, minute)).astimezone()
        records.append(CompletedSessionRecord(id=f"session-{i}", completed_at=completed_at, duration=duration,
                                              session_name=name, notes=notes, ))
    return records
