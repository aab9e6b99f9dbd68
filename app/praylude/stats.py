"""
Meditation statistics: streaks, time-of-day, aggregates.

All functions are pure and work on the full list of completed session
records.  Dates and hours are taken in the local timezone: a session
completed at 23:30 local time counts for that local day.

Streak
------
1. Collect the distinct local calendar dates of all records, newest
   first.
2. If the newest date is neither today nor yesterday the streak is 0.
3. Otherwise count the newest date, then every following date that is
   exactly one day before the previously counted one, stopping at the
   first gap.

Time of day
-----------
Each record falls into one bucket by local hour:

    morning     05:00 - 10:59
    afternoon   11:00 - 16:59
    evening     17:00 - 20:59
    night       21:00 - 04:59

The favourite is the bucket with the highest count; ties go to the
bucket declared first.  No records yields :data:`NO_DATA`.
"""

from __future__ import annotations

import datetime
from collections import defaultdict
from typing import Iterable, Literal, Optional

from app.schemas.history import AggregateStats, CompletedSessionRecord, HistoryDayGroup

NO_DATA = "no_data"

# (bucket, first hour, end hour exclusive).  Anything else is night.
_TIME_OF_DAY_BUCKETS: list[tuple[str, int, int]] = [("morning", 5, 11), ("afternoon", 11, 17), ("evening", 17, 21), ]

TIME_OF_DAY_NAMES = [name for name, _, _ in _TIME_OF_DAY_BUCKETS] + ["night"]

RECENT_SESSIONS_LIMIT = 5

SortKey = Literal["date", "duration"]


# ======================================================================
# Helpers
# ======================================================================


def _local(ts: datetime.datetime) -> datetime.datetime:
    """Convert to the local timezone.  Naive timestamps are taken as local."""
    return ts.astimezone()


def local_date(ts: datetime.datetime) -> datetime.date:
    return _local(ts).date()


def rounded_minutes(seconds: int) -> int:
    """Seconds to whole minutes, halves rounded up (90s -> 2)."""
    return (seconds + 30) // 60


def time_of_day(ts: datetime.datetime) -> str:
    hour = _local(ts).hour
    for label, low, high in _TIME_OF_DAY_BUCKETS:
        if low <= hour < high:
            return label
    return "night"


# ======================================================================
# Streak
# ======================================================================


def compute_streak(records: Iterable[CompletedSessionRecord], today: Optional[datetime.date] = None) -> int:
    """Count consecutive days with at least one session, ending today or yesterday."""
    dates = sorted({local_date(r.completed_at) for r in records}, reverse=True)
    if not dates:
        return 0

    today = today or datetime.date.today()
    one_day = datetime.timedelta(days=1)
    if dates[0] != today and dates[0] != today - one_day:
        return 0

    streak = 1
    for previous, current in zip(dates, dates[1:]):
        if previous - current != one_day:
            break
        streak += 1
    return streak


# ======================================================================
# Favourite time of day
# ======================================================================


def favorite_time_of_day(records: Iterable[CompletedSessionRecord]) -> str:
    """Return the busiest time-of-day bucket, or :data:`NO_DATA`."""
    counts = dict.fromkeys(TIME_OF_DAY_NAMES, 0)
    for record in records:
        counts[time_of_day(record.completed_at)] += 1

    best = max(counts.values())
    if best == 0:
        return NO_DATA
    # dicts keep declaration order, so the first bucket at the max wins.
    return next(name for name, count in counts.items() if count == best)


# ======================================================================
# Aggregates
# ======================================================================


def compute_aggregate_stats(records: list[CompletedSessionRecord],
                            today: Optional[datetime.date] = None) -> AggregateStats:
    """Rebuild :class:`AggregateStats` from the complete record list."""
    if not records:
        return AggregateStats()

    last_date = max(local_date(r.completed_at) for r in records)
    return AggregateStats(total_sessions=len(records),
                          total_minutes=sum(rounded_minutes(r.duration) for r in records),
                          current_streak=compute_streak(records, today=today),
                          last_session_date=last_date.isoformat(), )


# ======================================================================
# Presentation helpers
# ======================================================================


def sort_records(records: Iterable[CompletedSessionRecord], by: SortKey = "date") -> list[CompletedSessionRecord]:
    """Newest first, or longest first when ``by="duration"``."""
    if by == "duration":
        return sorted(records, key=lambda r: r.duration, reverse=True)
    return sorted(records, key=lambda r: r.completed_at.timestamp(), reverse=True)


def recent(records: Iterable[CompletedSessionRecord], limit: int = RECENT_SESSIONS_LIMIT) -> list[CompletedSessionRecord]:
    return sort_records(records)[:limit]


def group_by_day(records: Iterable[CompletedSessionRecord]) -> list[HistoryDayGroup]:
    """Group records by local date, newest day and newest session first."""
    groups: dict[datetime.date, list[CompletedSessionRecord]] = defaultdict(list)
    for record in sort_records(records):
        groups[local_date(record.completed_at)].append(record)
    return [HistoryDayGroup(date=day, sessions=groups[day]) for day in sorted(groups, reverse=True)]
