"""
History service.

Wraps :class:`HistoryStore` over the SQL key-value store for the API:
listing, grouping, recording and profile summaries.
"""

import logging

from sqlmodel import Session

from app.db.session import engine
from app.praylude.formatting import format_total_time
from app.praylude.history import HistoryStore
from app.praylude.stats import (SortKey, compute_aggregate_stats, favorite_time_of_day, group_by_day, recent,
                                sort_records, )
from app.schemas.history import (AggregateStats, CompletedSessionRecord, CompletionCreate, HistoryDayGroup,
                                 ProfileResponse, )
from app.schemas.player import SessionCompleted
from app.storage.sql import SQLKeyValueStore

logger = logging.getLogger(__name__)


class HistoryService:
    """Service for completed-session history and stats."""

    def __init__(self, session: Session):
        self.store = HistoryStore(SQLKeyValueStore(session))

    def list_sessions(self, sort_by: SortKey = "date") -> list[CompletedSessionRecord]:
        return sort_records(self.store.list_completions(), by=sort_by)

    def grouped(self) -> list[HistoryDayGroup]:
        return group_by_day(self.store.list_completions())

    def record(self, data: CompletionCreate) -> CompletedSessionRecord | None:
        return self.store.record_completion(data.session_name, data.duration, data.notes)

    def stats(self) -> AggregateStats:
        return self.store.get_stats()

    def profile(self) -> ProfileResponse:
        # Stats are rebuilt so the streak reflects today, not the day of the last write.
        records = self.store.list_completions()
        stats = compute_aggregate_stats(records)
        return ProfileResponse(stats=stats, favorite_time_of_day=favorite_time_of_day(records),
                               total_time=format_total_time(stats.total_minutes),
                               recent_sessions=recent(records), )

    def clear(self) -> bool:
        return self.store.clear()


def record_completion(event: SessionCompleted) -> None:
    """Completion sink for players: persist *event* in its own DB session."""
    with Session(engine) as session:
        HistoryStore(SQLKeyValueStore(session)).record_completion(event.session_name, event.total_duration)
