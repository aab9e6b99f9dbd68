"""
Completed session history and aggregate statistics store.

Keeps two JSON documents in a :class:`KeyValueStore`:

- the sessions key  -> list of :class:`CompletedSessionRecord`
- the stats key     -> :class:`AggregateStats` snapshot

Writes are read-modify-write on a single key with one logical writer,
so back-to-back completions are never lost.  The stats snapshot is
always rebuilt from the full record list, never patched.

Storage is best effort: the store may be unavailable or hold malformed
data.  Reads then degrade to empty/default values and writes are
dropped; both are logged and nothing is raised to the caller.
"""

from __future__ import annotations

import datetime
import logging
import uuid
from typing import Callable, Optional

from pydantic import TypeAdapter, ValidationError

from app.core.config import settings
from app.praylude.stats import compute_aggregate_stats
from app.schemas.history import AggregateStats, CompletedSessionRecord
from app.storage.base import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

_RECORD_LIST = TypeAdapter(list[CompletedSessionRecord])


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class HistoryStore:
    """Append-only session log plus derived stats view."""

    def __init__(self, store: KeyValueStore, sessions_key: Optional[str] = None, stats_key: Optional[str] = None,
                 clock: Callable[[], datetime.datetime] = _utcnow, ):
        self.store = store
        self.sessions_key = sessions_key or settings.SESSIONS_KEY
        self.stats_key = stats_key or settings.STATS_KEY
        self.clock = clock

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_completions(self) -> list[CompletedSessionRecord]:
        """Return all records, or ``[]`` if storage is empty, unavailable or corrupt."""
        try:
            return self._load_records()
        except StorageError as e:
            logger.error("Error reading sessions from storage: %s", e)
            return []

    def get_stats(self) -> AggregateStats:
        """Return the persisted stats snapshot, or defaults."""
        try:
            raw = self.store.get(self.stats_key)
        except StorageError as e:
            logger.error("Error reading stats from storage: %s", e)
            return AggregateStats()
        if not raw:
            return AggregateStats()
        try:
            return AggregateStats.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Ignoring malformed stats document: %s", e)
            return AggregateStats()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def record_completion(self, name: str, duration_seconds: int,
                          notes: Optional[str] = None) -> Optional[CompletedSessionRecord]:
        """Append a completed session and refresh the stats snapshot.

        Returns the new record, or ``None`` if it could not be stored.
        """
        try:
            record = CompletedSessionRecord(id=str(uuid.uuid4()), completed_at=self.clock(), duration=duration_seconds,
                                            session_name=name, notes=notes, )
        except ValidationError as e:
            logger.error("Rejected invalid session completion: %s", e)
            return None

        try:
            records = self._load_records()
            records.append(record)
            self.store.set(self.sessions_key, self._dump_records(records))
        except StorageError as e:
            logger.error("Error saving session to storage: %s", e)
            return None

        self._save_stats(compute_aggregate_stats(records))
        logger.info("Recorded session '%s' (%ds), %d in history", name, duration_seconds, len(records))
        return record

    def refresh_stats(self) -> AggregateStats:
        """Recompute the snapshot from the stored records and persist it."""
        stats = compute_aggregate_stats(self.list_completions())
        self._save_stats(stats)
        return stats

    def replace_all(self, records: list[CompletedSessionRecord]) -> bool:
        """Overwrite the whole history (used to seed demo data)."""
        try:
            self.store.set(self.sessions_key, self._dump_records(records))
        except StorageError as e:
            logger.error("Error replacing sessions in storage: %s", e)
            return False
        self._save_stats(compute_aggregate_stats(records))
        return True

    def clear(self) -> bool:
        """Remove all history and stats.  Returns ``False`` on storage failure."""
        try:
            self.store.delete(self.sessions_key)
            self.store.delete(self.stats_key)
        except StorageError as e:
            logger.error("Error clearing history: %s", e)
            # The sessions key may already be gone.
            self.refresh_stats()
            return False
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load_records(self) -> list[CompletedSessionRecord]:
        """Read the record list.  Malformed data reads as empty; storage errors propagate."""
        raw = self.store.get(self.sessions_key)
        if not raw:
            return []
        try:
            return _RECORD_LIST.validate_json(raw)
        except ValidationError as e:
            logger.warning("Ignoring malformed sessions document: %s", e)
            return []

    @staticmethod
    def _dump_records(records: list[CompletedSessionRecord]) -> str:
        return _RECORD_LIST.dump_json(records, by_alias=True, exclude_none=True).decode()

    def _save_stats(self, stats: AggregateStats) -> None:
        try:
            self.store.set(self.stats_key, stats.model_dump_json(by_alias=True))
        except StorageError as e:
            logger.error("Error saving stats to storage: %s", e)
