"""
Unit tests for the history/stats store.

Uses :class:`InMemoryKeyValueStore`; ``available = False`` emulates a
client with storage disabled.
"""

import datetime
import json

import pytest

from app.praylude.history import HistoryStore
from app.schemas.history import AggregateStats
from app.storage.base import StorageError
from app.storage.memory import InMemoryKeyValueStore

SESSIONS_KEY = "test_sessions"
STATS_KEY = "test_stats"


class StatsWriteFailingStore(InMemoryKeyValueStore):
    """Accepts session writes but rejects the stats document."""

    def set(self, key: str, value: str) -> None:
        if key == STATS_KEY:
            raise StorageError("quota exceeded")
        super().set(key, value)


class StatsDeleteFailingStore(InMemoryKeyValueStore):
    """Deletes the sessions document but not the stats document."""

    def delete(self, key: str) -> None:
        if key == STATS_KEY:
            raise StorageError("storage locked")
        super().delete(key)


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def history(kv):
    return HistoryStore(kv, sessions_key=SESSIONS_KEY, stats_key=STATS_KEY)


# ======================================================================
# record_completion
# ======================================================================


class TestRecordCompletion:
    def test_returns_record(self, history):
        record = history.record_completion("Standard Meditation", 1200, notes="Peaceful")

        assert record is not None
        assert record.session_name == "Standard Meditation"
        assert record.duration == 1200
        assert record.notes == "Peaceful"
        assert record.completed_at.tzinfo is not None

    def test_back_to_back_completions_are_kept(self, history):
        first = history.record_completion("Standard Meditation", 1200)
        second = history.record_completion("Quick Evening Prayer", 600)

        records = history.list_completions()
        assert [r.id for r in records] == [first.id, second.id]
        assert history.get_stats().total_sessions == 2

    def test_ids_are_unique(self, history):
        ids = {history.record_completion("S", 60).id for _ in range(5)}
        assert len(ids) == 5

    def test_stats_recomputed(self, history):
        history.record_completion("Standard Meditation", 1200)
        history.record_completion("Standard Meditation", 90)

        stats = history.get_stats()
        assert stats.total_sessions == 2
        assert stats.total_minutes == 22
        assert stats.current_streak == 1
        assert stats.last_session_date == datetime.date.today().isoformat()

    def test_uses_clock(self, kv):
        fixed = datetime.datetime(2026, 10, 19, 6, 30, tzinfo=datetime.timezone.utc)
        history = HistoryStore(kv, sessions_key=SESSIONS_KEY, stats_key=STATS_KEY, clock=lambda: fixed)
        assert history.record_completion("S", 60).completed_at == fixed

    def test_wire_format(self, history, kv):
        history.record_completion("Standard Meditation", 1200)

        [stored] = json.loads(kv.get(SESSIONS_KEY))
        assert set(stored) == {"id", "completedAt", "duration", "sessionName"}
        assert stored["duration"] == 1200

        stats = json.loads(kv.get(STATS_KEY))
        assert set(stats) == {"totalSessions", "totalMinutes", "currentStreak", "lastSessionDate"}

    def test_notes_serialised_when_present(self, history, kv):
        history.record_completion("S", 60, notes="Short session before bed")
        [stored] = json.loads(kv.get(SESSIONS_KEY))
        assert stored["notes"] == "Short session before bed"


# ======================================================================
# Storage failures
# ======================================================================


class TestStorageFailures:
    def test_unavailable_storage_reads_empty(self, history, kv):
        kv.available = False
        assert history.list_completions() == []
        assert history.get_stats() == AggregateStats()

    def test_unavailable_storage_drops_write(self, history, kv):
        kv.available = False
        assert history.record_completion("S", 60) is None

    def test_failed_write_leaves_prior_state(self, history, kv):
        history.record_completion("S", 60)
        kv.available = False
        assert history.record_completion("S", 120) is None

        kv.available = True
        assert len(history.list_completions()) == 1
        assert history.get_stats().total_sessions == 1

    def test_corrupt_sessions_read_as_empty(self, history, kv):
        kv.set(SESSIONS_KEY, "{not json")
        assert history.list_completions() == []

    def test_wrong_shape_reads_as_empty(self, history, kv):
        kv.set(SESSIONS_KEY, json.dumps({"id": "x"}))
        assert history.list_completions() == []

    def test_corrupt_stats_read_as_default(self, history, kv):
        kv.set(STATS_KEY, "[1, 2")
        assert history.get_stats() == AggregateStats()

    def test_record_after_corruption_starts_fresh(self, history, kv):
        kv.set(SESSIONS_KEY, "garbage")
        history.record_completion("S", 60)
        assert len(history.list_completions()) == 1

    def test_stats_write_failure_keeps_record(self):
        kv = StatsWriteFailingStore()
        history = HistoryStore(kv, sessions_key=SESSIONS_KEY, stats_key=STATS_KEY)

        assert history.record_completion("S", 60) is not None
        assert len(history.list_completions()) == 1
        assert history.get_stats() == AggregateStats()

    @pytest.mark.parametrize("name, duration", [
        ("S", -5),
        (None, 60),
        ("S", "twenty minutes"),
    ])
    def test_invalid_completion_returns_none(self, history, kv, name, duration):
        history.record_completion("S", 60)

        assert history.record_completion(name, duration) is None
        assert len(history.list_completions()) == 1
        assert history.get_stats().total_sessions == 1

    def test_partial_clear_realigns_stats(self):
        kv = StatsDeleteFailingStore()
        history = HistoryStore(kv, sessions_key=SESSIONS_KEY, stats_key=STATS_KEY)
        history.record_completion("S", 60)
        history.record_completion("S", 120)

        assert history.clear() is False
        assert history.list_completions() == []
        assert history.get_stats().total_sessions == 0
        assert history.get_stats().total_minutes == 0


# ======================================================================
# Reading existing data and housekeeping
# ======================================================================


class TestExistingData:
    def test_reads_browser_style_documents(self, history, kv):
        kv.set(SESSIONS_KEY, json.dumps([
            {"id": "session-1", "completedAt": "2026-10-19T07:00:00.000Z", "duration": 1200,
             "sessionName": "Standard Meditation", "notes": "Felt peaceful"},
            {"id": "session-2", "completedAt": "2026-10-18T07:15:00.000Z", "duration": 1260,
             "sessionName": "Standard Meditation"},
        ]))

        records = history.list_completions()
        assert [r.id for r in records] == ["session-1", "session-2"]
        assert records[0].notes == "Felt peaceful"
        assert records[1].notes is None

    def test_refresh_stats(self, history, kv):
        kv.set(SESSIONS_KEY, json.dumps([
            {"id": "a", "completedAt": "2020-01-01T12:00:00Z", "duration": 600, "sessionName": "Old"},
        ]))
        stats = history.refresh_stats()
        assert stats.total_sessions == 1
        assert stats.total_minutes == 10
        assert history.get_stats() == stats

    def test_replace_all(self, history):
        history.record_completion("S", 60)
        assert history.replace_all([]) is True
        assert history.list_completions() == []
        assert history.get_stats().total_sessions == 0

    def test_clear(self, history, kv):
        history.record_completion("S", 60)
        assert history.clear() is True
        assert kv.get(SESSIONS_KEY) is None
        assert kv.get(STATS_KEY) is None

    def test_clear_unavailable(self, history, kv):
        kv.available = False
        assert history.clear() is False
