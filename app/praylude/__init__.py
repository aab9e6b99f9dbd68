"""Praylude core: playback engine, tick scheduler, history and stats."""

from app.praylude.history import HistoryStore
from app.praylude.player import PlaybackEngine
from app.praylude.scheduler import TickScheduler
from app.praylude.stats import NO_DATA, compute_aggregate_stats, compute_streak, favorite_time_of_day

__all__ = [
    "HistoryStore",
    "PlaybackEngine",
    "TickScheduler",
    "NO_DATA",
    "compute_aggregate_stats",
    "compute_streak",
    "favorite_time_of_day",
]
