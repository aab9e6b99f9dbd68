"""Tests for the asyncio tick scheduler (zero interval, no real waiting)."""

import asyncio

from app.praylude.player import PlaybackEngine
from app.praylude.scheduler import TickScheduler
from app.schemas.content import SessionPlan, SessionStep


def _plan(durations: list[int]) -> SessionPlan:
    return SessionPlan(name="Standard Meditation", steps=[
        SessionStep(section_id=f"section-{i}", technique_id=f"technique-{i}", duration=d, order=i + 1)
        for i, d in enumerate(durations)])


class TestTickScheduler:
    def test_runs_engine_to_completion(self):
        events = []
        engine = PlaybackEngine(_plan([2, 0, 3]), on_complete=events.append)

        async def run():
            engine.start()
            scheduler = TickScheduler(engine, interval=0)
            scheduler.start()
            await scheduler.wait()
            return scheduler

        scheduler = asyncio.run(run())

        assert len(events) == 1
        assert events[0].total_duration == 5
        assert scheduler.is_active is False

    def test_pause_stops_ticking(self):
        engine = PlaybackEngine(_plan([1000]))

        async def run():
            engine.start()
            scheduler = TickScheduler(engine, interval=0)
            scheduler.start()
            for _ in range(3):
                await asyncio.sleep(0)
            engine.pause()
            await scheduler.wait()
            return engine.elapsed_in_step

        elapsed = asyncio.run(run())

        assert engine.completed is False
        assert elapsed < 1000
        assert engine.elapsed_in_step == elapsed

    def test_stop_cancels_loop(self):
        engine = PlaybackEngine(_plan([1000]))

        async def run():
            engine.start()
            scheduler = TickScheduler(engine, interval=60)
            scheduler.start()
            assert scheduler.is_active is True
            scheduler.stop()
            return scheduler

        scheduler = asyncio.run(run())
        assert scheduler.is_active is False
        assert engine.elapsed_in_step == 0

    def test_start_twice_keeps_single_loop(self):
        events = []
        engine = PlaybackEngine(_plan([3]), on_complete=events.append)

        async def run():
            engine.start()
            scheduler = TickScheduler(engine, interval=0)
            scheduler.start()
            scheduler.start()
            await scheduler.wait()

        asyncio.run(run())
        assert len(events) == 1

    def test_does_not_tick_stopped_engine(self):
        engine = PlaybackEngine(_plan([5]))

        async def run():
            scheduler = TickScheduler(engine, interval=0)
            scheduler.start()
            await scheduler.wait()

        asyncio.run(run())
        assert engine.elapsed_in_step == 0
