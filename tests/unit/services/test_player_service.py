"""Tests for the player service (client-driven and server-driven ticks)."""

import asyncio
import threading
from pathlib import Path

import pytest
from fastapi import HTTPException

from app.content.provider import ContentProvider
from app.schemas.content import SessionStep
from app.schemas.player import PlayerCreate
from app.services.player_service import PlayerService

CONTENT_PATH = Path(__file__).resolve().parents[3] / "data" / "mock-techniques.json"


@pytest.fixture
def completions():
    return []


@pytest.fixture
def service(completions):
    return PlayerService(ContentProvider(CONTENT_PATH), on_complete=completions.append)


def _custom(*steps: tuple[str, str | None, int]) -> PlayerCreate:
    return PlayerCreate(session_name="Custom Session", steps=[
        SessionStep(section_id=section, technique_id=technique, duration=duration, order=i + 1)
        for i, (section, technique, duration) in enumerate(steps)])


class TestPlayerLifecycle:
    def test_create_standard(self, service):
        player = service.create(PlayerCreate())

        assert player.plan.name == "Standard Meditation"
        assert len(player.plan.steps) == 6
        assert player.is_playable is True
        assert player.state.is_running is False
        assert player.current_step.section_id == "section-welcome"

    def test_full_session_records_completion(self, service, completions):
        player = service.create(PlayerCreate())
        service.start(player.id)
        state = service.tick(player.id, seconds=1200).state

        assert state.completed is True
        assert state.is_running is False
        assert len(completions) == 1
        assert completions[0].total_duration == 1200
        assert completions[0].session_name == "Standard Meditation"

    def test_extra_ticks_after_completion_are_ignored(self, service, completions):
        player = service.create(PlayerCreate())
        service.start(player.id)
        service.tick(player.id, seconds=3000)
        assert len(completions) == 1

    def test_pause_and_reset(self, service, completions):
        player = service.create(PlayerCreate())
        service.start(player.id)
        service.tick(player.id, seconds=90)

        paused = service.pause(player.id)
        assert paused.state.is_running is False
        assert paused.state.current_step_index == 1
        assert paused.state.elapsed_in_step == 30

        reset = service.reset(player.id)
        assert reset.state.current_step_index == 0
        assert reset.state.elapsed_in_step == 0
        assert completions == []

    def test_unknown_player(self, service):
        with pytest.raises(HTTPException) as exc:
            service.get("nope")
        assert exc.value.status_code == 404

    def test_discard(self, service):
        player = service.create(PlayerCreate())
        service.discard(player.id)
        with pytest.raises(HTTPException):
            service.get(player.id)


class TestCustomSessions:
    def test_custom_with_skipped_section(self, service, completions):
        player = service.create(_custom(("section-welcome", "welcome-001", 30), ("section-mind", None, 0),
                                        ("section-body", "body-002", 60), ))
        assert player.plan.total_duration == 90

        service.start(player.id)
        service.tick(player.id, seconds=30)
        assert service.get(player.id).state.current_step_index == 2

        service.tick(player.id, seconds=60)
        assert completions[0].total_duration == 90
        assert completions[0].session_name == "Custom Session"

    def test_unplayable_custom_session_refused(self, service):
        player = service.create(_custom(("section-welcome", None, 0), ("section-mind", None, 0)))
        with pytest.raises(HTTPException) as exc:
            service.start(player.id)
        assert exc.value.status_code == 422

    @pytest.mark.parametrize("step", [
        ("section-nope", None, 0),
        ("section-mind", "nope-001", 60),
        ("section-mind", "welcome-001", 60),
        ("section-mind", "mind-001", 10),
        ("section-mind", "mind-001", 100000),
    ])
    def test_invalid_steps_rejected(self, service, step):
        with pytest.raises(HTTPException) as exc:
            service.create(_custom(step))
        assert exc.value.status_code == 422


class TestServerTicks:
    def test_scheduler_drives_completion(self, completions):
        service = PlayerService(ContentProvider(CONTENT_PATH), on_complete=completions.append, server_ticks=True,
                                tick_interval=0, )

        async def run():
            player = service.create(_custom(("section-welcome", "welcome-001", 30)))
            service.start(player.id)
            await service._schedulers[player.id].wait()
            await service.drain()
            return service.get(player.id)

        player = asyncio.run(run())

        assert player.state.completed is True
        assert len(completions) == 1
        assert completions[0].total_duration == 30

    def test_client_tick_refused_while_scheduler_runs(self, completions):
        service = PlayerService(ContentProvider(CONTENT_PATH), on_complete=completions.append, server_ticks=True,
                                tick_interval=3600, )

        async def run():
            player = service.create(PlayerCreate())
            service.start(player.id)
            with pytest.raises(HTTPException) as exc:
                service.tick(player.id, seconds=1200)
            state = service.get(player.id).state
            service.pause(player.id)
            return exc.value.status_code, state

        status_code, state = asyncio.run(run())

        assert status_code == 409
        assert state.current_step_index == 0
        assert state.total_elapsed == 0
        assert state.completed is False
        assert completions == []

    def test_client_tick_accepted_after_pause(self, completions):
        service = PlayerService(ContentProvider(CONTENT_PATH), on_complete=completions.append, server_ticks=True,
                                tick_interval=3600, )

        async def run():
            player = service.create(PlayerCreate())
            service.start(player.id)
            service.pause(player.id)
            return service.tick(player.id, seconds=5)

        assert asyncio.run(run()).state.total_elapsed == 0


# ======================================================================
# Completion sink
# ======================================================================


class TestCompletionSink:
    def test_sink_runs_off_the_event_loop(self):
        sink_threads = []

        def sink(event):
            sink_threads.append(threading.get_ident())

        service = PlayerService(ContentProvider(CONTENT_PATH), on_complete=sink)

        async def run():
            player = service.create(_custom(("section-welcome", "welcome-001", 30)))
            service.start(player.id)
            service.tick(player.id, seconds=30)
            await service.drain()
            return threading.get_ident()

        loop_thread = asyncio.run(run())

        assert len(sink_threads) == 1
        assert sink_threads[0] != loop_thread

    def test_completions_are_written_in_order(self):
        names = []
        service = PlayerService(ContentProvider(CONTENT_PATH),
                                on_complete=lambda event: names.append(event.session_name), )

        async def run():
            for name in ("First", "Second", "Third"):
                player = service.create(PlayerCreate(session_name=name))
                service.start(player.id)
                service.tick(player.id, seconds=1200)
            await service.drain()

        asyncio.run(run())

        assert names == ["First", "Second", "Third"]

    def test_failing_sink_does_not_break_playback(self):
        def sink(event):
            raise RuntimeError("database is locked")

        service = PlayerService(ContentProvider(CONTENT_PATH), on_complete=sink)

        async def run():
            player = service.create(_custom(("section-welcome", "welcome-001", 30)))
            service.start(player.id)
            service.tick(player.id, seconds=30)
            await service.drain()
            return service.get(player.id)

        assert asyncio.run(run()).state.completed is True

    def test_sink_called_inline_without_loop(self, service, completions):
        player = service.create(_custom(("section-welcome", "welcome-001", 30)))
        service.start(player.id)
        service.tick(player.id, seconds=30)
        assert len(completions) == 1


# ======================================================================
# Idle players
# ======================================================================


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestIdleEviction:
    def test_idle_player_evicted_on_create(self, completions):
        clock = FakeClock()
        service = PlayerService(ContentProvider(CONTENT_PATH), on_complete=completions.append, idle_timeout=600,
                                clock=clock, )
        stale = service.create(PlayerCreate())
        clock.now = 601

        fresh = service.create(PlayerCreate())

        with pytest.raises(HTTPException) as exc:
            service.get(stale.id)
        assert exc.value.status_code == 404
        assert service.get(fresh.id).id == fresh.id

    def test_recent_use_keeps_player(self, completions):
        clock = FakeClock()
        service = PlayerService(ContentProvider(CONTENT_PATH), on_complete=completions.append, idle_timeout=600,
                                clock=clock, )
        player = service.create(PlayerCreate())
        clock.now = 500
        service.start(player.id)
        clock.now = 1000

        service.create(PlayerCreate())

        assert service.get(player.id).state.is_running is True

    def test_no_timeout_keeps_players(self, service):
        player = service.create(PlayerCreate())
        for _ in range(3):
            service.create(PlayerCreate())
        assert service.get(player.id).id == player.id

    def test_server_driven_player_not_evicted(self, completions):
        clock = FakeClock()
        service = PlayerService(ContentProvider(CONTENT_PATH), on_complete=completions.append, server_ticks=True,
                                tick_interval=3600, idle_timeout=600, clock=clock, )

        async def run():
            player = service.create(PlayerCreate())
            service.start(player.id)
            clock.now = 10_000
            service.create(PlayerCreate())
            state = service.get(player.id).state
            service.shutdown()
            return state

        assert asyncio.run(run()).is_running is True
