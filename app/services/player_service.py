"""
Player service.

Owns the live playback engines of this process, keyed by a generated
player id.  Custom steps are validated against the content catalogue
before a plan is built.  When a session completes, the engine's event is
handed to the configured completion sink (by default the history store).

When ``server_ticks`` is enabled, starting a player also starts a
:class:`TickScheduler` on the running event loop; otherwise the client
drives the clock through :meth:`PlayerService.tick`.  A player has one
tick source at a time: client ticks are refused while its scheduler runs.

The completion sink does blocking database I/O.  Inside an event loop it
is handed to a single worker thread, so completions are written one at a
time and never on the loop itself; :meth:`PlayerService.drain` awaits
the writes still in flight.  Without a loop the sink is called inline.

Players idle for longer than ``idle_timeout`` seconds are evicted the
next time a player is created, unless a scheduler is driving them.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import time
import uuid
from typing import Callable, Optional

from fastapi import HTTPException, status
from pydantic import ValidationError

from app.content.provider import ContentProvider
from app.praylude.player import PlaybackEngine
from app.praylude.scheduler import TickScheduler
from app.schemas.content import SessionStep
from app.schemas.player import PlayerCreate, PlayerResponse, SessionCompleted

logger = logging.getLogger(__name__)

CompletionSink = Callable[[SessionCompleted], None]


class PlayerService:
    """Service for session playback."""

    def __init__(self, content: ContentProvider, on_complete: Optional[CompletionSink] = None,
                 server_ticks: bool = False, tick_interval: float = 1.0, idle_timeout: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic, ):
        self.content = content
        self.on_complete = on_complete
        self.server_ticks = server_ticks
        self.tick_interval = tick_interval
        self._engines: dict[str, PlaybackEngine] = {}
        self._schedulers: dict[str, TickScheduler] = {}
        self.idle_timeout = idle_timeout
        self.clock = clock
        self._last_used: dict[str, float] = {}
        self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="completion-sink")
        self._pending: set[asyncio.Future] = set()

    def create(self, data: PlayerCreate) -> PlayerResponse:
        if data.steps is not None:
            self._validate_steps(data.steps)
        try:
            plan = self.content.build_plan(data.session_name, data.steps)
        except ValidationError as e:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"Invalid session: {e}", )

        self._evict_idle()
        player_id = uuid.uuid4().hex
        self._engines[player_id] = PlaybackEngine(plan, on_complete=self._handle_completion)
        self._last_used[player_id] = self.clock()
        logger.info("Created player %s for '%s' (%d steps, %ds)", player_id, plan.name, len(plan.steps),
                    plan.total_duration)
        return self._to_response(player_id)

    def get(self, player_id: str) -> PlayerResponse:
        self._get_engine(player_id)
        return self._to_response(player_id)

    def start(self, player_id: str) -> PlayerResponse:
        engine = self._get_engine(player_id)
        if not engine.start():
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                                detail="Session has no playable steps", )
        if self.server_ticks and engine.is_running:
            scheduler = self._schedulers.setdefault(player_id, TickScheduler(engine, self.tick_interval))
            scheduler.start()
        return self._to_response(player_id)

    def pause(self, player_id: str) -> PlayerResponse:
        self._get_engine(player_id).pause()
        self._stop_scheduler(player_id)
        return self._to_response(player_id)

    def tick(self, player_id: str, seconds: int = 1) -> PlayerResponse:
        engine = self._get_engine(player_id)
        scheduler = self._schedulers.get(player_id)
        if scheduler is not None and scheduler.is_active:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                                detail="Player is driven by server ticks", )
        for _ in range(seconds):
            if not engine.is_running:
                break
            engine.tick()
        return self._to_response(player_id)

    def reset(self, player_id: str) -> PlayerResponse:
        self._get_engine(player_id).reset()
        self._stop_scheduler(player_id)
        return self._to_response(player_id)

    def discard(self, player_id: str) -> None:
        self._get_engine(player_id)
        self._stop_scheduler(player_id)
        del self._engines[player_id]
        self._last_used.pop(player_id, None)

    async def drain(self) -> None:
        """Wait for completions still being written by the sink."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def shutdown(self) -> None:
        """Stop all schedulers and let queued completions finish."""
        for player_id in list(self._schedulers):
            self._stop_scheduler(player_id)
        self._executor.shutdown(wait=True)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _handle_completion(self, event: SessionCompleted) -> None:
        if self.on_complete is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.on_complete(event)
            return

        future = loop.run_in_executor(self._executor, self.on_complete, event)
        self._pending.add(future)
        future.add_done_callback(self._completion_done)

    def _completion_done(self, future: asyncio.Future) -> None:
        self._pending.discard(future)
        if not future.cancelled() and future.exception() is not None:
            logger.error("Completion sink failed: %s", future.exception())

    def _evict_idle(self) -> None:
        if self.idle_timeout is None:
            return
        now = self.clock()
        for player_id, last_used in list(self._last_used.items()):
            scheduler = self._schedulers.get(player_id)
            if scheduler is not None and scheduler.is_active:
                continue
            if now - last_used > self.idle_timeout:
                self._stop_scheduler(player_id)
                self._engines.pop(player_id, None)
                del self._last_used[player_id]
                logger.info("Evicted idle player %s", player_id)

    def _get_engine(self, player_id: str) -> PlaybackEngine:
        engine = self._engines.get(player_id)
        if engine is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Player not found", )
        self._last_used[player_id] = self.clock()
        return engine

    def _stop_scheduler(self, player_id: str) -> None:
        scheduler = self._schedulers.pop(player_id, None)
        if scheduler is not None:
            scheduler.stop()

    def _validate_steps(self, steps: list[SessionStep]) -> None:
        for step in steps:
            if self.content.get_section_by_id(step.section_id) is None:
                raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                                    detail=f"Unknown section: '{step.section_id}'", )
            if step.technique_id is None:
                continue

            technique = self.content.get_technique_by_id(step.technique_id)
            if technique is None:
                raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                                    detail=f"Unknown technique: '{step.technique_id}'", )
            if technique.section_id != step.section_id:
                raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                                    detail=(f"Technique '{technique.id}' does not belong to "
                                            f"section '{step.section_id}'"), )
            if not technique.min_duration <= step.duration <= technique.max_duration:
                raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                                    detail=(f"Duration for '{technique.id}' must be between "
                                            f"{technique.min_duration} and {technique.max_duration} seconds"), )

    def _to_response(self, player_id: str) -> PlayerResponse:
        engine = self._engines[player_id]
        return PlayerResponse(id=player_id, plan=engine.plan, state=engine.snapshot(),
                              current_step=engine.current_step, is_playable=engine.is_playable,
                              last_completion=engine.last_completion, )
