"""
Periodic tick source for the playback engine.

Runs one asyncio task per engine that sleeps ``interval`` seconds and
then delivers a single tick, until the engine stops running.  Ticks are
delivered sequentially, so at most one is ever in flight.  Each tick is
counted as exactly one second regardless of scheduling jitter.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from app.praylude.player import PlaybackEngine

logger = logging.getLogger(__name__)


class TickScheduler:
    """Drive a :class:`PlaybackEngine` at a fixed cadence."""

    def __init__(self, engine: PlaybackEngine, interval: float = 1.0):
        self.engine = engine
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def is_active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking.  Must be called from within a running event loop."""
        if self.is_active:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        """Cancel the tick loop.  Nothing is in flight between ticks."""
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def wait(self) -> None:
        """Wait until the loop exits on its own (pause or completion)."""
        if self._task is not None:
            try:
                await self._task
            except asyncio.CancelledError:
                pass

    async def _run(self) -> None:
        while self.engine.is_running:
            await asyncio.sleep(self.interval)
            # Paused or reset while sleeping.
            if not self.engine.is_running:
                break
            self.engine.tick()
        logger.debug("Tick loop for '%s' stopped", self.engine.plan.name)
