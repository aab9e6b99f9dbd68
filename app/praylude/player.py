"""
Session playback engine.

A single-threaded state machine driven by a one-second tick.  It walks an
ordered :class:`SessionPlan` step by step, tracks the seconds elapsed in
the current step, and signals completion once the last step finishes.

State
-----
- ``current_step_index``: 0-based index into the plan's steps.
- ``elapsed_in_step``: seconds spent in the current step,
  ``0 <= elapsed_in_step <= duration``.
- ``is_running``: whether ticks advance the clock.

Skipped steps
-------------
A step without a technique stays in the sequence with an effective
duration of 0.  Zero-length steps are passed through immediately: on the
same tick that reaches them, and on :meth:`PlaybackEngine.start` when
they lead the plan.  The engine therefore never spends a second on an
empty step, and a plan of durations ``d1..dN`` completes after exactly
``sum(d)`` ticks.

Completion
----------
The engine persists nothing.  On completion it emits a
:class:`SessionCompleted` event to the optional ``on_complete`` callback,
whose owner (the history store) records it.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from app.schemas.content import SessionPlan, SessionStep
from app.schemas.player import PlaybackState, SessionCompleted

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[SessionCompleted], None]


class PlaybackEngine:
    """Countdown/advance state machine for one session plan."""

    def __init__(self, plan: SessionPlan, on_complete: Optional[CompletionCallback] = None):
        self.plan = plan
        self.on_complete = on_complete
        self._durations: list[int] = plan.durations

        self.current_step_index = 0
        self.elapsed_in_step = 0
        self.is_running = False
        self.last_completion: Optional[SessionCompleted] = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def is_playable(self) -> bool:
        return self.plan.is_playable

    @property
    def completed(self) -> bool:
        return self.last_completion is not None

    @property
    def current_step(self) -> Optional[SessionStep]:
        if not self.plan.steps:
            return None
        return self.plan.steps[self.current_step_index]

    @property
    def current_duration(self) -> int:
        if not self._durations:
            return 0
        return self._durations[self.current_step_index]

    @property
    def total_duration(self) -> int:
        return sum(self._durations)

    @property
    def total_elapsed(self) -> int:
        if self.completed:
            return self.total_duration
        return sum(self._durations[:self.current_step_index]) + self.elapsed_in_step

    def snapshot(self) -> PlaybackState:
        return PlaybackState(current_step_index=self.current_step_index, elapsed_in_step=self.elapsed_in_step,
                             is_running=self.is_running, completed=self.completed,
                             total_elapsed=self.total_elapsed, total_duration=self.total_duration, )

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Start or resume playback.

        Returns ``False`` (and changes nothing) when the plan has no
        playable step.  Starting after a completed run plays the session
        again from the beginning.
        """
        if not self.is_playable:
            logger.debug("Refusing to start '%s': no playable steps", self.plan.name)
            return False
        if self.is_running:
            return True
        if self.completed:
            self._rewind()

        self.is_running = True
        self._advance()
        return True

    def pause(self) -> None:
        self.is_running = False

    def toggle(self) -> bool:
        """Flip between running and paused.  Returns the new ``is_running``."""
        if self.is_running:
            self.pause()
        else:
            self.start()
        return self.is_running

    def reset(self) -> None:
        """Stop and return to the beginning.  Never emits a completion."""
        self._rewind()

    def tick(self) -> Optional[SessionCompleted]:
        """Advance the clock by one second.

        Returns the :class:`SessionCompleted` event if this tick finished
        the session, ``None`` otherwise.  Ignored while paused.
        """
        if not self.is_running:
            return None
        self.elapsed_in_step += 1
        return self._advance()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _rewind(self) -> None:
        self.is_running = False
        self.current_step_index = 0
        self.elapsed_in_step = 0
        self.last_completion = None

    def _advance(self) -> Optional[SessionCompleted]:
        # Loops so that consecutive zero-length steps are all passed in one go.
        while self.elapsed_in_step >= self._durations[self.current_step_index]:
            if self.current_step_index < len(self._durations) - 1:
                self.current_step_index += 1
                self.elapsed_in_step = 0
            else:
                return self._complete()
        return None

    def _complete(self) -> SessionCompleted:
        self.is_running = False
        self.elapsed_in_step = 0
        event = SessionCompleted(session_name=self.plan.name, total_duration=self.total_duration)
        self.last_completion = event
        logger.info("Session '%s' completed (%ds)", event.session_name, event.total_duration)

        if self.on_complete is not None:
            self.on_complete(event)
        return event
