"""Stateful driver around the pure session transitions.

``IntervalStateMachine`` owns the single current state, reads the clock, and
executes the notification effects emitted by ``transition``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from pomo_cli.services.notifier import Notifier, NullNotifier

from .duration import progress_fraction
from .session import (
    CompleteState,
    Event,
    InputState,
    Phase,
    PlanDefaults,
    Quit,
    RunningState,
    SessionPlan,
    StartPlan,
    Submit,
    TerminatedState,
    Tick,
    TimerState,
    TogglePause,
    Transition,
    start_break,
    start_work,
    transition,
)

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class IntervalStateMachine:
    """Pomodoro work/break cycle driven by key events and one-second ticks."""

    def __init__(
        self,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] = _local_now,
        defaults: PlanDefaults | None = None,
    ):
        self.notifier = notifier or NullNotifier()
        self.clock = clock
        self.defaults = defaults or PlanDefaults()
        self.state: TimerState = InputState()
        self.last_error: str | None = None

    # -- read-only views ----------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def plan(self) -> SessionPlan | None:
        state = self.state
        if isinstance(state, TerminatedState):
            state = state.previous
        if isinstance(state, (RunningState, CompleteState)):
            return state.plan
        return None

    @property
    def session_index(self) -> int:
        if isinstance(self.state, RunningState):
            return self.state.session_index
        if isinstance(self.state, CompleteState):
            return self.state.plan.total_sessions
        return 0

    @property
    def is_paused(self) -> bool:
        return isinstance(self.state, RunningState) and self.state.is_paused

    @property
    def is_terminated(self) -> bool:
        return isinstance(self.state, TerminatedState)

    def remaining(self, now: datetime | None = None) -> timedelta:
        if not isinstance(self.state, RunningState):
            return timedelta(0)
        return self.state.remaining(now or self.clock())

    def elapsed(self, now: datetime | None = None) -> timedelta:
        if not isinstance(self.state, RunningState):
            return timedelta(0)
        return self.state.elapsed(now or self.clock())

    def progress(self, now: datetime | None = None) -> float:
        """Fraction of the current interval elapsed, clamped to [0, 1]."""
        if isinstance(self.state, CompleteState):
            return 1.0
        if not isinstance(self.state, RunningState):
            return 0.0
        return progress_fraction(self.elapsed(now), self.state.duration)

    # -- operations ---------------------------------------------------------

    def submit(self, work_text: str, break_text: str, sessions_text: str) -> bool:
        """Validate the setup form and start the first work interval.

        Returns False, leaving the phase unchanged, if any field is invalid.
        """
        if not isinstance(self.state, InputState):
            return False

        result = self._apply(
            Submit(
                work_text=work_text,
                break_text=break_text,
                sessions_text=sessions_text,
                now=self.clock(),
                defaults=self.defaults,
            )
        )
        self.last_error = result.error
        if result.error:
            logger.info("Rejected plan: %s", result.error)
            return False
        return True

    def start_plan(self, plan: SessionPlan) -> None:
        """Skip the setup form and start *plan* in the work phase."""
        self._apply(StartPlan(plan=plan, now=self.clock()))

    def start_work(self) -> None:
        """Re-arm a fresh work interval for the current session."""
        if isinstance(self.state, RunningState):
            self.state = start_work(
                self.state.plan, self.state.session_index, self.clock()
            )
            self._log_phase()

    def start_break(self) -> None:
        """Re-arm a fresh break interval for the current session."""
        if isinstance(self.state, RunningState):
            self.state = start_break(
                self.state.plan, self.state.session_index, self.clock()
            )
            self._log_phase()

    def toggle_pause(self, now: datetime | None = None) -> None:
        self._apply(TogglePause(now=now or self.clock()))
        if isinstance(self.state, RunningState):
            logger.debug("%s", "Paused" if self.state.is_paused else "Resumed")

    def on_tick(self, now: datetime | None = None) -> None:
        self._apply(Tick(now=now or self.clock()))

    def quit(self) -> None:
        self._apply(Quit())
        logger.info("Quit during %s phase", self.state.previous.phase.value)

    # -- internals ----------------------------------------------------------

    def _apply(self, event: Event) -> Transition:
        previous_phase = self.state.phase
        result = transition(self.state, event)
        self.state = result.state

        for notification in result.effects:
            try:
                self.notifier.notify(notification.title, notification.message)
            except Exception:
                logger.exception("Notifier raised; continuing")

        if self.state.phase != previous_phase or result.effects:
            self._log_phase()
        return result

    def _log_phase(self) -> None:
        state = self.state
        if isinstance(state, RunningState):
            logger.info(
                "Entered %s: session=%s/%s duration=%ss",
                state.phase.value,
                state.session_index + 1,
                state.plan.total_sessions,
                int(state.duration.total_seconds()),
            )
        elif isinstance(state, CompleteState):
            logger.info("All %s sessions complete", state.plan.total_sessions)
