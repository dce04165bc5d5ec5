"""Pure interval state machine for Pomodoro sessions.

Every phase has its own immutable state type, and ``transition`` maps a
``(state, event)`` pair to the next state plus the notifications to emit.
Nothing in this module reads the clock or performs I/O; callers pass ``now``
in with each event and execute the returned effects themselves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import ClassVar, Union

from .duration import parse_duration
from .exceptions import DurationParseError, PlanValidationError

DEFAULT_WORK = "25m"
DEFAULT_BREAK = "5m"
DEFAULT_SESSIONS = "4"

_SESSIONS_RE = re.compile(r"[0-9]+")


class Phase(str, Enum):
    """Stage of the timer."""

    INPUT = "input"
    WORK = "work"
    BREAK = "break"
    COMPLETE = "complete"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class SessionPlan:
    """Work/break lengths and session count, fixed for the whole run."""

    work_duration: timedelta
    break_duration: timedelta
    total_sessions: int

    @property
    def total_focus_time(self) -> timedelta:
        return self.work_duration * self.total_sessions

    @property
    def total_break_time(self) -> timedelta:
        # The final break is not counted towards the summary.
        return self.break_duration * max(0, self.total_sessions - 1)


@dataclass(frozen=True)
class PlanDefaults:
    """Values used for blank form fields."""

    work: str = DEFAULT_WORK
    break_: str = DEFAULT_BREAK
    sessions: str = DEFAULT_SESSIONS


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InputState:
    """Waiting for the user to submit a plan."""

    phase: ClassVar[Phase] = Phase.INPUT


@dataclass(frozen=True)
class RunningState:
    """A work or break interval in progress (possibly paused)."""

    phase: Phase
    plan: SessionPlan
    session_index: int
    started_at: datetime
    duration: timedelta
    paused_total: timedelta = timedelta(0)
    paused_at: datetime | None = None

    @property
    def is_paused(self) -> bool:
        return self.paused_at is not None

    def elapsed(self, now: datetime) -> timedelta:
        """Active time spent in this interval, excluding pauses."""
        reference = self.paused_at if self.paused_at is not None else now
        return reference - self.started_at - self.paused_total

    def remaining(self, now: datetime) -> timedelta:
        return self.duration - self.elapsed(now)


@dataclass(frozen=True)
class CompleteState:
    """All sessions finished."""

    plan: SessionPlan
    phase: ClassVar[Phase] = Phase.COMPLETE


@dataclass(frozen=True)
class TerminatedState:
    """The user quit; no further events are processed."""

    previous: "TimerState"
    phase: ClassVar[Phase] = Phase.TERMINATED


TimerState = Union[InputState, RunningState, CompleteState, TerminatedState]


# ---------------------------------------------------------------------------
# Events and effects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Submit:
    work_text: str
    break_text: str
    sessions_text: str
    now: datetime
    defaults: PlanDefaults = field(default_factory=PlanDefaults)


@dataclass(frozen=True)
class StartPlan:
    """Start a pre-validated plan directly in the Work phase."""

    plan: SessionPlan
    now: datetime


@dataclass(frozen=True)
class TogglePause:
    now: datetime


@dataclass(frozen=True)
class Tick:
    now: datetime


@dataclass(frozen=True)
class Quit:
    pass


Event = Union[Submit, StartPlan, TogglePause, Tick, Quit]


@dataclass(frozen=True)
class Notification:
    """Desktop notification to emit when an interval elapses."""

    title: str
    message: str


@dataclass(frozen=True)
class Transition:
    """Result of applying an event: the new state and side effects."""

    state: TimerState
    effects: tuple[Notification, ...] = ()
    error: str | None = None


# ---------------------------------------------------------------------------
# Plan validation
# ---------------------------------------------------------------------------


def build_plan(
    work_text: str,
    break_text: str,
    sessions_text: str,
    defaults: PlanDefaults | None = None,
) -> SessionPlan:
    """Build a SessionPlan from raw form text, applying defaults for blanks.

    Raises:
        PlanValidationError: if any field fails to parse or is not positive.
    """
    defaults = defaults or PlanDefaults()

    work_text = work_text.strip() or defaults.work
    break_text = break_text.strip() or defaults.break_
    sessions_text = sessions_text.strip() or defaults.sessions

    try:
        work_duration = parse_duration(work_text)
    except DurationParseError as e:
        raise PlanValidationError(f"Invalid work duration: {e}") from e

    try:
        break_duration = parse_duration(break_text)
    except DurationParseError as e:
        raise PlanValidationError(f"Invalid break duration: {e}") from e

    if not _SESSIONS_RE.fullmatch(sessions_text):
        raise PlanValidationError(f"Invalid session count: {sessions_text!r}")
    total_sessions = int(sessions_text)

    return validate_plan(work_duration, break_duration, total_sessions)


def validate_plan(
    work_duration: timedelta, break_duration: timedelta, total_sessions: int
) -> SessionPlan:
    """Reject zero or negative durations and session counts."""
    if work_duration <= timedelta(0):
        raise PlanValidationError("Work duration must be greater than zero")
    if break_duration <= timedelta(0):
        raise PlanValidationError("Break duration must be greater than zero")
    if total_sessions <= 0:
        raise PlanValidationError("Sessions must be a positive integer")
    return SessionPlan(
        work_duration=work_duration,
        break_duration=break_duration,
        total_sessions=total_sessions,
    )


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def start_work(plan: SessionPlan, session_index: int, now: datetime) -> RunningState:
    return RunningState(
        phase=Phase.WORK,
        plan=plan,
        session_index=session_index,
        started_at=now,
        duration=plan.work_duration,
    )


def start_break(plan: SessionPlan, session_index: int, now: datetime) -> RunningState:
    return RunningState(
        phase=Phase.BREAK,
        plan=plan,
        session_index=session_index,
        started_at=now,
        duration=plan.break_duration,
    )


def notification_for(
    phase: Phase, session_index: int, total_sessions: int
) -> Notification:
    """Notification text for the end of a work or break interval."""
    if phase == Phase.BREAK:
        if session_index + 1 >= total_sessions:
            message = "All sessions completed! Great work! 🎉"
        else:
            message = (
                f"Break over! Starting session {session_index + 2}/{total_sessions}"
            )
        return Notification(title="Break Complete!", message=message)

    return Notification(
        title="Work Session Complete!",
        message=f"Session {session_index + 1}/{total_sessions} done! Time for a break! ☕",
    )


def transition(state: TimerState, event: Event) -> Transition:
    """Apply *event* to *state*. Events not valid in the current phase are no-ops."""
    if isinstance(state, TerminatedState):
        return Transition(state)

    if isinstance(event, Quit):
        return Transition(TerminatedState(previous=state))

    if isinstance(state, InputState):
        if isinstance(event, Submit):
            try:
                plan = build_plan(
                    event.work_text,
                    event.break_text,
                    event.sessions_text,
                    event.defaults,
                )
            except PlanValidationError as e:
                return Transition(state, error=str(e))
            return Transition(start_work(plan, 0, event.now))
        if isinstance(event, StartPlan):
            return Transition(start_work(event.plan, 0, event.now))
        return Transition(state)

    if isinstance(state, RunningState):
        if isinstance(event, TogglePause):
            return Transition(_toggle_pause(state, event.now))
        if isinstance(event, Tick):
            return _tick(state, event.now)
        return Transition(state)

    return Transition(state)


def _toggle_pause(state: RunningState, now: datetime) -> RunningState:
    if state.paused_at is not None:
        return replace(
            state,
            paused_total=state.paused_total + (now - state.paused_at),
            paused_at=None,
        )
    return replace(state, paused_at=now)


def _tick(state: RunningState, now: datetime) -> Transition:
    if state.is_paused or state.remaining(now) > timedelta(0):
        return Transition(state)

    plan = state.plan
    notification = notification_for(
        state.phase, state.session_index, plan.total_sessions
    )

    if state.phase == Phase.WORK:
        return Transition(start_break(plan, state.session_index, now), (notification,))

    next_index = state.session_index + 1
    if next_index >= plan.total_sessions:
        return Transition(CompleteState(plan=plan), (notification,))
    return Transition(start_work(plan, next_index, now), (notification,))
