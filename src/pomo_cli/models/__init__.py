"""Timer domain models: duration parsing and the interval state machine.

``IntervalStateMachine`` lives in ``pomo_cli.models.machine``.
"""

from .duration import format_duration, parse_duration
from .exceptions import (
    DurationParseError,
    FlagParseError,
    NotifierError,
    PlanValidationError,
    PomoError,
)
from .session import (
    CompleteState,
    InputState,
    Notification,
    Phase,
    PlanDefaults,
    RunningState,
    SessionPlan,
    TerminatedState,
    build_plan,
    transition,
    validate_plan,
)

__all__ = [
    "CompleteState",
    "DurationParseError",
    "FlagParseError",
    "InputState",
    "Notification",
    "NotifierError",
    "Phase",
    "PlanDefaults",
    "PlanValidationError",
    "PomoError",
    "RunningState",
    "SessionPlan",
    "TerminatedState",
    "build_plan",
    "format_duration",
    "parse_duration",
    "transition",
    "validate_plan",
]
