"""Custom exceptions for pomo-cli."""


class PomoError(Exception):
    """Base exception for all pomo-cli errors."""


class DurationParseError(PomoError, ValueError):
    """Raised when a duration string cannot be parsed."""


class PlanValidationError(PomoError, ValueError):
    """Raised when work/break/sessions input does not form a valid plan."""


class FlagParseError(PomoError):
    """Raised when a command-line flag value is invalid."""


class NotifierError(PomoError):
    """Raised when a notification or sound command cannot be dispatched."""
