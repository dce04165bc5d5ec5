"""Duration parsing and formatting for work/break intervals.

Accepted forms:

- a plain non-negative integer, read as whole minutes (``"25"``)
- a compound expression of ``<number><unit>`` parts (``"1h30m"``, ``"90s"``,
  ``"1.5h"``) with units ``h``, ``m``, ``s``, ``ms``, ``us``/``µs`` and ``ns``
"""

from __future__ import annotations

import re
from datetime import timedelta

from .exceptions import DurationParseError

_UNIT_SECONDS: dict[str, float] = {
    "h": 3600.0,
    "m": 60.0,
    "s": 1.0,
    "ms": 1e-3,
    "us": 1e-6,
    "µs": 1e-6,  # U+00B5 micro sign
    "μs": 1e-6,  # U+03BC greek mu
    "ns": 1e-9,
}

_MINUTES_RE = re.compile(r"[0-9]+")
_COMPONENT = r"(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|μs|ms|h|m|s)"
_COMPOUND_RE = re.compile(rf"([+-]?)((?:{_COMPONENT})+)")
_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|h|m|s)")


def parse_duration(text: str) -> timedelta:
    """Parse *text* into a timedelta.

    Raises:
        DurationParseError: if the text is empty, malformed or too large to
            represent.
    """
    value = (text or "").strip()
    if not value:
        raise DurationParseError("empty duration")

    if _MINUTES_RE.fullmatch(value):
        return _span(value, minutes=int(value))

    if value in ("+0", "-0"):
        return timedelta(0)

    match = _COMPOUND_RE.fullmatch(value)
    if match is None:
        raise DurationParseError(f"invalid duration {value!r}")

    sign, body = match.groups()
    total = 0.0
    for number, unit in _PART_RE.findall(body):
        total += float(number) * _UNIT_SECONDS[unit]

    if sign == "-":
        total = -total
    return _span(value, seconds=total)


def _span(value: str, **kwargs: float) -> timedelta:
    try:
        return timedelta(**kwargs)
    except OverflowError as e:
        raise DurationParseError(f"duration out of range {value!r}") from e


def format_duration(duration: timedelta) -> str:
    """Format a span at second granularity: ``MM:SS`` or ``H:MM:SS``."""
    if duration < timedelta(0):
        return "0s"

    total_seconds = int(duration.total_seconds())
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def progress_fraction(elapsed: timedelta, total: timedelta) -> float:
    """Return elapsed/total clamped to [0, 1]; an empty span counts as done."""
    total_seconds = total.total_seconds()
    if total_seconds <= 0:
        return 1.0
    return min(1.0, max(0.0, elapsed.total_seconds() / total_seconds))
