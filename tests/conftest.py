"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state and from
the wall clock.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

T0 = datetime(2026, 1, 1, 9, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock for deterministic timing tests."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now

    def at(self, seconds: float) -> datetime:
        """Jump to *seconds* after the start time."""
        self.now = T0 + timedelta(seconds=seconds)
        return self.now


class RecordingNotifier:
    """Notifier that remembers every call."""

    def __init__(self):
        self.calls: list[tuple[str, str]] = []

    def notify(self, title: str, message: str) -> None:
        self.calls.append((title, message))


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point config and log directories at *tmp_path* and reset singletons."""
    _reset_singletons()

    with patch("pomo_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        with patch(
            "pomo_cli.config.user_config_dir", return_value=str(tmp_path / "config")
        ):
            yield tmp_path

    _reset_singletons()


def _reset_singletons() -> None:
    import pomo_cli.config as config_mod
    import pomo_cli.utils.logger as logger_mod

    config_mod._config_manager = None
    logger_mod._logger = None
    app_logger = logging.getLogger("pomo_cli")
    app_logger.propagate = True
    app_logger.setLevel(logging.NOTSET)
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
