"""Unit tests for main.py, the CLI entry point.

Tests focus on:
- -h/--help and --version output
- flag validation and exit codes
- how flags decide between the setup form and an immediate start
"""

from __future__ import annotations

import json
import logging
from datetime import timedelta

import pytest
from typer.testing import CliRunner

from pomo_cli import __version__
from pomo_cli.config import TimerConfig
from pomo_cli.main import app, resolve_flags
from pomo_cli.models.exceptions import FlagParseError
from pomo_cli.models.session import Phase, PlanDefaults, SessionPlan
from pomo_cli.utils.exit_codes import ERROR_INVALID_FLAGS, SUCCESS

runner = CliRunner()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _invoke(*args, catch_exceptions: bool = True):
    return runner.invoke(app, list(args), catch_exceptions=catch_exceptions)


@pytest.fixture()
def fake_app(mocker):
    """Replace the Textual app so no terminal UI starts."""
    return mocker.patch("pomo_cli.main.PomodoroApp")


def _started_machine(fake_app):
    fake_app.assert_called_once()
    return fake_app.call_args.args[0]


# ---------------------------------------------------------------------------
# Help and version
# ---------------------------------------------------------------------------


class TestHelp:
    @pytest.mark.parametrize("flag", ["-h", "--help"])
    def test_help_exits_zero(self, flag, fake_app):
        result = _invoke(flag)
        assert result.exit_code == SUCCESS
        assert "🍅 Pomodoro Timer" in result.output
        assert "-t, --timer <duration>" in result.output
        assert "Just numbers default to minutes" in result.output
        fake_app.assert_not_called()

    def test_help_wins_over_other_flags(self, fake_app):
        result = _invoke("-t", "nonsense", "-h")
        assert result.exit_code == SUCCESS
        fake_app.assert_not_called()

    def test_version(self, fake_app):
        result = _invoke("--version")
        assert result.exit_code == SUCCESS
        assert __version__ in result.output
        fake_app.assert_not_called()


# ---------------------------------------------------------------------------
# Flag errors
# ---------------------------------------------------------------------------


class TestInvalidFlags:
    def test_bad_timer(self, fake_app):
        result = _invoke("-t", "abc", "-b", "5m")
        assert result.exit_code == ERROR_INVALID_FLAGS
        assert "Error parsing timer duration" in result.output
        fake_app.assert_not_called()

    def test_bad_break(self, fake_app):
        result = _invoke("-t", "25m", "-b", "5x")
        assert result.exit_code == ERROR_INVALID_FLAGS
        assert "Error parsing break duration" in result.output

    def test_bad_timer_alone_is_still_rejected(self, fake_app):
        result = _invoke("-t", "soon")
        assert result.exit_code == ERROR_INVALID_FLAGS
        fake_app.assert_not_called()

    def test_zero_duration_rejected(self, fake_app):
        result = _invoke("-t", "0", "-b", "5m")
        assert result.exit_code == ERROR_INVALID_FLAGS
        assert "must be greater than zero" in result.output

    def test_out_of_range_duration_rejected(self, fake_app):
        result = _invoke("-t", "99999999999h", "-b", "5m")
        assert result.exit_code == ERROR_INVALID_FLAGS
        assert "Error parsing timer duration" in result.output
        assert "out of range" in result.output
        fake_app.assert_not_called()

    def test_zero_sessions_rejected(self, fake_app):
        result = _invoke("-t", "25m", "-b", "5m", "-s", "0")
        assert result.exit_code == ERROR_INVALID_FLAGS
        assert "Error parsing sessions" in result.output

    def test_non_integer_sessions_is_usage_error(self, fake_app):
        result = _invoke("-s", "four")
        assert result.exit_code == 2
        fake_app.assert_not_called()


# ---------------------------------------------------------------------------
# Starting the timer
# ---------------------------------------------------------------------------


class TestStart:
    def test_no_flags_opens_setup_form(self, fake_app):
        result = _invoke()
        assert result.exit_code == SUCCESS
        machine = _started_machine(fake_app)
        assert machine.phase == Phase.INPUT
        assert machine.defaults == PlanDefaults()
        fake_app.return_value.run.assert_called_once()

    def test_timer_and_break_start_immediately(self, fake_app):
        result = _invoke("-t", "45m", "-b", "15m", "-s", "6")
        assert result.exit_code == SUCCESS
        machine = _started_machine(fake_app)
        assert machine.phase == Phase.WORK
        assert machine.session_index == 0
        assert machine.plan == SessionPlan(
            timedelta(minutes=45), timedelta(minutes=15), 6
        )

    def test_sessions_default_to_four(self, fake_app):
        _invoke("--timer", "1h", "--break", "10m")
        assert _started_machine(fake_app).plan.total_sessions == 4

    def test_bare_number_means_minutes(self, fake_app):
        _invoke("-t", "25", "-b", "5")
        plan = _started_machine(fake_app).plan
        assert plan.work_duration == timedelta(minutes=25)
        assert plan.break_duration == timedelta(minutes=5)

    def test_partial_flags_prefill_form(self, fake_app):
        _invoke("-t", "50m", "-s", "2")
        machine = _started_machine(fake_app)
        assert machine.phase == Phase.INPUT
        assert machine.defaults == PlanDefaults(work="50m", break_="5m", sessions="2")

    def test_config_file_supplies_defaults(self, fake_app, isolated_dirs):
        config_dir = isolated_dirs / "config"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(
            json.dumps({"timer": {"work": "30m", "break": "3m", "sessions": 3}})
        )
        _invoke()
        assert _started_machine(fake_app).defaults == PlanDefaults(
            work="30m", break_="3m", sessions="3"
        )

    def test_config_file_sets_log_level(self, fake_app, isolated_dirs):
        config_dir = isolated_dirs / "config"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(
            json.dumps({"logging": {"level": "DEBUG"}})
        )
        _invoke()
        assert logging.getLogger("pomo_cli").level == logging.DEBUG


# ---------------------------------------------------------------------------
# resolve_flags
# ---------------------------------------------------------------------------


class TestResolveFlags:
    def test_nothing_given(self):
        defaults, plan = resolve_flags(None, None, None, TimerConfig())
        assert defaults == PlanDefaults()
        assert plan is None

    def test_both_durations_give_plan(self):
        defaults, plan = resolve_flags("1h30m", "90s", 2, TimerConfig())
        assert plan == SessionPlan(timedelta(minutes=90), timedelta(seconds=90), 2)
        assert defaults.work == "1h30m"

    def test_break_only_is_a_default(self):
        defaults, plan = resolve_flags(None, "10m", None, TimerConfig(work="20m"))
        assert plan is None
        assert defaults == PlanDefaults(work="20m", break_="10m", sessions="4")

    def test_negative_sessions(self):
        with pytest.raises(FlagParseError, match="positive integer"):
            resolve_flags("25m", "5m", -1, TimerConfig())

    def test_negative_duration(self):
        with pytest.raises(FlagParseError, match="Error parsing break duration"):
            resolve_flags("25m", "-5m", None, TimerConfig())
