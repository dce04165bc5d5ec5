"""Main entry point for pomo-cli."""

import logging
from datetime import timedelta

import typer
from rich.markup import escape

from pomo_cli import __version__
from pomo_cli.config import TimerConfig, get_config_manager
from pomo_cli.models.duration import parse_duration
from pomo_cli.models.exceptions import (
    DurationParseError,
    FlagParseError,
    PlanValidationError,
)
from pomo_cli.models.machine import IntervalStateMachine
from pomo_cli.models.session import PlanDefaults, SessionPlan, validate_plan
from pomo_cli.services.notifier import get_notifier
from pomo_cli.ui.timer_app import PomodoroApp
from pomo_cli.utils.exit_codes import ERROR_INVALID_FLAGS, SUCCESS
from pomo_cli.utils.logger import get_logger, set_log_level
from pomo_cli.utils.ui.console import get_console

HELP_TEXT = """🍅 Pomodoro Timer

Usage:
  pomo                           Interactive mode
  pomo -t <duration> -b <duration> [-s <sessions>]

Flags:
  -t, --timer <duration>     Work session duration (e.g., 25m, 1h30m, 45s)
  -b, --break <duration>     Break duration (e.g., 5m, 10m)
  -s, --sessions <number>    Number of sessions (default: 4)
  -h, --help                 Show this help
      --version              Show version

Examples:
  pomo                       # Interactive mode
  pomo -t 25m -b 5m          # 25min work, 5min break, 4 sessions
  pomo -t 1h -b 10m -s 2     # 1hour work, 10min break, 2 sessions
  pomo -t 45m -b 15m -s 6    # 45min work, 15min break, 6 sessions

Duration formats:
  - Minutes: 25m, 30m
  - Hours: 1h, 1h30m
  - Seconds: 90s, 300s
  - Just numbers default to minutes: 25 = 25m

Controls:
  - Tab/Arrow keys: Navigate inputs
  - Enter: Start timer
  - Space/P: Pause/Resume (during timer)
  - Q/Ctrl+C: Quit
"""

app = typer.Typer(name="pomo", add_completion=False)

console = get_console(highlight=False)
err_console = get_console(highlight=False, stderr=True)
logger = logging.getLogger(__name__)


def _parse_flag_duration(label: str, value: str) -> timedelta:
    try:
        duration = parse_duration(value)
    except DurationParseError as e:
        raise FlagParseError(f"Error parsing {label} duration: {e}") from e
    if duration <= timedelta(0):
        raise FlagParseError(f"Error parsing {label} duration: must be greater than zero")
    return duration


def resolve_flags(
    timer: str | None,
    break_: str | None,
    sessions: int | None,
    timer_config: TimerConfig,
) -> tuple[PlanDefaults, SessionPlan | None]:
    """Turn command-line flags into form defaults and, if complete, a plan.

    Raises:
        FlagParseError: if a supplied duration or session count is invalid.
    """
    if timer:
        _parse_flag_duration("timer", timer)
    if break_:
        _parse_flag_duration("break", break_)
    if sessions is not None and sessions <= 0:
        raise FlagParseError("Error parsing sessions: must be a positive integer")

    total_sessions = sessions if sessions is not None else timer_config.sessions
    defaults = PlanDefaults(
        work=timer or timer_config.work,
        break_=break_ or timer_config.break_,
        sessions=str(total_sessions),
    )

    if not (timer and break_):
        return defaults, None

    try:
        plan = validate_plan(
            parse_duration(timer), parse_duration(break_), total_sessions
        )
    except PlanValidationError as e:
        raise FlagParseError(str(e)) from e
    return defaults, plan


@app.command(add_help_option=False)
def run(
    timer: str | None = typer.Option(
        None, "--timer", "-t", help="Work session duration"
    ),
    break_: str | None = typer.Option(None, "--break", "-b", help="Break duration"),
    sessions: int | None = typer.Option(
        None, "--sessions", "-s", help="Number of sessions (default: 4)"
    ),
    show_help: bool = typer.Option(False, "--help", "-h", help="Show help"),
    version: bool = typer.Option(False, "--version", help="Show version"),
) -> None:
    """Terminal Pomodoro timer."""
    if show_help:
        console.print(HELP_TEXT, markup=False, end="")
        raise typer.Exit(SUCCESS)

    if version:
        console.print(__version__)
        raise typer.Exit(SUCCESS)

    get_logger()
    config = get_config_manager().config
    set_log_level(config.logging.level)

    try:
        defaults, plan = resolve_flags(timer, break_, sessions, config.timer)
    except FlagParseError as e:
        logger.error("%s", e)
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(ERROR_INVALID_FLAGS) from e

    machine = IntervalStateMachine(
        notifier=get_notifier(config.notifications),
        defaults=defaults,
    )
    if plan is not None:
        machine.start_plan(plan)

    logger.info("Starting in %s phase", machine.phase.value)
    PomodoroApp(machine).run()


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
