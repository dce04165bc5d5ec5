"""Rich renderables for each timer view.

These functions only turn state into text; the Textual app decides where the
text goes.
"""

from datetime import datetime

from rich.text import Text

from pomo_cli.models.duration import format_duration
from pomo_cli.models.session import Phase, RunningState, SessionPlan

TITLE_STYLE = "bold #FF6B6B"
TIMER_STYLE = "bold #FFE66D"
PAUSED_STYLE = "bold #FFA07A"
SESSION_STYLE = "#95E1D3"
HELP_STYLE = "#A8E6CF"
ERROR_STYLE = "bold red"

INPUT_HELP = "Tab/↑↓: Navigate • Enter: Start • Ctrl+C/Q: Quit\nFormat: 25m, 1h30m, 90s"
TIMER_HELP = "Space/P: Pause/Resume • Q: Quit"
COMPLETE_HELP = "Q: Quit"


def render_setup_title() -> Text:
    return Text("🍅 Pomodoro Timer Setup", style=TITLE_STYLE)


def render_timer_title(phase: Phase) -> Text:
    if phase == Phase.BREAK:
        return Text("☕ Break Time", style=TITLE_STYLE, justify="center")
    return Text("🍅 Focus Time", style=TITLE_STYLE, justify="center")


def render_session_counter(session_index: int, total_sessions: int) -> Text:
    return Text(
        f"Session {session_index + 1} of {total_sessions}",
        style=SESSION_STYLE,
        justify="center",
    )


def render_remaining(state: RunningState, now: datetime) -> Text:
    """Remaining time line, or the paused banner."""
    remaining = format_duration(state.remaining(now))
    if state.is_paused:
        return Text(
            f"⏸️ PAUSED - {remaining} remaining", style=PAUSED_STYLE, justify="center"
        )

    emoji = "🛋️" if state.phase == Phase.BREAK else "💪"
    return Text(f"{emoji} {remaining} remaining", style=TIMER_STYLE, justify="center")


def render_completion_title() -> Text:
    return Text("🎉 Pomodoro Session Complete!", style=TITLE_STYLE, justify="center")


def render_completion_summary(plan: SessionPlan) -> Text:
    return Text(
        f"Completed {plan.total_sessions} sessions\n"
        f"Total focus time: {format_duration(plan.total_focus_time)}\n"
        f"Total break time: {format_duration(plan.total_break_time)}",
        style=TIMER_STYLE,
        justify="center",
    )


def render_input_error(message: str | None) -> Text:
    if not message:
        return Text("")
    return Text(message, style=ERROR_STYLE)


def render_help(text: str) -> Text:
    return Text(text, style=HELP_STYLE)
