"""Textual application: setup form, running timer and completion summary."""

from __future__ import annotations

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Input, ProgressBar, Static

from pomo_cli.models.machine import IntervalStateMachine
from pomo_cli.models.session import CompleteState, Phase, RunningState

from . import views

FIELD_IDS = ("work-input", "break-input", "sessions-input")


class FieldInput(Input):
    """Setup form field that leaves ``q`` to the app's quit binding."""

    def check_consume_key(self, key: str, character: str | None) -> bool:
        if key == "q":
            return False
        return super().check_consume_key(key, character)


class PomodoroApp(App):
    """Full-screen Pomodoro timer."""

    CSS = """
    Screen {
        align: center middle;
    }

    #input-view, #timer-view, #complete-view {
        width: 60;
        height: auto;
    }

    #timer-view, #complete-view {
        align-horizontal: center;
    }

    .field {
        border: round #4ECDC4;
        margin-bottom: 1;
    }

    .field:focus {
        border: round #FF6B6B;
    }

    #input-error {
        height: auto;
    }

    #timer-progress {
        width: 50;
        margin: 1 0;
    }

    .help {
        margin-top: 2;
    }
    """

    AUTO_FOCUS = None

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("q", "quit", "Quit", priority=True),
        Binding("down", "next_field", "Next field", show=False),
        Binding("up", "previous_field", "Previous field", show=False),
        Binding("space", "toggle_pause", "Pause/Resume", show=False),
        Binding("p", "toggle_pause", "Pause/Resume", show=False),
    ]

    def __init__(self, machine: IntervalStateMachine, tick_interval: float = 1.0):
        super().__init__()
        self.machine = machine
        self.tick_interval = tick_interval
        self.active_field = 0

    def compose(self) -> ComposeResult:
        defaults = self.machine.defaults
        with Vertical(id="input-view"):
            yield Static(views.render_setup_title(), id="setup-title")
            yield FieldInput(
                placeholder=defaults.work,
                max_length=10,
                id="work-input",
                classes="field",
            )
            yield FieldInput(
                placeholder=defaults.break_,
                max_length=10,
                id="break-input",
                classes="field",
            )
            yield FieldInput(
                placeholder=defaults.sessions,
                max_length=3,
                id="sessions-input",
                classes="field",
            )
            yield Static("", id="input-error")
            yield Static(views.render_help(views.INPUT_HELP), classes="help")

        with Vertical(id="timer-view"):
            yield Static("", id="timer-title")
            yield Static("", id="timer-session")
            yield ProgressBar(
                total=1.0, show_eta=False, show_percentage=True, id="timer-progress"
            )
            yield Static("", id="timer-remaining")
            yield Static(views.render_help(views.TIMER_HELP), classes="help")

        with Vertical(id="complete-view"):
            yield Static(views.render_completion_title(), id="complete-title")
            yield Static("", id="complete-stats")
            yield Static(views.render_help(views.COMPLETE_HELP), classes="help")

    def on_mount(self) -> None:
        self.query_one("#work-input").border_title = "Work Duration"
        self.query_one("#break-input").border_title = "Break Duration"
        self.query_one("#sessions-input").border_title = "Sessions"
        self.set_interval(self.tick_interval, self.handle_tick)
        self.refresh_view()

    # -- events ---------------------------------------------------------------

    def handle_tick(self) -> None:
        self.machine.on_tick()
        self.refresh_view()

    @on(Input.Submitted)
    def handle_submit(self, event: Input.Submitted) -> None:
        if self.machine.phase != Phase.INPUT:
            return
        values = [self.query_one(f"#{field_id}", Input).value for field_id in FIELD_IDS]
        self.machine.submit(*values)
        self.refresh_view()

    def action_next_field(self) -> None:
        self._cycle_field(1)

    def action_previous_field(self) -> None:
        self._cycle_field(-1)

    def action_focus_next(self) -> None:
        self._cycle_field(1)

    def action_focus_previous(self) -> None:
        self._cycle_field(-1)

    def action_toggle_pause(self) -> None:
        self.machine.toggle_pause()
        self.refresh_view()

    async def action_quit(self) -> None:
        self.machine.quit()
        self.exit()

    def _cycle_field(self, step: int) -> None:
        if self.machine.phase != Phase.INPUT:
            return
        focused_id = self.focused.id if self.focused is not None else None
        if focused_id in FIELD_IDS:
            self.active_field = FIELD_IDS.index(focused_id)
        self.active_field = (self.active_field + step) % len(FIELD_IDS)
        self.query_one(f"#{FIELD_IDS[self.active_field]}", Input).focus()

    # -- rendering ------------------------------------------------------------

    def refresh_view(self) -> None:
        phase = self.machine.phase
        input_view = self.query_one("#input-view")
        input_view.display = phase == Phase.INPUT
        input_view.disabled = phase != Phase.INPUT
        self.query_one("#timer-view").display = phase in (Phase.WORK, Phase.BREAK)
        self.query_one("#complete-view").display = phase == Phase.COMPLETE

        if phase != Phase.INPUT:
            self.set_focus(None)

        state = self.machine.state
        if phase == Phase.INPUT:
            self.query_one("#input-error", Static).update(
                views.render_input_error(self.machine.last_error)
            )
            if self.focused is None or self.focused.id not in FIELD_IDS:
                self.query_one(f"#{FIELD_IDS[self.active_field]}", Input).focus()
        elif isinstance(state, RunningState):
            now = self.machine.clock()
            self.query_one("#timer-title", Static).update(
                views.render_timer_title(state.phase)
            )
            self.query_one("#timer-session", Static).update(
                views.render_session_counter(
                    state.session_index, state.plan.total_sessions
                )
            )
            self.query_one("#timer-progress", ProgressBar).update(
                progress=self.machine.progress(now)
            )
            self.query_one("#timer-remaining", Static).update(
                views.render_remaining(state, now)
            )
        elif isinstance(state, CompleteState):
            self.query_one("#complete-stats", Static).update(
                views.render_completion_summary(state.plan)
            )
