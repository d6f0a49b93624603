"""Textual-based terminal display for the fire alert monitor.

This library provides the single monitoring screen:

- Fire, smoke and temperature status lines
- Real-time indicator
- Call fire station action
- Show/hide history of the last readings
- Alert and notice notifications

Usage:
    from fire_alert.lib.display import FireAlertApp

    app = FireAlertApp(source, configuration)
    app.run()
"""

from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Center, Vertical
from textual.widgets import Button, Footer, Header

from ...models.app_configuration import AppConfiguration
from ...models.evaluation import Evaluation
from ...services.snapshot_monitor import SnapshotMonitor
from ..notifications import NotificationSink
from ..snapshot_source import SnapshotSource
from .widgets import HistoryLogWidget, SensorStatusWidget


class TextualNotificationSink(NotificationSink):
    """Sink raising Textual toast notifications."""

    def __init__(self, app: App, alert_timeout: float = 10.0, notice_timeout: float = 3.0):
        self.app = app
        self.alert_timeout = alert_timeout
        self.notice_timeout = notice_timeout

    def send_alert(self, title: str, body: str) -> None:
        self.app.bell()
        self.app.notify(body, title=title, severity="error", timeout=self.alert_timeout)

    def show_notice(self, message: str) -> None:
        self.app.notify(message, severity="warning", timeout=self.notice_timeout)


class FireAlertApp(App):
    """Main Textual application for fire alert monitoring."""

    TITLE = "🔥 Fire Alert System"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main {
        height: 1fr;
        padding: 1 2;
    }

    #actions Button {
        width: 30;
        margin: 0 0 1 0;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("h", "toggle_history", "History"),
        Binding("c", "call_fire_station", "Call Fire Station"),
    ]

    def __init__(
        self,
        source: SnapshotSource,
        configuration: Optional[AppConfiguration] = None,
        **kwargs
    ):
        super().__init__(**kwargs)
        self.configuration = configuration or AppConfiguration()
        self.notification_sink = TextualNotificationSink(
            self,
            notice_timeout=self.configuration.notifications.notice_timeout_seconds
        )
        self.monitor = SnapshotMonitor(
            source,
            self.notification_sink,
            alert_title=self.configuration.notifications.alert_title,
            notifications_enabled=self.configuration.notifications.enabled
        )
        self.monitor.add_update_callback(self.on_evaluation)
        self.show_history = self.configuration.display.show_history

    def compose(self) -> ComposeResult:
        """Compose the monitoring screen."""
        yield Header(show_clock=True)

        with Vertical(id="main"):
            yield SensorStatusWidget(id="statuses")

            with Vertical(id="actions"):
                with Center():
                    yield Button("✅ Real-Time Enabled", id="realtime", disabled=True)
                with Center():
                    yield Button("🚒 Call Fire Station", id="call", variant="error")
                with Center():
                    yield Button(self._history_label(), id="history-toggle", variant="primary")

            history = HistoryLogWidget(id="history")
            history.display = self.show_history
            yield history

        yield Footer()

    def on_mount(self) -> None:
        """Start consuming the snapshot source."""
        self.run_worker(self.monitor.run(), name="snapshot-monitor", exclusive=True)

    async def on_unmount(self) -> None:
        await self.monitor.source.close()

    def on_evaluation(self, evaluation: Evaluation) -> None:
        """Refresh statuses and history after each committed snapshot."""
        status_widget = self.query_one("#statuses", SensorStatusWidget)
        status_widget.fire_detected = evaluation.next_state.previous_fire == 0
        status_widget.statuses = evaluation.statuses

        self.query_one("#history", HistoryLogWidget).entries = self.monitor.history.entries

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "call":
            self.action_call_fire_station()
        elif event.button.id == "history-toggle":
            self.action_toggle_history()

    def action_toggle_history(self) -> None:
        """Show or hide the history list."""
        self.show_history = not self.show_history
        self.query_one("#history", HistoryLogWidget).display = self.show_history
        self.query_one("#history-toggle", Button).label = self._history_label()

    def action_call_fire_station(self) -> None:
        number = self.configuration.display.fire_station_number
        self.notify(f"Dial {number} to reach the fire station", title="🚒 Fire Station", timeout=8)

    def _history_label(self) -> str:
        return "📜 Hide History" if self.show_history else "📜 Show History"


__all__ = ["FireAlertApp", "TextualNotificationSink", "HistoryLogWidget", "SensorStatusWidget"]
