"""Integration tests for the Textual display."""

import pytest
from textual.widgets import Button

from fire_alert.lib.display import FireAlertApp, HistoryLogWidget, SensorStatusWidget
from fire_alert.lib.snapshot_source import SimulatedSnapshotSource
from fire_alert.models import AlertState, AppConfiguration, DisplaySettings, SensorSnapshot
from fire_alert.services import evaluate


class RecordingApp(FireAlertApp):
    """FireAlertApp that keeps every notification it raises."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.notified = []

    def notify(self, message, *, title="", severity="information", timeout=None, **kwargs):
        self.notified.append((title, message, severity))


def scripted_app(datasets, configuration=None):
    source = SimulatedSnapshotSource(datasets=datasets, interval_seconds=0)
    return RecordingApp(source, configuration)


async def settle(app, pilot):
    await app.workers.wait_for_complete()
    await pilot.pause()


@pytest.mark.integration
class TestFireAlertApp:
    """Monitoring screen behaviour."""

    @pytest.mark.asyncio
    async def test_loading_before_first_snapshot(self):
        app = scripted_app([])

        async with app.run_test(size=(100, 40)) as pilot:
            await settle(app, pilot)

            widget = app.query_one("#statuses", SensorStatusWidget)
            assert widget.statuses is None
            assert widget.render().plain.count("Loading...") == 3

    @pytest.mark.asyncio
    async def test_statuses_follow_snapshots(self):
        app = scripted_app([
            {"FireSensor": 1, "SmokeSensor": 300, "Temperature": 25},
            {"FireSensor": 0, "SmokeSensor": 1500, "Temperature": 60},
        ])

        async with app.run_test(size=(100, 40)) as pilot:
            await settle(app, pilot)

            widget = app.query_one("#statuses", SensorStatusWidget)
            assert widget.fire_detected is True
            assert widget.statuses.as_lines() == [
                "🔥 Fire Detected!",
                "💨 High Smoke Level: 1500",
                "🌡 High Temperature: 60°C",
            ]
            history = app.query_one("#history", HistoryLogWidget)
            assert len(history.entries) == 2
            assert "Fire: YES" in history.entries[0]

    @pytest.mark.asyncio
    async def test_alert_notification(self):
        app = scripted_app([{"FireSensor": 0, "SmokeSensor": 1500, "Temperature": 20}])

        async with app.run_test(size=(100, 40)) as pilot:
            await settle(app, pilot)

            assert app.notified == [
                ("🚨 ALERT!", "🔥 Fire Detected!\n💨 High Smoke Level: 1500", "error")
            ]

    @pytest.mark.asyncio
    async def test_source_notices(self):
        app = scripted_app([None, RuntimeError("Permission denied")])

        async with app.run_test(size=(100, 40)) as pilot:
            await settle(app, pilot)

            assert [(message, severity) for _, message, severity in app.notified] == [
                ("⚠ No data found in the database!", "warning"),
                ("❌ Database error: Permission denied", "warning"),
            ]

    @pytest.mark.asyncio
    async def test_toggle_history(self):
        app = scripted_app([])

        async with app.run_test(size=(100, 40)) as pilot:
            history = app.query_one("#history", HistoryLogWidget)
            toggle = app.query_one("#history-toggle", Button)
            assert history.display is False
            assert str(toggle.label) == "📜 Show History"

            await pilot.press("h")

            assert history.display is True
            assert str(toggle.label) == "📜 Hide History"

            await pilot.press("h")

            assert history.display is False
            assert str(toggle.label) == "📜 Show History"

    @pytest.mark.asyncio
    async def test_history_shown_on_start(self):
        configuration = AppConfiguration(display=DisplaySettings(show_history=True))
        app = scripted_app([], configuration)

        async with app.run_test(size=(100, 40)) as pilot:
            await settle(app, pilot)

            history = app.query_one("#history", HistoryLogWidget)
            assert history.display is True
            assert history.render().plain == "No readings yet"

    @pytest.mark.asyncio
    async def test_call_fire_station(self):
        configuration = AppConfiguration(display=DisplaySettings(fire_station_number="112"))
        app = scripted_app([], configuration)

        async with app.run_test(size=(100, 40)) as pilot:
            await pilot.press("c")

            assert app.notified[-1][1] == "Dial 112 to reach the fire station"

    @pytest.mark.asyncio
    async def test_realtime_indicator_is_disabled(self):
        app = scripted_app([])

        async with app.run_test(size=(100, 40)):
            assert app.query_one("#realtime", Button).disabled is True

    @pytest.mark.asyncio
    async def test_fire_styling_follows_evaluation(self):
        """The status widget is driven by the evaluation it is handed."""
        app = scripted_app([])

        async with app.run_test(size=(100, 40)) as pilot:
            await settle(app, pilot)
            fire = evaluate(SensorSnapshot(fire=0, smoke=0, temperature=20), AlertState.baseline())

            app.on_evaluation(fire)

            widget = app.query_one("#statuses", SensorStatusWidget)
            assert app.monitor.last_snapshot is None
            assert widget.fire_detected is True
            assert widget.statuses == fire.statuses

            app.on_evaluation(evaluate(SensorSnapshot(fire=1, smoke=0, temperature=20), fire.next_state))

            assert widget.fire_detected is False
