"""Unit tests for data models."""

import pytest
from pydantic import ValidationError

from fire_alert.models import (
    AlertEvent,
    AlertSeverity,
    AlertState,
    AlertType,
    AppConfiguration,
    HistoryLog,
    SensorSnapshot,
    SourceSettings
)


class TestSensorSnapshot:
    """Test SensorSnapshot model."""

    def test_fire_detected_when_zero(self):
        """fire == 0 means fire."""
        assert SensorSnapshot(fire=0, smoke=0, temperature=0).fire_detected is True

    @pytest.mark.parametrize("fire", [1, 2, -1])
    def test_nonzero_is_no_fire(self, fire):
        assert SensorSnapshot(fire=fire, smoke=0, temperature=0).fire_detected is False

    def test_snapshot_is_immutable(self):
        snapshot = SensorSnapshot(fire=1, smoke=0, temperature=0)

        with pytest.raises(ValidationError):
            snapshot.smoke = 5

    def test_missing_field_rejected(self):
        with pytest.raises(ValidationError):
            SensorSnapshot(fire=1, smoke=0)

    def test_str(self):
        snapshot = SensorSnapshot(fire=0, smoke=1200, temperature=55)

        assert str(snapshot) == "fire=0 smoke=1200 temperature=55"


class TestAlertState:
    """Test AlertState model."""

    def test_baseline_values(self):
        """Baseline is no fire, zero smoke, zero temperature."""
        state = AlertState.baseline()

        assert (state.previous_fire, state.previous_smoke, state.previous_temperature) == (1, 0, 0)

    def test_from_snapshot(self):
        state = AlertState.from_snapshot(SensorSnapshot(fire=0, smoke=7, temperature=-1))

        assert state == AlertState(previous_fire=0, previous_smoke=7, previous_temperature=-1)


class TestHistoryLog:
    """Test HistoryLog model."""

    def test_empty_log(self):
        log = HistoryLog()

        assert len(log) == 0
        assert log.capacity == 10
        with pytest.raises(IndexError):
            log.newest

    def test_prepend_keeps_newest_first(self):
        log = HistoryLog().prepend("a").prepend("b")

        assert list(log) == ["b", "a"]
        assert log[0] == "b"

    def test_prepend_drops_oldest_at_capacity(self):
        log = HistoryLog(entries=tuple(str(i) for i in range(10, 0, -1)))

        log = log.prepend("11")

        assert len(log) == 10
        assert log.newest == "11"
        assert "1" not in log.entries

    def test_over_capacity_rejected(self):
        with pytest.raises(ValidationError):
            HistoryLog(entries=tuple("x" * 11))


class TestAlertEvent:
    """Test AlertEvent model."""

    def test_fire_alert(self):
        alert = AlertEvent.create_fire_alert()

        assert alert.alert_type == AlertType.FIRE_DETECTED
        assert alert.severity == AlertSeverity.CRITICAL
        assert str(alert) == "🔥 Fire Detected!"
        assert alert.is_sensor_alert

    def test_smoke_alert_details(self):
        alert = AlertEvent.create_smoke_alert(1500)

        assert alert.message == "💨 High Smoke Level: 1500"
        assert alert.details == {"smoke": 1500}

    def test_source_error_notice(self):
        """Source errors are notices, not sensor alerts."""
        notice = AlertEvent.create_source_error("Permission denied")

        assert notice.message == "❌ Database error: Permission denied"
        assert not notice.is_sensor_alert

    def test_source_error_without_message(self):
        notice = AlertEvent.create_source_error("")

        assert notice.message == "❌ Database error: unknown error"

    def test_no_data_notice(self):
        notice = AlertEvent.create_no_data_notice()

        assert notice.message == "⚠ No data found in the database!"
        assert notice.alert_type == AlertType.NO_DATA

    def test_message_is_stripped(self):
        alert = AlertEvent(
            alert_type=AlertType.HIGH_SMOKE,
            severity=AlertSeverity.WARNING,
            message="  smoke  "
        )

        assert alert.message == "smoke"

    def test_empty_message_rejected(self):
        with pytest.raises(ValidationError):
            AlertEvent(alert_type=AlertType.NO_DATA, severity=AlertSeverity.INFO, message="")

    def test_to_log_entry(self):
        entry = AlertEvent.create_temperature_alert(60).to_log_entry()

        assert entry == "[WARNING] high_temperature: 🌡 High Temperature: 60°C"


class TestSourceSettings:
    """Test SourceSettings model."""

    def test_defaults(self):
        settings = SourceSettings()

        assert settings.database_url is None
        assert settings.stream_url is None

    def test_stream_url_for_root(self):
        settings = SourceSettings(database_url="https://demo.firebaseio.com/")

        assert settings.database_url == "https://demo.firebaseio.com"
        assert settings.stream_url == "https://demo.firebaseio.com/.json"

    def test_stream_url_for_path(self):
        settings = SourceSettings(database_url="https://demo.firebaseio.com", path="/sensors/lab/")

        assert settings.stream_url == "https://demo.firebaseio.com/sensors/lab.json"

    def test_blank_url_is_unset(self):
        assert SourceSettings(database_url="   ").database_url is None

    def test_non_http_url_rejected(self):
        with pytest.raises(ValidationError):
            SourceSettings(database_url="ftp://demo")

    @pytest.mark.parametrize("timeout", [0, -1, 7200])
    def test_read_timeout_bounds(self, timeout):
        with pytest.raises(ValidationError):
            SourceSettings(read_timeout_seconds=timeout)


class TestAppConfiguration:
    """Test AppConfiguration model."""

    def test_defaults(self):
        configuration = AppConfiguration()

        assert configuration.notifications.alert_title == "🚨 ALERT!"
        assert configuration.display.show_history is False
        assert configuration.enable_debug_logging is False

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            AppConfiguration(unknown=True)

    def test_export_round_trips(self):
        configuration = AppConfiguration(
            source=SourceSettings(database_url="https://demo.firebaseio.com", path="lab")
        )

        assert AppConfiguration(**configuration.export_dict()) == configuration

    def test_assignment_is_validated(self):
        configuration = AppConfiguration()

        with pytest.raises(ValidationError):
            configuration.enable_debug_logging = "not a bool"
