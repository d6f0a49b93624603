"""Pytest configuration and fixtures."""

import pytest
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def make_snapshot():
    """Factory for sensor snapshots with safe defaults."""
    from fire_alert.models import SensorSnapshot

    def _make(fire: int = 1, smoke: int = 0, temperature: int = 20):
        return SensorSnapshot(fire=fire, smoke=smoke, temperature=temperature)

    return _make


@pytest.fixture
def fixed_clock():
    """Clock returning 12:00:00, 12:00:01, ... on successive calls."""
    calls = {"count": 0}

    def _clock() -> datetime:
        second = calls["count"]
        calls["count"] += 1
        return datetime(2024, 1, 1, 12, second // 60, second % 60)

    return _clock


@pytest.fixture
def recording_sink():
    """Notification sink that records alerts and notices."""
    from fire_alert.lib.notifications import RecordingNotificationSink

    return RecordingNotificationSink()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment overrides that would leak into configuration tests."""
    for name in ("FIRE_ALERT_DATABASE_URL", "FIRE_ALERT_DATABASE_PATH", "FIRE_ALERT_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI tests."""
    yield
    import structlog
    structlog.reset_defaults()
