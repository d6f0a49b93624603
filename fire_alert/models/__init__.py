"""Data models for the fire alert monitoring system."""

from .sensor_snapshot import SensorSnapshot
from .alert_state import AlertState
from .history_log import HistoryLog, HISTORY_CAPACITY
from .alert_event import AlertEvent, AlertType, AlertSeverity
from .evaluation import Evaluation, SensorStatuses
from .app_configuration import (
    AppConfiguration,
    SourceSettings,
    NotificationSettings,
    DisplaySettings,
    SimulationSettings
)

__all__ = [
    "SensorSnapshot",
    "AlertState",
    "HistoryLog",
    "HISTORY_CAPACITY",
    "AlertEvent",
    "AlertType",
    "AlertSeverity",
    "Evaluation",
    "SensorStatuses",
    "AppConfiguration",
    "SourceSettings",
    "NotificationSettings",
    "DisplaySettings",
    "SimulationSettings",
]
