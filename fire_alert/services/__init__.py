"""Core services for the fire alert monitoring system."""

from .alert_evaluator import AlertEvaluator, evaluate, SMOKE_THRESHOLD, TEMPERATURE_THRESHOLD
from .history_recorder import record, format_entry
from .snapshot_monitor import SnapshotMonitor

__all__ = [
    "AlertEvaluator",
    "evaluate",
    "SMOKE_THRESHOLD",
    "TEMPERATURE_THRESHOLD",
    "record",
    "format_entry",
    "SnapshotMonitor"
]
