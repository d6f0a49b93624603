"""History recording of formatted snapshots into a bounded, newest-first log."""

from datetime import datetime
from typing import Union

from ..models import SensorSnapshot, HistoryLog


TIMESTAMP_FORMAT = "%H:%M:%S"


def format_timestamp(timestamp: Union[datetime, str]) -> str:
    """Format a wall-clock time as HH:MM:SS; strings are used as given."""
    if isinstance(timestamp, datetime):
        return timestamp.strftime(TIMESTAMP_FORMAT)
    return timestamp


def format_entry(snapshot: SensorSnapshot, timestamp: Union[datetime, str]) -> str:
    """Format one history line: ``[HH:MM:SS] Fire: YES | Smoke: 0 | Temp: 0°C``."""
    fire_flag = "YES" if snapshot.fire_detected else "NO"
    return (
        f"[{format_timestamp(timestamp)}] Fire: {fire_flag} | "
        f"Smoke: {snapshot.smoke} | Temp: {snapshot.temperature}°C"
    )


def record(
    snapshot: SensorSnapshot,
    timestamp: Union[datetime, str],
    log: HistoryLog
) -> HistoryLog:
    """Return a new log with the snapshot's entry prepended.

    The log never grows beyond its capacity; the oldest entry is dropped.
    """
    return log.prepend(format_entry(snapshot, timestamp))


__all__ = ["TIMESTAMP_FORMAT", "format_entry", "format_timestamp", "record"]
