"""Snapshot sources delivering sensor readings to the alert monitor.

This library provides the ingestion side of the fire alert system:

- Ingestion adapter defaulting missing fields (fire=1, smoke=0, temperature=-1)
- Firebase Realtime Database event-stream client
- Simulated source for demo mode and tests

Usage:
    from fire_alert.lib.snapshot_source import create_source

    source = create_source(configuration, demo_mode=False)
    async for event in source.events():
        ...
"""

from ...models.app_configuration import AppConfiguration
from .adapter import (
    DEFAULT_FIRE,
    DEFAULT_SMOKE,
    DEFAULT_TEMPERATURE,
    FIRE_KEY,
    SMOKE_KEY,
    TEMPERATURE_KEY,
    coerce_int,
    dataset_exists,
    snapshot_from_dataset
)
from .events import (
    DatasetMissing,
    SnapshotReceived,
    SnapshotSource,
    SourceEvent,
    SourceFailure
)
from .firebase_stream import FirebaseStreamSource, ServerSentEvent, iter_sse
from .simulated import SimulatedSnapshotSource


def create_source(configuration: AppConfiguration, demo_mode: bool = False) -> SnapshotSource:
    """Create the snapshot source selected by the configuration."""
    if demo_mode:
        return SimulatedSnapshotSource.from_settings(configuration.simulation)
    return FirebaseStreamSource.from_settings(configuration.source)


__all__ = [
    "DEFAULT_FIRE",
    "DEFAULT_SMOKE",
    "DEFAULT_TEMPERATURE",
    "FIRE_KEY",
    "SMOKE_KEY",
    "TEMPERATURE_KEY",
    "DatasetMissing",
    "FirebaseStreamSource",
    "ServerSentEvent",
    "SimulatedSnapshotSource",
    "SnapshotReceived",
    "SnapshotSource",
    "SourceEvent",
    "SourceFailure",
    "coerce_int",
    "create_source",
    "dataset_exists",
    "iter_sse",
    "snapshot_from_dataset",
]
