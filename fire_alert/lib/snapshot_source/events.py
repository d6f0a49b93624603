"""Events emitted by snapshot sources and the source base class."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import AsyncIterator, Union

from ...models.sensor_snapshot import SensorSnapshot


@dataclass(frozen=True)
class SnapshotReceived:
    """A complete set of readings arrived."""
    snapshot: SensorSnapshot
    received_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class DatasetMissing:
    """The watched location exists but holds no data."""
    received_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class SourceFailure:
    """Transport or server failure; the source stops after emitting it."""
    message: str
    received_at: datetime = field(default_factory=datetime.now)


SourceEvent = Union[SnapshotReceived, DatasetMissing, SourceFailure]


class SnapshotSource(ABC):
    """Push-update stream of sensor snapshots.

    Implementations deliver events one at a time through :meth:`events`.
    Reconnection is not attempted: a :class:`SourceFailure` is the last
    event of a stream.
    """

    name = "source"

    @abstractmethod
    def events(self) -> AsyncIterator[SourceEvent]:
        """Asynchronously iterate over source events."""

    async def close(self) -> None:
        """Release any resources held by the source."""
