"""Simulated snapshot source for demo mode and tests."""

import asyncio
import logging
import random
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional

from ...models.app_configuration import SimulationSettings
from .adapter import (
    FIRE_KEY,
    SMOKE_KEY,
    TEMPERATURE_KEY,
    dataset_exists,
    snapshot_from_dataset
)
from .events import DatasetMissing, SnapshotReceived, SnapshotSource, SourceEvent, SourceFailure

logger = logging.getLogger(__name__)


class SimulatedSnapshotSource(SnapshotSource):
    """Yields datasets from a script, or random readings when no script is given.

    Scripted datasets go through the same ingestion adapter as live data, so
    absent fields get the usual defaults. A scripted ``None`` or ``{}`` is
    reported as a missing dataset and an ``Exception`` instance as a failure.
    """

    name = "simulated"

    def __init__(
        self,
        datasets: Optional[Iterable[Any]] = None,
        interval_seconds: float = 2.0,
        seed: Optional[int] = None,
        max_events: Optional[int] = None
    ):
        self.datasets: Optional[List[Any]] = list(datasets) if datasets is not None else None
        self.interval_seconds = interval_seconds
        self.max_events = max_events
        self._random = random.Random(seed)
        self._closed = False

        # Simulated environment
        self._fire_active = False
        self._smoke = 200
        self._temperature = 25

    @classmethod
    def from_settings(cls, settings: SimulationSettings) -> "SimulatedSnapshotSource":
        return cls(interval_seconds=settings.interval_seconds, seed=settings.seed)

    async def events(self) -> AsyncIterator[SourceEvent]:
        emitted = 0
        for dataset in self._iter_datasets():
            if self._closed:
                break
            if self.max_events is not None and emitted >= self.max_events:
                break

            if emitted > 0 and self.interval_seconds > 0:
                await asyncio.sleep(self.interval_seconds)

            emitted += 1

            if isinstance(dataset, Exception):
                yield SourceFailure(str(dataset) or dataset.__class__.__name__)
                return

            if not dataset_exists(dataset):
                yield DatasetMissing()
            else:
                yield SnapshotReceived(snapshot=snapshot_from_dataset(dataset))

        logger.info(f"Simulated source finished after {emitted} events")

    async def close(self) -> None:
        self._closed = True

    def _iter_datasets(self) -> Iterable[Any]:
        if self.datasets is not None:
            yield from self.datasets
            return

        while True:
            yield self._generate_dataset()

    def _generate_dataset(self) -> Dict[str, int]:
        """Random walk that occasionally starts and clears a fire."""
        if self._fire_active:
            if self._random.random() < 0.2:
                self._fire_active = False
        elif self._random.random() < 0.05:
            self._fire_active = True

        smoke_target = 1500 if self._fire_active else 250
        temperature_target = 65 if self._fire_active else 25

        self._smoke += int((smoke_target - self._smoke) * 0.4) + self._random.randint(-40, 40)
        self._temperature += int((temperature_target - self._temperature) * 0.3) + self._random.randint(-1, 1)
        self._smoke = max(0, self._smoke)

        return {
            FIRE_KEY: 0 if self._fire_active else 1,
            SMOKE_KEY: self._smoke,
            TEMPERATURE_KEY: self._temperature
        }
