"""Ingestion adapter turning untyped database payloads into SensorSnapshots.

Missing or unreadable fields are replaced with defaults here so that the
alert evaluator only ever sees well-typed snapshots.
"""

import logging
from typing import Any, Mapping, Optional

from ...models.sensor_snapshot import SensorSnapshot

logger = logging.getLogger(__name__)

FIRE_KEY = "FireSensor"
SMOKE_KEY = "SmokeSensor"
TEMPERATURE_KEY = "Temperature"

DEFAULT_FIRE = 1
DEFAULT_SMOKE = 0
DEFAULT_TEMPERATURE = -1


def coerce_int(value: Any) -> Optional[int]:
    """Convert a JSON value to int, or None if it is not an integer reading.

    Integral floats (``42.0``) and numeric strings (``"42"``) are accepted.
    Booleans are rejected even though they are ints in Python.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _read_field(dataset: Mapping[str, Any], key: str, default: int) -> int:
    if key not in dataset:
        return default

    value = coerce_int(dataset[key])
    if value is None:
        logger.warning(f"Ignoring non-integer {key} value {dataset[key]!r}, using {default}")
        return default
    return value


def snapshot_from_dataset(dataset: Any) -> SensorSnapshot:
    """Build a snapshot from ``{FireSensor, SmokeSensor, Temperature}``.

    Defaults: fire=1 (no fire), smoke=0, temperature=-1. A payload that is
    not a mapping has none of the fields and yields the defaults.
    """
    if not isinstance(dataset, Mapping):
        dataset = {}

    return SensorSnapshot(
        fire=_read_field(dataset, FIRE_KEY, DEFAULT_FIRE),
        smoke=_read_field(dataset, SMOKE_KEY, DEFAULT_SMOKE),
        temperature=_read_field(dataset, TEMPERATURE_KEY, DEFAULT_TEMPERATURE)
    )


def dataset_exists(dataset: Any) -> bool:
    """True when the payload holds any data at all."""
    if dataset is None:
        return False
    if isinstance(dataset, (Mapping, list, str)):
        return len(dataset) > 0
    return True
