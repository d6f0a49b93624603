"""HistoryLog data model: bounded, newest-first record of formatted snapshots."""

from typing import Iterator, Tuple

from pydantic import BaseModel, Field, field_validator


HISTORY_CAPACITY = 10


class HistoryLog(BaseModel):
    """Immutable history of formatted entries, newest first."""

    model_config = {
        "frozen": True,
        "extra": "forbid"
    }

    entries: Tuple[str, ...] = Field(
        default=(),
        description="Formatted history entries, most recent first"
    )

    @field_validator('entries')
    @classmethod
    def validate_entries(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Reject logs longer than the fixed capacity."""
        if len(v) > HISTORY_CAPACITY:
            raise ValueError(f"history log cannot hold more than {HISTORY_CAPACITY} entries")
        return v

    @property
    def capacity(self) -> int:
        return HISTORY_CAPACITY

    @property
    def newest(self) -> str:
        """Most recent entry; raises IndexError on an empty log."""
        return self.entries[0]

    def prepend(self, entry: str) -> "HistoryLog":
        """Return a new log with ``entry`` first, dropping the oldest entry at capacity."""
        return HistoryLog(entries=((entry,) + self.entries)[:HISTORY_CAPACITY])

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.entries)

    def __getitem__(self, index: int) -> str:
        return self.entries[index]
