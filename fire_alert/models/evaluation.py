"""Evaluation result models produced by the alert evaluator."""

from typing import Tuple, List
from pydantic import BaseModel, Field

from .alert_event import AlertEvent
from .alert_state import AlertState


class SensorStatuses(BaseModel):
    """Human-readable status lines for the three sensors."""

    model_config = {
        "frozen": True,
        "extra": "forbid"
    }

    fire: str = Field(description="Fire status line")
    smoke: str = Field(description="Smoke status line")
    temperature: str = Field(description="Temperature status line")

    def as_lines(self) -> List[str]:
        """Status lines in display order."""
        return [self.fire, self.smoke, self.temperature]


class Evaluation(BaseModel):
    """Outcome of evaluating one snapshot against the previous AlertState."""

    model_config = {
        "frozen": True,
        "extra": "forbid"
    }

    statuses: SensorStatuses
    alerts: Tuple[AlertEvent, ...] = Field(
        default=(),
        description="Newly triggered alerts in fire, smoke, temperature order"
    )
    next_state: AlertState = Field(description="State the caller commits after evaluation")

    @property
    def alert_messages(self) -> List[str]:
        return [alert.message for alert in self.alerts]

    @property
    def has_alerts(self) -> bool:
        return bool(self.alerts)
