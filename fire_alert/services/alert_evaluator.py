"""Edge-triggered alert evaluation for fire, smoke and temperature readings.

An alert fires only when a signal crosses from "not dangerous" into
"dangerous" between the previously committed state and the new snapshot.
Staying dangerous across snapshots never re-raises the alert.
"""

from typing import List, Optional

from ..models import (
    SensorSnapshot,
    AlertState,
    AlertEvent,
    Evaluation,
    SensorStatuses
)


SMOKE_THRESHOLD = 1000
TEMPERATURE_THRESHOLD = 50


def is_fire(fire: int) -> bool:
    return fire == 0


def is_smoke_high(smoke: int) -> bool:
    return smoke > SMOKE_THRESHOLD


def is_temperature_high(temperature: int) -> bool:
    return temperature > TEMPERATURE_THRESHOLD


def build_statuses(snapshot: SensorSnapshot) -> SensorStatuses:
    """Display lines for the current readings."""
    if is_fire(snapshot.fire):
        fire_status = "🔥 Fire Detected!"
    else:
        fire_status = "✅ No Fire"

    if is_smoke_high(snapshot.smoke):
        smoke_status = f"💨 High Smoke Level: {snapshot.smoke}"
    else:
        smoke_status = f"✅ Smoke Level: {snapshot.smoke}"

    if is_temperature_high(snapshot.temperature):
        temperature_status = f"🌡 High Temperature: {snapshot.temperature}°C"
    else:
        temperature_status = f"🌡 Temperature: {snapshot.temperature}°C"

    return SensorStatuses(
        fire=fire_status,
        smoke=smoke_status,
        temperature=temperature_status
    )


def detect_alerts(snapshot: SensorSnapshot, state: AlertState) -> List[AlertEvent]:
    """Alerts for signals that just became dangerous, in fire, smoke, temperature order."""
    alerts: List[AlertEvent] = []

    if is_fire(snapshot.fire) and not is_fire(state.previous_fire):
        alerts.append(AlertEvent.create_fire_alert())

    if is_smoke_high(snapshot.smoke) and not is_smoke_high(state.previous_smoke):
        alerts.append(AlertEvent.create_smoke_alert(snapshot.smoke))

    if (is_temperature_high(snapshot.temperature) and
            not is_temperature_high(state.previous_temperature)):
        alerts.append(AlertEvent.create_temperature_alert(snapshot.temperature))

    return alerts


def evaluate(snapshot: SensorSnapshot, state: AlertState) -> Evaluation:
    """Evaluate ``snapshot`` against the previously committed ``state``.

    Pure: neither argument is modified. The caller commits
    ``evaluation.next_state`` once it has acted on the result.
    """
    return Evaluation(
        statuses=build_statuses(snapshot),
        alerts=tuple(detect_alerts(snapshot, state)),
        next_state=AlertState.from_snapshot(snapshot)
    )


class AlertEvaluator:
    """Stateful wrapper around :func:`evaluate` for single-consumer use."""

    def __init__(self, state: Optional[AlertState] = None):
        self.state = state or AlertState.baseline()

    def evaluate(self, snapshot: SensorSnapshot) -> Evaluation:
        """Evaluate a snapshot and commit the resulting state."""
        evaluation = evaluate(snapshot, self.state)
        self.state = evaluation.next_state
        return evaluation

    def reset(self) -> None:
        self.state = AlertState.baseline()


__all__ = [
    "SMOKE_THRESHOLD",
    "TEMPERATURE_THRESHOLD",
    "AlertEvaluator",
    "build_statuses",
    "detect_alerts",
    "evaluate",
]
