"""Notification sinks surfacing alerts and transient notices to the user.

The monitor only produces alert batches; a sink decides how they are shown.
A non-empty batch becomes exactly one notification whose body is the alert
messages joined with newlines. An empty batch produces no notification.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

import structlog

from ...models.alert_event import AlertEvent


logger = structlog.get_logger(__name__)

DEFAULT_ALERT_TITLE = "🚨 ALERT!"


class NotificationSink(ABC):
    """Destination for alert notifications and transient notices."""

    @abstractmethod
    def send_alert(self, title: str, body: str) -> None:
        """Raise one user-visible alert."""

    @abstractmethod
    def show_notice(self, message: str) -> None:
        """Show a short-lived, non-alert message."""


class LogNotificationSink(NotificationSink):
    """Sink for headless operation: alerts and notices go to the log."""

    def send_alert(self, title: str, body: str) -> None:
        logger.warning(title, alerts=body.split("\n"))

    def show_notice(self, message: str) -> None:
        logger.info("Notice", message=message)


class RecordingNotificationSink(NotificationSink):
    """Sink that keeps everything it receives, in order."""

    def __init__(self):
        self.alerts: List[Tuple[str, str]] = []
        self.notices: List[str] = []

    def send_alert(self, title: str, body: str) -> None:
        self.alerts.append((title, body))

    def show_notice(self, message: str) -> None:
        self.notices.append(message)

    def clear(self) -> None:
        self.alerts.clear()
        self.notices.clear()


def format_alert_body(alerts: Sequence[AlertEvent]) -> str:
    """Join alert messages into one notification body."""
    return "\n".join(alert.message for alert in alerts)


def dispatch_alerts(
    sink: NotificationSink,
    alerts: Sequence[AlertEvent],
    title: str = DEFAULT_ALERT_TITLE
) -> bool:
    """Send a batch of alerts as a single notification.

    Returns True if a notification was sent.
    """
    if not alerts:
        return False

    sink.send_alert(title, format_alert_body(alerts))
    return True


__all__ = [
    "DEFAULT_ALERT_TITLE",
    "LogNotificationSink",
    "NotificationSink",
    "RecordingNotificationSink",
    "dispatch_alerts",
    "format_alert_body",
]
