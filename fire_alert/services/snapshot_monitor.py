"""SnapshotMonitor service consuming a snapshot source and owning session state."""

import asyncio
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
import threading

import structlog

from ..models import (
    AlertEvent,
    AlertState,
    Evaluation,
    HistoryLog,
    SensorSnapshot,
    SensorStatuses
)
from ..lib.notifications import DEFAULT_ALERT_TITLE, NotificationSink, dispatch_alerts
from ..lib.snapshot_source import (
    DatasetMissing,
    SnapshotReceived,
    SnapshotSource,
    SourceEvent,
    SourceFailure
)
from .alert_evaluator import evaluate
from .history_recorder import record


logger = structlog.get_logger(__name__)


class SnapshotMonitor:
    """Single consumer of a snapshot source.

    Owns the session's AlertState, HistoryLog and current statuses. Each
    snapshot is evaluated and the results committed together under a lock,
    then alerts are dispatched and update callbacks notified.
    """

    def __init__(self,
                 source: SnapshotSource,
                 notification_sink: NotificationSink,
                 alert_title: str = DEFAULT_ALERT_TITLE,
                 notifications_enabled: bool = True,
                 clock: Callable[[], datetime] = datetime.now):
        """Initialize the snapshot monitor."""
        self.source = source
        self.notification_sink = notification_sink
        self.alert_title = alert_title
        self.notifications_enabled = notifications_enabled
        self.clock = clock

        # Session state
        self._state = AlertState.baseline()
        self._history = HistoryLog()
        self._statuses: Optional[SensorStatuses] = None
        self._last_snapshot: Optional[SensorSnapshot] = None
        self._lock = threading.Lock()

        # Monitoring state
        self.is_running = False
        self._monitor_task: Optional[asyncio.Task] = None

        # Callbacks for external updates (like the display)
        self.update_callbacks: List[Callable[[Evaluation], Any]] = []

        # Statistics
        self.snapshot_count = 0
        self.alert_count = 0
        self.notification_count = 0
        self.notice_count = 0
        self.last_notice: Optional[AlertEvent] = None

    @property
    def state(self) -> AlertState:
        return self._state

    @property
    def history(self) -> HistoryLog:
        return self._history

    @property
    def statuses(self) -> Optional[SensorStatuses]:
        """Current status lines, None until the first snapshot."""
        return self._statuses

    @property
    def last_snapshot(self) -> Optional[SensorSnapshot]:
        return self._last_snapshot

    def add_update_callback(self, callback: Callable[[Evaluation], Any]) -> None:
        """Add callback to be notified after each committed snapshot."""
        if callback not in self.update_callbacks:
            self.update_callbacks.append(callback)

    def remove_update_callback(self, callback: Callable[[Evaluation], Any]) -> None:
        """Remove update callback."""
        if callback in self.update_callbacks:
            self.update_callbacks.remove(callback)

    def process_snapshot(self, snapshot: SensorSnapshot) -> Evaluation:
        """Evaluate a snapshot, commit state and history, and dispatch alerts."""
        with self._lock:
            evaluation = evaluate(snapshot, self._state)
            history = record(snapshot, self.clock(), self._history)

            self._state = evaluation.next_state
            self._history = history
            self._statuses = evaluation.statuses
            self._last_snapshot = snapshot
            self.snapshot_count += 1
            self.alert_count += len(evaluation.alerts)

        logger.debug("Snapshot evaluated",
                     snapshot=str(snapshot),
                     alerts=evaluation.alert_messages)

        if evaluation.has_alerts:
            logger.info("New alerts triggered", alerts=evaluation.alert_messages)
            if self.notifications_enabled:
                self._send_alerts(evaluation)

        return evaluation

    def handle_event(self, event: SourceEvent) -> Optional[Evaluation]:
        """Handle one source event; returns the evaluation for snapshots."""
        if isinstance(event, SnapshotReceived):
            return self.process_snapshot(event.snapshot)

        if isinstance(event, DatasetMissing):
            logger.warning("Source reported no data")
            self._show_notice(AlertEvent.create_no_data_notice())
            return None

        if isinstance(event, SourceFailure):
            logger.error("Source failure", error=event.message)
            self._show_notice(AlertEvent.create_source_error(event.message))
            return None

        logger.warning("Ignoring unknown source event", event=repr(event))
        return None

    async def dispatch_update(self, evaluation: Evaluation) -> None:
        """Notify registered callbacks of a committed evaluation."""
        for callback in list(self.update_callbacks):
            try:
                if asyncio.iscoroutinefunction(callback):
                    await callback(evaluation)
                else:
                    callback(evaluation)
            except Exception as e:
                logger.warning("Error in update callback", error=str(e))

    async def run(self) -> None:
        """Consume source events one at a time until the source ends."""
        logger.info("Snapshot monitor loop started", source=self.source.name)

        try:
            async for event in self.source.events():
                evaluation = self.handle_event(event)
                if evaluation is not None:
                    await self.dispatch_update(evaluation)
        finally:
            logger.info("Snapshot monitor loop stopped",
                        snapshots=self.snapshot_count,
                        alerts=self.alert_count)

    async def start_monitoring(self) -> None:
        """Start consuming the source in a background task."""
        if self.is_running:
            logger.warning("Snapshot monitor already running")
            return

        logger.info("Starting snapshot monitor")
        self.is_running = True
        self._monitor_task = asyncio.create_task(self._run_task())

    async def stop_monitoring(self) -> None:
        """Stop the background task and close the source."""
        if not self.is_running:
            logger.warning("Snapshot monitor not running")
            return

        logger.info("Stopping snapshot monitor")
        self.is_running = False

        if self._monitor_task:
            self._monitor_task.cancel()
            try:
                await self._monitor_task
            except asyncio.CancelledError:
                pass
            self._monitor_task = None

        await self.source.close()
        logger.info("Snapshot monitor stopped")

    async def wait_until_finished(self) -> None:
        """Wait for the source to run out of events."""
        if self._monitor_task:
            await asyncio.shield(self._monitor_task)

    def get_monitoring_stats(self) -> Dict[str, Any]:
        """Get monitoring statistics."""
        return {
            "is_running": self.is_running,
            "source": self.source.name,
            "snapshot_count": self.snapshot_count,
            "alert_count": self.alert_count,
            "notification_count": self.notification_count,
            "notice_count": self.notice_count,
            "history_length": len(self._history),
            "last_snapshot": self._last_snapshot.model_dump() if self._last_snapshot else None
        }

    async def _run_task(self) -> None:
        try:
            await self.run()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Error in snapshot monitor loop", error=str(e))
            self._show_notice(AlertEvent.create_source_error(str(e)))
        finally:
            self.is_running = False

    def _send_alerts(self, evaluation: Evaluation) -> None:
        try:
            if dispatch_alerts(self.notification_sink, evaluation.alerts, self.alert_title):
                self.notification_count += 1
        except Exception as e:
            logger.error("Failed to send alert notification", error=str(e))

    def _show_notice(self, notice: AlertEvent) -> None:
        self.notice_count += 1
        self.last_notice = notice
        try:
            self.notification_sink.show_notice(notice.message)
        except Exception as e:
            logger.error("Failed to show notice", error=str(e))


__all__ = ["SnapshotMonitor"]
