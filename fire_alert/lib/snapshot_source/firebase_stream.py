"""
Firebase Realtime Database streaming source.

Subscribes to a database location through the REST streaming API
(server-sent events) and keeps a local mirror of the watched dataset. Every
``put`` or ``patch`` produces one event carrying the full, updated dataset,
the same shape a value listener on that location would receive.

Reconnection is left to the caller: any transport failure,
``cancel`` or ``auth_revoked`` event ends the stream with a SourceFailure.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, AsyncIterator, List, Optional

import httpx

from ...models.app_configuration import SourceSettings
from .adapter import dataset_exists, snapshot_from_dataset
from .events import (
    DatasetMissing,
    SnapshotReceived,
    SnapshotSource,
    SourceEvent,
    SourceFailure
)

logger = logging.getLogger(__name__)


@dataclass
class ServerSentEvent:
    """Single server-sent event."""
    event: str = "message"
    data: str = ""


async def iter_sse(lines: AsyncIterator[str]) -> AsyncIterator[ServerSentEvent]:
    """Parse a line stream into server-sent events.

    A trailing event without its terminating blank line is discarded.
    """
    event_name: Optional[str] = None
    data_lines: List[str] = []

    async for line in lines:
        line = line.rstrip("\r")

        if not line:
            if event_name is not None or data_lines:
                yield ServerSentEvent(
                    event=event_name or "message",
                    data="\n".join(data_lines)
                )
            event_name = None
            data_lines = []
            continue

        if line.startswith(":"):
            continue

        field_name, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]

        if field_name == "event":
            event_name = value
        elif field_name == "data":
            data_lines.append(value)


def _split_path(path: str) -> List[str]:
    return [part for part in path.split("/") if part]


def apply_put(root: Any, path: str, data: Any) -> Any:
    """Replace the value at ``path``; ``None`` deletes it. Returns the new root."""
    keys = _split_path(path)
    if not keys:
        return data

    new_root = dict(root) if isinstance(root, dict) else {}
    node = new_root
    for key in keys[:-1]:
        child = node.get(key)
        child = dict(child) if isinstance(child, dict) else {}
        node[key] = child
        node = child

    if data is None:
        node.pop(keys[-1], None)
    else:
        node[keys[-1]] = data

    return new_root


def apply_patch(root: Any, path: str, data: Any) -> Any:
    """Merge the children of ``data`` into the value at ``path``."""
    if not isinstance(data, dict):
        return apply_put(root, path, data)

    for key, value in data.items():
        root = apply_put(root, f"{path.rstrip('/')}/{key}", value)
    return root


def _decode_message(data: str) -> str:
    try:
        decoded = json.loads(data)
    except json.JSONDecodeError:
        return data
    return decoded if isinstance(decoded, str) else data


class FirebaseStreamSource(SnapshotSource):
    """Snapshot source backed by a Firebase REST event stream."""

    name = "firebase"

    def __init__(
        self,
        stream_url: str,
        connect_timeout_seconds: float = 10.0,
        read_timeout_seconds: float = 90.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.stream_url = stream_url
        self.timeout = httpx.Timeout(connect_timeout_seconds, read=read_timeout_seconds)
        self._client = client
        self._owns_client = client is None
        self._dataset: Any = None

        # Stream statistics
        self.events_received = 0
        self.updates_applied = 0

    @classmethod
    def from_settings(
        cls,
        settings: SourceSettings,
        client: Optional[httpx.AsyncClient] = None
    ) -> "FirebaseStreamSource":
        if settings.stream_url is None:
            raise ValueError("source.database_url is not configured")
        return cls(
            stream_url=settings.stream_url,
            connect_timeout_seconds=settings.connect_timeout_seconds,
            read_timeout_seconds=settings.read_timeout_seconds,
            client=client
        )

    @property
    def dataset(self) -> Any:
        """Current mirror of the watched location."""
        return self._dataset

    async def events(self) -> AsyncIterator[SourceEvent]:
        """Stream events until the server closes the stream or a failure occurs."""
        client = self._get_client()
        logger.info(f"Subscribing to {self.stream_url}")

        try:
            async with client.stream(
                "GET",
                self.stream_url,
                headers={"Accept": "text/event-stream"}
            ) as response:
                if response.status_code >= 400:
                    await response.aread()
                    message = f"HTTP {response.status_code}: {response.text.strip()}"
                    logger.error(f"Stream request rejected: {message}")
                    yield SourceFailure(message)
                    return

                async for sse in iter_sse(response.aiter_lines()):
                    self.events_received += 1
                    event = self._handle_sse(sse)
                    if event is None:
                        continue

                    yield event

                    if isinstance(event, SourceFailure):
                        return

            logger.warning("Event stream closed by server")
            yield SourceFailure("event stream closed by server")

        except httpx.HTTPError as e:
            message = str(e) or e.__class__.__name__
            logger.error(f"Event stream transport error: {message}")
            yield SourceFailure(message)

        finally:
            if self._owns_client:
                await self.close()

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
            self._owns_client = True
        return self._client

    def _handle_sse(self, sse: ServerSentEvent) -> Optional[SourceEvent]:
        """Apply one server-sent event to the mirror and map it to a source event."""
        if sse.event == "keep-alive":
            return None

        if sse.event in ("put", "patch"):
            try:
                payload = json.loads(sse.data)
            except json.JSONDecodeError as e:
                logger.warning(f"Ignoring malformed {sse.event} payload: {e}")
                return None

            if not isinstance(payload, dict) or not isinstance(payload.get("path"), str):
                logger.warning(f"Ignoring {sse.event} event without a string path")
                return None

            path = payload["path"]
            data = payload.get("data")
            if sse.event == "put":
                self._dataset = apply_put(self._dataset, path, data)
            else:
                self._dataset = apply_patch(self._dataset, path, data)
            self.updates_applied += 1

            return self._current_event()

        if sse.event == "cancel":
            return SourceFailure(f"stream cancelled: {_decode_message(sse.data)}")

        if sse.event == "auth_revoked":
            return SourceFailure(f"authentication revoked: {_decode_message(sse.data)}")

        logger.debug(f"Ignoring unknown event type {sse.event!r}")
        return None

    def _current_event(self) -> SourceEvent:
        if not dataset_exists(self._dataset):
            return DatasetMissing()
        return SnapshotReceived(snapshot=snapshot_from_dataset(self._dataset))
