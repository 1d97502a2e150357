"""
Push-channel connection manager.

Each WebSocket goes Connecting → Open → Closed. On open the client gets a
metrics sample straight away instead of waiting for the next broadcast
tick; while open it receives every broadcast and can ask the chat
assistant questions; once closed nothing more is sent to it.

Frames are JSON envelopes ``{"event": ..., "data": ...}``:

  server → client  ``metrics``       MetricsSample
  client → server  ``chat_message``  {"query": str}
  server → client  ``ai_response``   {"text": str}

All state lives on the single event loop, so the registry needs no lock.
Each connection does carry its own ``asyncio.Lock`` so that a chat reply
and a broadcast racing for the same socket go out whole and in order.
"""

import asyncio
import logging
import random
import uuid
from dataclasses import dataclass, field
from typing import Any

from opentelemetry import trace
from pydantic import BaseModel, ValidationError
from starlette.websockets import WebSocket

from smartops.generator import generate_metrics
from smartops.models import ChannelEvent, ChatQuery, ChatReply
from smartops.responder import REPLIES, classify
from smartops.telemetry import (
    CHANNEL_CONNECTIONS_ACTIVE,
    CHANNEL_CONNECTIONS_TOTAL,
    CHANNEL_MESSAGES_REJECTED,
    CHAT_MESSAGES,
)

logger = logging.getLogger("connections")

METRICS_EVENT = "metrics"
CHAT_EVENT = "chat_message"
AI_RESPONSE_EVENT = "ai_response"


@dataclass
class Connection:
    """One open push-channel client."""

    websocket: WebSocket
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    open: bool = True


def _frame(event: str, data: Any) -> dict:
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    return ChannelEvent(event=event, data=data).model_dump(mode="json")


class ConnectionManager:
    """Registry of open connections plus the per-connection protocol.

    Args:
        rng: Random source for the on-connect metrics sample. ``None``
            uses the generator's process-wide source.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng
        self._connections: dict[str, Connection] = {}

    def __len__(self) -> int:
        return len(self._connections)

    @property
    def connections(self) -> list[Connection]:
        """Snapshot of the open connections."""
        return list(self._connections.values())

    async def connect(self, websocket: WebSocket) -> Connection:
        """Accept, register, and push the initial metrics sample."""
        await websocket.accept()
        connection = Connection(websocket)
        self._connections[connection.id] = connection

        CHANNEL_CONNECTIONS_TOTAL.inc()
        CHANNEL_CONNECTIONS_ACTIVE.set(len(self))
        logger.info("New client connected: %s", connection.id)

        await self.send(connection, METRICS_EVENT, generate_metrics(self._rng))
        return connection

    def disconnect(self, connection: Connection) -> None:
        """Deregister *connection*. Safe to call more than once."""
        connection.open = False
        if self._connections.pop(connection.id, None) is None:
            return
        CHANNEL_CONNECTIONS_ACTIVE.set(len(self))
        logger.info("Client disconnected: %s", connection.id)

    async def send(self, connection: Connection, event: str, data: Any) -> bool:
        """Send one event. A failed send closes the connection.

        Returns:
            ``True`` if the frame was written.
        """
        if not connection.open:
            return False
        frame = _frame(event, data)
        try:
            async with connection.lock:
                await connection.websocket.send_json(frame)
        except Exception as exc:
            logger.warning("Send to %s failed, dropping connection: %s", connection.id, exc)
            self.disconnect(connection)
            return False
        return True

    async def broadcast(self, event: str, data: Any) -> int:
        """Send *event* to every open connection.

        Returns:
            Number of connections the frame reached.
        """
        connections = self.connections
        if not connections:
            return 0
        frame_data = data.model_dump(mode="json") if isinstance(data, BaseModel) else data
        results = await asyncio.gather(
            *(self.send(c, event, frame_data) for c in connections)
        )
        return sum(results)

    async def handle_message(self, connection: Connection, raw: str | bytes) -> None:
        """Process one inbound frame. Bad frames are logged and dropped."""
        try:
            envelope = ChannelEvent.model_validate_json(raw)
        except ValidationError as exc:
            self._reject(connection, "malformed", exc.errors()[0]["msg"])
            return

        if envelope.event != CHAT_EVENT:
            self._reject(connection, "unknown_event", envelope.event)
            return

        try:
            chat = ChatQuery.model_validate(envelope.data)
        except ValidationError as exc:
            self._reject(connection, "invalid_query", exc.errors()[0]["msg"])
            return

        tracer = trace.get_tracer(__name__)
        with tracer.start_as_current_span(
            "handle chat_message",
            attributes={"channel.connection_id": connection.id},
        ) as span:
            category = classify(chat.query)
            span.set_attribute("chat.category", category)
            reply = ChatReply(text=REPLIES[category])

        CHAT_MESSAGES.labels(category=category).inc()
        logger.debug("Chat query from %s answered with %s reply", connection.id, category)
        await self.send(connection, AI_RESPONSE_EVENT, reply)

    async def close_all(self, code: int = 1001) -> None:
        """Close every connection (used at shutdown)."""
        for connection in self.connections:
            self.disconnect(connection)
            try:
                await connection.websocket.close(code=code)
            except Exception as exc:
                logger.debug("Close of %s failed: %s", connection.id, exc)

    def _reject(self, connection: Connection, reason: str, detail: str) -> None:
        CHANNEL_MESSAGES_REJECTED.labels(reason=reason).inc()
        logger.warning(
            "Ignoring %s frame from %s: %s", reason, connection.id, detail
        )


# Process-wide registry shared by the channel route and the broadcast loop
manager = ConnectionManager()
