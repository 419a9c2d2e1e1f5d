from __future__ import annotations

import asyncio
from typing import Any
from uuid import UUID, uuid4

import structlog

from quizhub.realtime.events import build_message

logger = structlog.get_logger(__name__)


def channel_key(tournament_id: UUID | str) -> str:
    return str(tournament_id).lower()


class LiveConnection:
    """One client connection with its own bounded outbox.

    A slow client only ever loses its own oldest messages; publishers never
    wait on it.
    """

    def __init__(self, *, connection_id: str, user_id: int | None, queue_size: int) -> None:
        self.connection_id = connection_id
        self.user_id = user_id
        self.outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=queue_size)
        self.dropped_messages = 0

    def enqueue(self, message: dict[str, Any]) -> bool:
        """Queues a message, evicting the oldest one when full. Returns False on eviction."""
        try:
            self.outbox.put_nowait(message)
            return True
        except asyncio.QueueFull:
            pass
        try:
            self.outbox.get_nowait()
        except asyncio.QueueEmpty:
            pass
        self.outbox.put_nowait(message)
        self.dropped_messages += 1
        return False

    async def next_message(self) -> dict[str, Any]:
        return await self.outbox.get()


class TournamentChannelHub:
    """In-process fan-out of tournament events to subscribed connections."""

    def __init__(self, *, queue_size: int = 100) -> None:
        self._queue_size = queue_size
        self._connections: dict[str, LiveConnection] = {}
        self._channels: dict[str, set[str]] = {}
        self._subscriptions: dict[str, set[str]] = {}

    def register(self, *, user_id: int | None = None) -> LiveConnection:
        connection = LiveConnection(
            connection_id=uuid4().hex,
            user_id=user_id,
            queue_size=self._queue_size,
        )
        self._connections[connection.connection_id] = connection
        self._subscriptions[connection.connection_id] = set()
        return connection

    def get_connection(self, connection_id: str) -> LiveConnection | None:
        return self._connections.get(connection_id)

    def subscribe(self, connection_id: str, tournament_id: UUID | str) -> bool:
        if connection_id not in self._connections:
            return False
        key = channel_key(tournament_id)
        self._channels.setdefault(key, set()).add(connection_id)
        self._subscriptions[connection_id].add(key)
        logger.info(
            "realtime_subscriber_added",
            connection_id=connection_id,
            tournament_id=key,
            subscribers=len(self._channels[key]),
        )
        return True

    def unsubscribe(self, connection_id: str, tournament_id: UUID | str) -> bool:
        key = channel_key(tournament_id)
        members = self._channels.get(key)
        if members is None or connection_id not in members:
            return False
        members.discard(connection_id)
        if not members:
            del self._channels[key]
        self._subscriptions.get(connection_id, set()).discard(key)
        return True

    def disconnect(self, connection_id: str) -> None:
        for key in self._subscriptions.pop(connection_id, set()):
            members = self._channels.get(key)
            if members is None:
                continue
            members.discard(connection_id)
            if not members:
                del self._channels[key]
        self._connections.pop(connection_id, None)

    def subscriber_count(self, tournament_id: UUID | str) -> int:
        return len(self._channels.get(channel_key(tournament_id), ()))

    async def publish(
        self,
        tournament_id: UUID | str,
        event: str,
        payload: dict[str, Any],
        *,
        exclude_connection_id: str | None = None,
    ) -> int:
        key = channel_key(tournament_id)
        message = build_message(event, payload)
        delivered = 0
        for connection_id in list(self._channels.get(key, ())):
            if connection_id == exclude_connection_id:
                continue
            connection = self._connections.get(connection_id)
            if connection is None:
                continue
            if not connection.enqueue(message):
                logger.warning(
                    "realtime_message_dropped",
                    connection_id=connection_id,
                    tournament_id=key,
                    event=event,
                    dropped_total=connection.dropped_messages,
                )
            delivered += 1
        return delivered
