from __future__ import annotations

from typing import Any, Protocol
from uuid import UUID


class TournamentPublisher(Protocol):
    async def publish(
        self,
        tournament_id: UUID | str,
        event: str,
        payload: dict[str, Any],
        *,
        exclude_connection_id: str | None = None,
    ) -> int: ...


class NullPublisher:
    """Publisher for contexts without live subscribers."""

    async def publish(
        self,
        tournament_id: UUID | str,
        event: str,
        payload: dict[str, Any],
        *,
        exclude_connection_id: str | None = None,
    ) -> int:
        return 0
