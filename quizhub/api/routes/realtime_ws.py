from __future__ import annotations

import asyncio
import json
from contextlib import suppress
from typing import Any
from uuid import UUID

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from quizhub.api.routes.identity import parse_user_id
from quizhub.game.tournaments.constants import EVENT_PLAYER_ANSWERED
from quizhub.realtime.events import (
    CLIENT_EVENT_JOIN_TOURNAMENT,
    CLIENT_EVENT_LEAVE_TOURNAMENT,
    CLIENT_EVENT_TOURNAMENT_ANSWER,
    SERVER_EVENT_ERROR,
    SERVER_EVENT_SUBSCRIBED,
    SERVER_EVENT_UNSUBSCRIBED,
    build_message,
    error_payload,
    player_answered_payload,
)
from quizhub.realtime.hub import LiveConnection, TournamentChannelHub

router = APIRouter(tags=["realtime"])
logger = structlog.get_logger(__name__)


class ClientMessageError(Exception):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def _parse_client_message(raw: str) -> dict[str, Any]:
    try:
        message = json.loads(raw)
    except ValueError as exc:
        raise ClientMessageError("E_WS_MALFORMED", "message must be a JSON object") from exc
    if not isinstance(message, dict) or not isinstance(message.get("event"), str):
        raise ClientMessageError("E_WS_MALFORMED", "message must carry an event name")
    return message


def _tournament_id_of(message: dict[str, Any]) -> UUID:
    raw = message.get("tournament_id")
    if not isinstance(raw, str):
        raise ClientMessageError("E_WS_MALFORMED", "tournament_id is required")
    try:
        return UUID(raw)
    except ValueError as exc:
        raise ClientMessageError("E_WS_MALFORMED", "tournament_id is not a valid id") from exc


async def handle_client_message(
    hub: TournamentChannelHub,
    connection: LiveConnection,
    raw: str,
) -> None:
    message = _parse_client_message(raw)
    event = message["event"]

    if event == CLIENT_EVENT_JOIN_TOURNAMENT:
        tournament_id = _tournament_id_of(message)
        hub.subscribe(connection.connection_id, tournament_id)
        connection.enqueue(
            build_message(
                SERVER_EVENT_SUBSCRIBED,
                {"tournament_id": str(tournament_id), "connection_id": connection.connection_id},
            )
        )
        return

    if event == CLIENT_EVENT_LEAVE_TOURNAMENT:
        tournament_id = _tournament_id_of(message)
        hub.unsubscribe(connection.connection_id, tournament_id)
        connection.enqueue(
            build_message(SERVER_EVENT_UNSUBSCRIBED, {"tournament_id": str(tournament_id)})
        )
        return

    if event == CLIENT_EVENT_TOURNAMENT_ANSWER:
        tournament_id = _tournament_id_of(message)
        player_id = connection.user_id if connection.user_id is not None else connection.connection_id
        await hub.publish(
            tournament_id,
            EVENT_PLAYER_ANSWERED,
            player_answered_payload(
                player_id=player_id,
                answer=message.get("answer"),
                time_left=message.get("time_left"),
            ),
            exclude_connection_id=connection.connection_id,
        )
        return

    raise ClientMessageError("E_WS_UNKNOWN_EVENT", f"unknown event {event!r}")


async def _pump_outbox(websocket: WebSocket, connection: LiveConnection) -> None:
    while True:
        message = await connection.next_message()
        try:
            await websocket.send_json(message)
        except (WebSocketDisconnect, RuntimeError):
            # The socket is closing; the receive loop cleans up.
            return


@router.websocket("/ws/tournaments")
async def tournaments_socket(websocket: WebSocket) -> None:
    hub: TournamentChannelHub = websocket.app.state.channel_hub
    await websocket.accept()
    connection = hub.register(user_id=parse_user_id(websocket.headers.get("X-User-Id")))
    sender = asyncio.create_task(_pump_outbox(websocket, connection))
    logger.info("realtime_connection_opened", connection_id=connection.connection_id)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                await handle_client_message(hub, connection, raw)
            except ClientMessageError as exc:
                connection.enqueue(
                    build_message(
                        SERVER_EVENT_ERROR,
                        error_payload(code=exc.code, message=exc.message),
                    )
                )
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(connection.connection_id)
        sender.cancel()
        with suppress(asyncio.CancelledError):
            await sender
        logger.info("realtime_connection_closed", connection_id=connection.connection_id)
