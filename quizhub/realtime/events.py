from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from quizhub.game.tournaments.types import LeaderboardEntry

CLIENT_EVENT_JOIN_TOURNAMENT = "join-tournament"
CLIENT_EVENT_LEAVE_TOURNAMENT = "leave-tournament"
CLIENT_EVENT_TOURNAMENT_ANSWER = "tournament-answer"

SERVER_EVENT_SUBSCRIBED = "subscribed"
SERVER_EVENT_UNSUBSCRIBED = "unsubscribed"
SERVER_EVENT_ERROR = "error"


def build_message(event: str, payload: dict[str, Any]) -> dict[str, Any]:
    return {"event": event, "data": payload}


def leaderboard_payload(leaderboard: Sequence[LeaderboardEntry]) -> list[dict[str, Any]]:
    return [
        {
            "rank": entry.rank,
            "user_id": entry.user_id,
            "username": entry.username,
            "avatar": entry.avatar,
            "score": entry.score,
            "completed_at": entry.completed_at.isoformat(),
        }
        for entry in leaderboard
    ]


def participant_joined_payload(*, participant_count: int) -> dict[str, Any]:
    return {"participant_count": participant_count}


def participant_finished_payload(
    *,
    participant_id: int,
    score: int,
    leaderboard: Sequence[LeaderboardEntry],
) -> dict[str, Any]:
    return {
        "participant_id": participant_id,
        "score": score,
        "leaderboard": leaderboard_payload(leaderboard),
    }


def player_answered_payload(*, player_id: int | str, answer: Any, time_left: Any) -> dict[str, Any]:
    return {"player_id": player_id, "answer": answer, "time_left": time_left}


def error_payload(*, code: str, message: str) -> dict[str, Any]:
    return {"code": code, "message": message}
