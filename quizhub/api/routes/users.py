from __future__ import annotations

from fastapi import APIRouter, Query
from pydantic import BaseModel
from sqlalchemy.exc import DBAPIError, OperationalError

from quizhub.api.routes.errors import as_http_error
from quizhub.db.errors import StorageUnavailableError
from quizhub.db.session import SessionLocal
from quizhub.game.stats.constants import GLOBAL_LEADERBOARD_DEFAULT_LIMIT
from quizhub.game.stats.service import UserStatsService

router = APIRouter(prefix="/api/users", tags=["users"])


class GlobalLeaderboardEntryResponse(BaseModel):
    rank: int
    user_id: int
    username: str
    avatar: str
    total_quizzes: int
    total_score: int
    average_score: float
    badges: list[str]


class GlobalLeaderboardResponse(BaseModel):
    entries: list[GlobalLeaderboardEntryResponse]


@router.get("/leaderboard", response_model=GlobalLeaderboardResponse)
async def get_global_leaderboard(
    limit: int = Query(default=GLOBAL_LEADERBOARD_DEFAULT_LIMIT, ge=1, le=100),
) -> GlobalLeaderboardResponse:
    try:
        async with SessionLocal() as session:
            entries = await UserStatsService.get_global_leaderboard(session, limit=limit)
    except (OperationalError, DBAPIError) as exc:
        raise as_http_error(StorageUnavailableError()) from exc
    return GlobalLeaderboardResponse(
        entries=[
            GlobalLeaderboardEntryResponse(
                rank=entry.rank,
                user_id=entry.user_id,
                username=entry.username,
                avatar=entry.avatar,
                total_quizzes=entry.total_quizzes,
                total_score=entry.total_score,
                average_score=entry.average_score,
                badges=list(entry.badges),
            )
            for entry in entries
        ]
    )
