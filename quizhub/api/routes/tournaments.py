from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from quizhub.api.routes.errors import as_http_error
from quizhub.api.routes.identity import optional_user_id, require_user_id
from quizhub.api.routes.tournaments_models import (
    LeaderboardEntryResponse,
    TournamentCreateRequest,
    TournamentJoinResponse,
    TournamentLeaderboardResponse,
    TournamentPrizeResponse,
    TournamentResponse,
    TournamentSubmitRequest,
    TournamentSubmitResponse,
)
from quizhub.core.config import get_settings
from quizhub.db.errors import StorageUnavailableError
from quizhub.db.session import SessionLocal
from quizhub.game.tournaments.errors import TournamentError
from quizhub.game.tournaments.service import TournamentService
from quizhub.game.tournaments.types import (
    LeaderboardEntry,
    SubmittedAnswer,
    TournamentPrizeSnapshot,
    TournamentSnapshot,
)

router = APIRouter(prefix="/api/tournaments", tags=["tournaments"])


def get_tournament_service(request: Request) -> TournamentService:
    return TournamentService(
        SessionLocal,
        request.app.state.channel_hub,
        get_settings(),
    )


def _as_tournament_response(
    snapshot: TournamentSnapshot,
    *,
    viewer_id: int | None,
) -> TournamentResponse:
    return TournamentResponse(
        id=snapshot.tournament_id,
        title=snapshot.title,
        description=snapshot.description,
        quiz_id=snapshot.quiz_id,
        created_by=snapshot.created_by,
        max_participants=snapshot.max_participants,
        participant_count=snapshot.participants_count,
        start_time=snapshot.start_time,
        end_time=snapshot.end_time,
        status=snapshot.status,
        is_private=snapshot.is_private,
        # Only the owner hands out the invite code.
        invite_code=snapshot.invite_code if viewer_id == snapshot.created_by else None,
        prizes=[
            TournamentPrizeResponse(
                position=prize.position,
                description=prize.description,
                points=prize.points,
            )
            for prize in snapshot.prizes
        ],
        created_at=snapshot.created_at,
    )


def _as_leaderboard(entries: Sequence[LeaderboardEntry]) -> list[LeaderboardEntryResponse]:
    return [
        LeaderboardEntryResponse(
            rank=entry.rank,
            user_id=entry.user_id,
            username=entry.username,
            avatar=entry.avatar,
            score=entry.score,
            completed_at=entry.completed_at,
        )
        for entry in entries
    ]


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


@router.post("", response_model=TournamentResponse, status_code=status.HTTP_201_CREATED)
async def create_tournament(
    payload: TournamentCreateRequest,
    user_id: int = Depends(require_user_id),
    service: TournamentService = Depends(get_tournament_service),
) -> TournamentResponse:
    try:
        snapshot = await service.create_tournament(
            created_by=user_id,
            quiz_id=payload.quiz_id,
            title=payload.title,
            description=payload.description,
            start_time=payload.start_time,
            end_time=payload.end_time,
            now_utc=_now_utc(),
            max_participants=payload.max_participants,
            is_private=payload.is_private,
            prizes=[
                TournamentPrizeSnapshot(
                    position=prize.position,
                    description=prize.description,
                    points=prize.points,
                )
                for prize in payload.prizes
            ],
        )
    except (TournamentError, StorageUnavailableError) as exc:
        raise as_http_error(exc) from exc
    return _as_tournament_response(snapshot, viewer_id=user_id)


@router.get("/{tournament_id}", response_model=TournamentResponse)
async def get_tournament(
    tournament_id: UUID,
    viewer_id: int | None = Depends(optional_user_id),
    service: TournamentService = Depends(get_tournament_service),
) -> TournamentResponse:
    try:
        snapshot = await service.get_tournament(tournament_id=tournament_id, now_utc=_now_utc())
    except (TournamentError, StorageUnavailableError) as exc:
        raise as_http_error(exc) from exc
    return _as_tournament_response(snapshot, viewer_id=viewer_id)


@router.post("/{tournament_id}/join", response_model=TournamentJoinResponse)
async def join_tournament(
    tournament_id: UUID,
    user_id: int = Depends(require_user_id),
    service: TournamentService = Depends(get_tournament_service),
) -> TournamentJoinResponse:
    try:
        result = await service.join(
            tournament_id=tournament_id,
            user_id=user_id,
            now_utc=_now_utc(),
        )
    except (TournamentError, StorageUnavailableError) as exc:
        raise as_http_error(exc) from exc
    return TournamentJoinResponse(
        tournament_id=result.tournament_id,
        participant_count=result.participants_total,
    )


@router.post("/{tournament_id}/submit", response_model=TournamentSubmitResponse)
async def submit_tournament(
    tournament_id: UUID,
    payload: TournamentSubmitRequest,
    user_id: int = Depends(require_user_id),
    service: TournamentService = Depends(get_tournament_service),
) -> TournamentSubmitResponse:
    try:
        result = await service.submit(
            tournament_id=tournament_id,
            user_id=user_id,
            answers=[
                SubmittedAnswer(selected_answer=answer.selected_answer, time_spent=answer.time_spent)
                for answer in payload.answers
            ],
            now_utc=_now_utc(),
        )
    except (TournamentError, StorageUnavailableError) as exc:
        raise as_http_error(exc) from exc
    return TournamentSubmitResponse(
        tournament_id=result.tournament_id,
        score=result.score,
        max_score=result.max_score,
        rank=result.rank,
        leaderboard=_as_leaderboard(result.leaderboard),
    )


@router.get("/{tournament_id}/leaderboard", response_model=TournamentLeaderboardResponse)
async def get_tournament_leaderboard(
    tournament_id: UUID,
    service: TournamentService = Depends(get_tournament_service),
) -> TournamentLeaderboardResponse:
    try:
        entries = await service.leaderboard(tournament_id=tournament_id)
    except (TournamentError, StorageUnavailableError) as exc:
        raise as_http_error(exc) from exc
    return TournamentLeaderboardResponse(
        tournament_id=tournament_id,
        entries=_as_leaderboard(entries),
    )


@router.post("/{tournament_id}/cancel", response_model=TournamentResponse)
async def cancel_tournament(
    tournament_id: UUID,
    user_id: int = Depends(require_user_id),
    service: TournamentService = Depends(get_tournament_service),
) -> TournamentResponse:
    try:
        snapshot = await service.cancel(
            tournament_id=tournament_id,
            user_id=user_id,
            now_utc=_now_utc(),
        )
    except (TournamentError, StorageUnavailableError) as exc:
        raise as_http_error(exc) from exc
    return _as_tournament_response(snapshot, viewer_id=user_id)
