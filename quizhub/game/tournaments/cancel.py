from __future__ import annotations

from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from quizhub.db.repo.tournaments_repo import TournamentsRepo
from quizhub.game.tournaments.constants import (
    TOURNAMENT_STATUS_CANCELLED,
    TOURNAMENT_TERMINAL_STATUSES,
)
from quizhub.game.tournaments.errors import (
    TournamentAccessError,
    TournamentInvalidStateError,
    TournamentNotFoundError,
)
from quizhub.game.tournaments.internal import build_tournament_snapshot
from quizhub.game.tournaments.lifecycle import derive_tournament_status
from quizhub.game.tournaments.types import TournamentSnapshot

logger = structlog.get_logger(__name__)


async def cancel_tournament(
    session: AsyncSession,
    *,
    tournament_id: UUID,
    user_id: int,
    now_utc: datetime,
) -> TournamentSnapshot:
    tournament = await TournamentsRepo.get_by_id(session, tournament_id)
    if tournament is None:
        raise TournamentNotFoundError
    if int(tournament.created_by) != user_id:
        raise TournamentAccessError

    status = derive_tournament_status(tournament, now_utc=now_utc)
    if status in TOURNAMENT_TERMINAL_STATUSES:
        raise TournamentInvalidStateError(f"cannot cancel a tournament that is {status}")

    cancelled = await TournamentsRepo.cancel_if_open(
        session,
        tournament_id=tournament_id,
        now_utc=now_utc,
    )
    if not cancelled:
        raise TournamentInvalidStateError("tournament already left its open window")

    tournament = await TournamentsRepo.get_by_id(session, tournament_id, refresh=True)
    if tournament is None:
        raise TournamentNotFoundError
    prizes = await TournamentsRepo.list_prizes(session, tournament_id=tournament_id)
    logger.info(
        "tournament_cancelled",
        tournament_id=str(tournament_id),
        user_id=user_id,
        from_status=status,
    )
    return build_tournament_snapshot(
        tournament,
        status=TOURNAMENT_STATUS_CANCELLED,
        prizes=prizes,
    )
