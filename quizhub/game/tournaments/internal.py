from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import Row
from sqlalchemy.ext.asyncio import AsyncSession

from quizhub.core.invite_codes import generate_invite_code
from quizhub.db.models.tournament_prizes import TournamentPrize
from quizhub.db.models.tournaments import Tournament
from quizhub.db.repo.tournaments_repo import TournamentsRepo
from quizhub.game.tournaments.constants import TOURNAMENT_INVITE_CODE_ATTEMPTS
from quizhub.game.tournaments.errors import TournamentError
from quizhub.game.tournaments.types import (
    ParticipantStanding,
    TournamentPrizeSnapshot,
    TournamentSnapshot,
)


def build_tournament_snapshot(
    tournament: Tournament,
    *,
    status: str,
    prizes: Sequence[TournamentPrize] = (),
) -> TournamentSnapshot:
    return TournamentSnapshot(
        tournament_id=tournament.id,
        title=tournament.title,
        description=tournament.description,
        quiz_id=tournament.quiz_id,
        created_by=int(tournament.created_by),
        max_participants=int(tournament.max_participants),
        participants_count=int(tournament.participants_count),
        start_time=tournament.start_time,
        end_time=tournament.end_time,
        status=status,
        is_private=bool(tournament.is_private),
        invite_code=tournament.invite_code,
        prizes=tuple(
            TournamentPrizeSnapshot(
                position=int(prize.position),
                description=prize.description,
                points=int(prize.points),
            )
            for prize in prizes
        ),
        created_at=tournament.created_at,
    )


def standings_from_rows(rows: Sequence[Row]) -> list[ParticipantStanding]:
    return [
        ParticipantStanding(
            user_id=int(row.user_id),
            username=row.username,
            avatar=row.avatar,
            score=int(row.score),
            joined_at=row.joined_at,
            completed_at=row.completed_at,
        )
        for row in rows
    ]


async def generate_unique_invite_code(session: AsyncSession, *, length: int) -> str:
    for _ in range(TOURNAMENT_INVITE_CODE_ATTEMPTS):
        code = generate_invite_code(length)
        existing = await TournamentsRepo.get_by_invite_code(session, code)
        if existing is None:
            return code
    raise TournamentError("unable to generate invite code")
