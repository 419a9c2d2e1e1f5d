from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID, uuid4

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quizhub.db.models.tournament_prizes import TournamentPrize
from quizhub.db.models.tournaments import Tournament
from quizhub.db.repo.quizzes_repo import QuizzesRepo
from quizhub.db.repo.tournament_participants_repo import TournamentParticipantsRepo
from quizhub.db.repo.tournaments_repo import TournamentsRepo
from quizhub.db.repo.users_repo import UsersRepo
from quizhub.game.tournaments.constants import (
    TOURNAMENT_OPERATION_JOIN,
    TOURNAMENT_STATUS_UPCOMING,
)
from quizhub.game.tournaments.errors import (
    TournamentAlreadyJoinedError,
    TournamentFullError,
    TournamentNotFoundError,
    TournamentQuizNotFoundError,
    TournamentUserNotFoundError,
    TournamentValidationError,
)
from quizhub.game.tournaments.internal import (
    build_tournament_snapshot,
    generate_unique_invite_code,
)
from quizhub.game.tournaments.lifecycle import (
    derive_tournament_status,
    ensure_operation_allowed,
)
from quizhub.game.tournaments.types import (
    TournamentJoinResult,
    TournamentPrizeSnapshot,
    TournamentSnapshot,
)

logger = structlog.get_logger(__name__)


def validate_tournament_definition(
    *,
    title: str,
    max_participants: int,
    min_participants: int,
    start_time: datetime,
    end_time: datetime,
    now_utc: datetime,
    prizes: Sequence[TournamentPrizeSnapshot],
) -> None:
    if not title.strip():
        raise TournamentValidationError("title must not be blank")
    if max_participants < min_participants:
        raise TournamentValidationError(
            f"max_participants must be at least {min_participants}"
        )
    if start_time >= end_time:
        raise TournamentValidationError("start_time must be before end_time")
    if start_time <= now_utc:
        raise TournamentValidationError("start_time must be in the future")

    positions = [prize.position for prize in prizes]
    if any(position < 1 for position in positions):
        raise TournamentValidationError("prize positions start at 1")
    if len(set(positions)) != len(positions):
        raise TournamentValidationError("prize positions must be unique")
    if any(prize.points < 0 for prize in prizes):
        raise TournamentValidationError("prize points must not be negative")


async def create_tournament(
    session: AsyncSession,
    *,
    created_by: int,
    quiz_id: UUID,
    title: str,
    start_time: datetime,
    end_time: datetime,
    now_utc: datetime,
    max_participants: int,
    min_participants: int,
    description: str = "",
    is_private: bool = False,
    prizes: Sequence[TournamentPrizeSnapshot] = (),
    invite_code_length: int = 6,
) -> TournamentSnapshot:
    validate_tournament_definition(
        title=title,
        max_participants=max_participants,
        min_participants=min_participants,
        start_time=start_time,
        end_time=end_time,
        now_utc=now_utc,
        prizes=prizes,
    )
    if await UsersRepo.get_by_id(session, created_by) is None:
        raise TournamentUserNotFoundError
    if await QuizzesRepo.get_by_id(session, quiz_id) is None:
        raise TournamentQuizNotFoundError

    invite_code = None
    if is_private:
        invite_code = await generate_unique_invite_code(session, length=invite_code_length)

    tournament_id = uuid4()
    prize_rows = [
        TournamentPrize(
            tournament_id=tournament_id,
            position=prize.position,
            description=prize.description,
            points=prize.points,
        )
        for prize in sorted(prizes, key=lambda item: item.position)
    ]
    tournament = await TournamentsRepo.create(
        session,
        tournament=Tournament(
            id=tournament_id,
            title=title.strip(),
            description=description.strip(),
            quiz_id=quiz_id,
            created_by=created_by,
            max_participants=max_participants,
            participants_count=0,
            start_time=start_time,
            end_time=end_time,
            status=TOURNAMENT_STATUS_UPCOMING,
            is_private=is_private,
            invite_code=invite_code,
            created_at=now_utc,
            updated_at=now_utc,
        ),
        prizes=prize_rows,
    )
    logger.info(
        "tournament_created",
        tournament_id=str(tournament_id),
        created_by=created_by,
        quiz_id=str(quiz_id),
        max_participants=max_participants,
        is_private=is_private,
    )
    return build_tournament_snapshot(
        tournament,
        status=TOURNAMENT_STATUS_UPCOMING,
        prizes=prize_rows,
    )


async def join_tournament(
    session: AsyncSession,
    *,
    tournament_id: UUID,
    user_id: int,
    now_utc: datetime,
) -> TournamentJoinResult:
    tournament = await TournamentsRepo.get_by_id(session, tournament_id)
    if tournament is None:
        raise TournamentNotFoundError
    ensure_operation_allowed(
        status=derive_tournament_status(tournament, now_utc=now_utc),
        operation=TOURNAMENT_OPERATION_JOIN,
    )
    if tournament.participants_count >= tournament.max_participants:
        raise TournamentFullError
    if await UsersRepo.get_by_id(session, user_id) is None:
        raise TournamentUserNotFoundError
    existing = await TournamentParticipantsRepo.get(
        session,
        tournament_id=tournament_id,
        user_id=user_id,
    )
    if existing is not None:
        raise TournamentAlreadyJoinedError

    reserved = await TournamentsRepo.reserve_slot(
        session,
        tournament_id=tournament_id,
        now_utc=now_utc,
    )
    if not reserved:
        # Lost the race: the tournament either filled up or left upcoming meanwhile.
        tournament = await TournamentsRepo.get_by_id(session, tournament_id, refresh=True)
        if tournament is None:
            raise TournamentNotFoundError
        ensure_operation_allowed(
            status=derive_tournament_status(tournament, now_utc=now_utc),
            operation=TOURNAMENT_OPERATION_JOIN,
        )
        raise TournamentFullError

    try:
        await TournamentParticipantsRepo.create(
            session,
            tournament_id=tournament_id,
            user_id=user_id,
            joined_at=now_utc,
        )
    except IntegrityError as exc:
        # The caller's transaction rolls back, releasing the reserved slot.
        raise TournamentAlreadyJoinedError from exc

    participants_total = await TournamentsRepo.get_participants_count(
        session,
        tournament_id=tournament_id,
    )
    logger.info(
        "tournament_participant_joined",
        tournament_id=str(tournament_id),
        user_id=user_id,
        participants_total=participants_total,
    )
    return TournamentJoinResult(
        tournament_id=tournament_id,
        user_id=user_id,
        participants_total=participants_total,
    )
