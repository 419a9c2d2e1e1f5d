from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import Row, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from quizhub.db.models.tournament_participants import TournamentParticipant
from quizhub.db.models.tournaments import Tournament
from quizhub.db.models.users import User
from quizhub.game.tournaments.constants import TOURNAMENT_TERMINAL_STATUSES


class TournamentParticipantsRepo:
    @staticmethod
    async def get(
        session: AsyncSession,
        *,
        tournament_id: UUID,
        user_id: int,
    ) -> TournamentParticipant | None:
        return await session.get(
            TournamentParticipant,
            (tournament_id, user_id),
            populate_existing=True,
        )

    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        tournament_id: UUID,
        user_id: int,
        joined_at: datetime,
    ) -> None:
        # Raises IntegrityError when the (tournament_id, user_id) key already exists.
        stmt = insert(TournamentParticipant).values(
            tournament_id=tournament_id,
            user_id=user_id,
            score=0,
            joined_at=joined_at,
            completed_at=None,
            answers=[],
        )
        await session.execute(stmt)

    @staticmethod
    async def complete_once(
        session: AsyncSession,
        *,
        tournament_id: UUID,
        user_id: int,
        score: int,
        answers: Sequence[dict[str, Any]],
        completed_at: datetime,
    ) -> bool:
        """Stores the scored attempt unless one is already stored.

        The row only matches while ``completed_at`` is still empty and the
        tournament is inside its play window, so of several concurrent
        submissions exactly one can win.
        """
        tournament_is_active = (
            select(Tournament.id)
            .where(
                Tournament.id == tournament_id,
                Tournament.status.not_in(tuple(TOURNAMENT_TERMINAL_STATUSES)),
                Tournament.start_time <= completed_at,
                Tournament.end_time >= completed_at,
            )
            .exists()
        )
        stmt = (
            update(TournamentParticipant)
            .where(
                TournamentParticipant.tournament_id == tournament_id,
                TournamentParticipant.user_id == user_id,
                TournamentParticipant.completed_at.is_(None),
                tournament_is_active,
            )
            .values(
                score=score,
                answers=list(answers),
                completed_at=completed_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return (result.rowcount or 0) == 1

    @staticmethod
    async def list_standings(
        session: AsyncSession,
        *,
        tournament_id: UUID,
    ) -> list[Row]:
        stmt = (
            select(
                TournamentParticipant.user_id,
                TournamentParticipant.score,
                TournamentParticipant.joined_at,
                TournamentParticipant.completed_at,
                User.username,
                User.avatar,
            )
            .join(User, User.id == TournamentParticipant.user_id)
            .where(TournamentParticipant.tournament_id == tournament_id)
            .order_by(TournamentParticipant.joined_at.asc(), TournamentParticipant.user_id.asc())
        )
        result = await session.execute(stmt)
        return list(result.all())
