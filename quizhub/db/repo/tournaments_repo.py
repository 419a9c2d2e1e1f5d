from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from quizhub.db.models.tournament_prizes import TournamentPrize
from quizhub.db.models.tournaments import Tournament
from quizhub.game.tournaments.constants import (
    TOURNAMENT_STATUS_CANCELLED,
    TOURNAMENT_STATUS_UPCOMING,
    TOURNAMENT_TERMINAL_STATUSES,
)


class TournamentsRepo:
    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        tournament: Tournament,
        prizes: Sequence[TournamentPrize] = (),
    ) -> Tournament:
        session.add(tournament)
        await session.flush()
        if prizes:
            session.add_all(list(prizes))
            await session.flush()
        return tournament

    @staticmethod
    async def get_by_id(
        session: AsyncSession,
        tournament_id: UUID,
        *,
        refresh: bool = False,
    ) -> Tournament | None:
        return await session.get(Tournament, tournament_id, populate_existing=refresh)

    @staticmethod
    async def get_by_invite_code(session: AsyncSession, invite_code: str) -> Tournament | None:
        stmt = select(Tournament).where(Tournament.invite_code == invite_code)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_prizes(session: AsyncSession, *, tournament_id: UUID) -> list[TournamentPrize]:
        stmt = (
            select(TournamentPrize)
            .where(TournamentPrize.tournament_id == tournament_id)
            .order_by(TournamentPrize.position.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_participants_count(session: AsyncSession, *, tournament_id: UUID) -> int:
        stmt = select(Tournament.participants_count).where(Tournament.id == tournament_id)
        result = await session.execute(stmt)
        return int(result.scalar_one_or_none() or 0)

    @staticmethod
    async def reserve_slot(
        session: AsyncSession,
        *,
        tournament_id: UUID,
        now_utc: datetime,
    ) -> bool:
        """Takes one participant slot if the tournament is still open and below capacity.

        The capacity check and the increment are one conditional UPDATE, so
        concurrent joins serialize on the row and can never overshoot
        ``max_participants``.
        """
        stmt = (
            update(Tournament)
            .where(
                Tournament.id == tournament_id,
                Tournament.status == TOURNAMENT_STATUS_UPCOMING,
                Tournament.start_time > now_utc,
                Tournament.participants_count < Tournament.max_participants,
            )
            .values(
                participants_count=Tournament.participants_count + 1,
                updated_at=now_utc,
            )
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return (result.rowcount or 0) == 1

    @staticmethod
    async def transition_status(
        session: AsyncSession,
        *,
        tournament_id: UUID,
        from_status: str,
        to_status: str,
        now_utc: datetime,
    ) -> bool:
        stmt = (
            update(Tournament)
            .where(
                Tournament.id == tournament_id,
                Tournament.status == from_status,
            )
            .values(status=to_status, updated_at=now_utc)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return (result.rowcount or 0) == 1

    @staticmethod
    async def cancel_if_open(
        session: AsyncSession,
        *,
        tournament_id: UUID,
        now_utc: datetime,
    ) -> bool:
        stmt = (
            update(Tournament)
            .where(
                Tournament.id == tournament_id,
                Tournament.status.not_in(tuple(TOURNAMENT_TERMINAL_STATUSES)),
                Tournament.end_time >= now_utc,
            )
            .values(status=TOURNAMENT_STATUS_CANCELLED, updated_at=now_utc)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return (result.rowcount or 0) == 1
