from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from quizhub.core.config import Settings
from quizhub.db.errors import StorageUnavailableError
from quizhub.game.tournaments.cancel import cancel_tournament
from quizhub.game.tournaments.constants import (
    EVENT_PARTICIPANT_FINISHED,
    EVENT_PARTICIPANT_JOINED,
)
from quizhub.game.tournaments.create_join import create_tournament, join_tournament
from quizhub.game.tournaments.errors import TournamentError
from quizhub.game.tournaments.queries import get_leaderboard, get_tournament
from quizhub.game.tournaments.submission import submit_tournament_answers
from quizhub.game.tournaments.types import (
    LeaderboardEntry,
    SubmittedAnswer,
    TournamentJoinResult,
    TournamentPrizeSnapshot,
    TournamentSnapshot,
    TournamentSubmitResult,
)
from quizhub.realtime.events import participant_finished_payload, participant_joined_payload
from quizhub.realtime.publisher import TournamentPublisher

logger = structlog.get_logger(__name__)


class TournamentService:
    """Runs each tournament operation in its own transaction.

    Live notifications go out only after the transaction has committed, so
    subscribers never see an effect that was rolled back.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        publisher: TournamentPublisher,
        settings: Settings,
    ) -> None:
        self._session_factory = session_factory
        self._publisher = publisher
        self._settings = settings

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory.begin() as session:
                yield session
        except TournamentError as exc:
            logger.info("tournament_operation_rejected", operation=operation, code=exc.code)
            raise
        except (OperationalError, DBAPIError) as exc:
            logger.warning("storage_unavailable", operation=operation, error=type(exc).__name__)
            raise StorageUnavailableError from exc

    async def create_tournament(
        self,
        *,
        created_by: int,
        quiz_id: UUID,
        title: str,
        start_time: datetime,
        end_time: datetime,
        now_utc: datetime,
        description: str = "",
        max_participants: int | None = None,
        is_private: bool = False,
        prizes: Sequence[TournamentPrizeSnapshot] = (),
    ) -> TournamentSnapshot:
        if max_participants is None:
            max_participants = self._settings.tournament_default_max_participants
        async with self._transaction("create") as session:
            return await create_tournament(
                session,
                created_by=created_by,
                quiz_id=quiz_id,
                title=title,
                description=description,
                start_time=start_time,
                end_time=end_time,
                now_utc=now_utc,
                max_participants=max_participants,
                min_participants=self._settings.tournament_min_participants,
                is_private=is_private,
                prizes=prizes,
                invite_code_length=self._settings.invite_code_length,
            )

    async def join(
        self,
        *,
        tournament_id: UUID,
        user_id: int,
        now_utc: datetime,
    ) -> TournamentJoinResult:
        async with self._transaction("join") as session:
            result = await join_tournament(
                session,
                tournament_id=tournament_id,
                user_id=user_id,
                now_utc=now_utc,
            )
        await self._publisher.publish(
            tournament_id,
            EVENT_PARTICIPANT_JOINED,
            participant_joined_payload(participant_count=result.participants_total),
        )
        return result

    async def submit(
        self,
        *,
        tournament_id: UUID,
        user_id: int,
        answers: Sequence[SubmittedAnswer],
        now_utc: datetime,
    ) -> TournamentSubmitResult:
        async with self._transaction("submit") as session:
            result = await submit_tournament_answers(
                session,
                tournament_id=tournament_id,
                user_id=user_id,
                answers=answers,
                now_utc=now_utc,
                update_user_stats=self._settings.tournament_updates_user_stats,
            )
        await self._publisher.publish(
            tournament_id,
            EVENT_PARTICIPANT_FINISHED,
            participant_finished_payload(
                participant_id=user_id,
                score=result.score,
                leaderboard=result.leaderboard,
            ),
        )
        return result

    async def leaderboard(self, *, tournament_id: UUID) -> list[LeaderboardEntry]:
        async with self._transaction("leaderboard") as session:
            return await get_leaderboard(session, tournament_id=tournament_id)

    async def get_tournament(self, *, tournament_id: UUID, now_utc: datetime) -> TournamentSnapshot:
        async with self._transaction("view") as session:
            return await get_tournament(session, tournament_id=tournament_id, now_utc=now_utc)

    async def cancel(
        self,
        *,
        tournament_id: UUID,
        user_id: int,
        now_utc: datetime,
    ) -> TournamentSnapshot:
        async with self._transaction("cancel") as session:
            return await cancel_tournament(
                session,
                tournament_id=tournament_id,
                user_id=user_id,
                now_utc=now_utc,
            )
