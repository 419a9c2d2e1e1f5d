from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from quizhub.db.repo.tournament_participants_repo import TournamentParticipantsRepo
from quizhub.db.repo.tournaments_repo import TournamentsRepo
from quizhub.game.tournaments.errors import TournamentNotFoundError
from quizhub.game.tournaments.internal import build_tournament_snapshot, standings_from_rows
from quizhub.game.tournaments.lifecycle import sync_stored_status
from quizhub.game.tournaments.ranking import build_leaderboard
from quizhub.game.tournaments.types import LeaderboardEntry, TournamentSnapshot


async def get_tournament(
    session: AsyncSession,
    *,
    tournament_id: UUID,
    now_utc: datetime,
) -> TournamentSnapshot:
    tournament = await TournamentsRepo.get_by_id(session, tournament_id, refresh=True)
    if tournament is None:
        raise TournamentNotFoundError
    status = await sync_stored_status(session, tournament=tournament, now_utc=now_utc)
    prizes = await TournamentsRepo.list_prizes(session, tournament_id=tournament_id)
    return build_tournament_snapshot(tournament, status=status, prizes=prizes)


async def get_leaderboard(
    session: AsyncSession,
    *,
    tournament_id: UUID,
) -> list[LeaderboardEntry]:
    tournament = await TournamentsRepo.get_by_id(session, tournament_id)
    if tournament is None:
        raise TournamentNotFoundError
    rows = await TournamentParticipantsRepo.list_standings(session, tournament_id=tournament_id)
    return build_leaderboard(standings_from_rows(rows))
