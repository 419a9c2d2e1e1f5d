from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from quizhub.db.models.tournaments import Tournament
from quizhub.db.repo.tournaments_repo import TournamentsRepo
from quizhub.game.tournaments.constants import (
    TOURNAMENT_OPERATION_JOIN,
    TOURNAMENT_OPERATION_SUBMIT,
    TOURNAMENT_OPERATION_VIEW,
    TOURNAMENT_STATUS_ACTIVE,
    TOURNAMENT_STATUS_CANCELLED,
    TOURNAMENT_STATUS_COMPLETED,
    TOURNAMENT_STATUS_UPCOMING,
    TOURNAMENT_STATUSES,
    TOURNAMENT_TERMINAL_STATUSES,
)
from quizhub.game.tournaments.errors import TournamentInvalidStateError

logger = structlog.get_logger(__name__)

_ALLOWED_STATUSES_BY_OPERATION: dict[str, frozenset[str]] = {
    TOURNAMENT_OPERATION_JOIN: frozenset({TOURNAMENT_STATUS_UPCOMING}),
    TOURNAMENT_OPERATION_SUBMIT: frozenset({TOURNAMENT_STATUS_ACTIVE}),
    TOURNAMENT_OPERATION_VIEW: TOURNAMENT_STATUSES,
}

# upcoming -> completed happens when nothing touched the tournament during its window.
_ALLOWED_TRANSITIONS = frozenset(
    {
        (TOURNAMENT_STATUS_UPCOMING, TOURNAMENT_STATUS_ACTIVE),
        (TOURNAMENT_STATUS_UPCOMING, TOURNAMENT_STATUS_COMPLETED),
        (TOURNAMENT_STATUS_ACTIVE, TOURNAMENT_STATUS_COMPLETED),
        (TOURNAMENT_STATUS_UPCOMING, TOURNAMENT_STATUS_CANCELLED),
        (TOURNAMENT_STATUS_ACTIVE, TOURNAMENT_STATUS_CANCELLED),
    }
)


def derive_status(
    *,
    stored_status: str,
    start_time: datetime,
    end_time: datetime,
    now_utc: datetime,
) -> str:
    """Returns the authoritative status of a tournament at ``now_utc``.

    Terminal statuses stick. Otherwise the status follows the clock: active
    while ``start_time <= now_utc <= end_time``, completed once ``end_time``
    has passed.
    """
    if stored_status in TOURNAMENT_TERMINAL_STATUSES:
        return stored_status
    if now_utc > end_time:
        return TOURNAMENT_STATUS_COMPLETED
    if now_utc >= start_time:
        return TOURNAMENT_STATUS_ACTIVE
    return TOURNAMENT_STATUS_UPCOMING


def derive_tournament_status(tournament: Tournament, *, now_utc: datetime) -> str:
    return derive_status(
        stored_status=tournament.status,
        start_time=tournament.start_time,
        end_time=tournament.end_time,
        now_utc=now_utc,
    )


def is_operation_allowed(*, status: str, operation: str) -> bool:
    return status in _ALLOWED_STATUSES_BY_OPERATION.get(operation, frozenset())


def ensure_operation_allowed(*, status: str, operation: str) -> None:
    if not is_operation_allowed(status=status, operation=operation):
        raise TournamentInvalidStateError(
            f"cannot {operation} a tournament that is {status}"
        )


def is_transition_allowed(*, from_status: str, to_status: str) -> bool:
    return (from_status, to_status) in _ALLOWED_TRANSITIONS


async def sync_stored_status(
    session: AsyncSession,
    *,
    tournament: Tournament,
    now_utc: datetime,
) -> str:
    """Persists the clock-derived status when the stored one lags behind."""
    derived = derive_tournament_status(tournament, now_utc=now_utc)
    if derived == tournament.status:
        return derived
    if not is_transition_allowed(from_status=tournament.status, to_status=derived):
        return derived

    moved = await TournamentsRepo.transition_status(
        session,
        tournament_id=tournament.id,
        from_status=tournament.status,
        to_status=derived,
        now_utc=now_utc,
    )
    if moved:
        logger.info(
            "tournament_status_synced",
            tournament_id=str(tournament.id),
            from_status=tournament.status,
            to_status=derived,
        )
    return derived
