from __future__ import annotations

from collections.abc import Iterable, Sequence

from quizhub.game.tournaments.types import LeaderboardEntry, ParticipantStanding


def _standing_sort_key(standing: ParticipantStanding) -> tuple:
    # Equal scores resolve by earlier finish, then earlier join, then user id.
    return (-standing.score, standing.completed_at, standing.joined_at, standing.user_id)


def build_leaderboard(standings: Iterable[ParticipantStanding]) -> list[LeaderboardEntry]:
    """Ranks finished participants; unfinished ones are not listed.

    Ranks are 1-based and distinct even when scores tie.
    """
    finished = [standing for standing in standings if standing.completed_at is not None]
    finished.sort(key=_standing_sort_key)
    return [
        LeaderboardEntry(
            rank=index + 1,
            user_id=standing.user_id,
            username=standing.username,
            avatar=standing.avatar,
            score=standing.score,
            completed_at=standing.completed_at,
        )
        for index, standing in enumerate(finished)
    ]


def find_rank(leaderboard: Sequence[LeaderboardEntry], *, user_id: int) -> int | None:
    for entry in leaderboard:
        if entry.user_id == user_id:
            return entry.rank
    return None
