from __future__ import annotations

from datetime import datetime, timedelta, timezone

from quizhub.game.tournaments.ranking import build_leaderboard, find_rank
from quizhub.game.tournaments.types import ParticipantStanding

UTC = timezone.utc
BASE = datetime(2026, 3, 1, 18, 0, tzinfo=UTC)


def _standing(
    *,
    user_id: int,
    score: int,
    completed_minute: int | None,
    joined_minute: int = 0,
) -> ParticipantStanding:
    return ParticipantStanding(
        user_id=user_id,
        username=f"player{user_id}",
        avatar="",
        score=score,
        joined_at=BASE - timedelta(hours=1) + timedelta(minutes=joined_minute),
        completed_at=(
            BASE + timedelta(minutes=completed_minute) if completed_minute is not None else None
        ),
    )


def test_build_leaderboard_orders_by_score_then_completion_time() -> None:
    leaderboard = build_leaderboard(
        [
            _standing(user_id=1, score=30, completed_minute=5),
            _standing(user_id=2, score=30, completed_minute=3),
            _standing(user_id=3, score=20, completed_minute=1),
        ]
    )

    assert [(entry.user_id, entry.rank) for entry in leaderboard] == [(2, 1), (1, 2), (3, 3)]


def test_build_leaderboard_skips_participants_who_have_not_finished() -> None:
    leaderboard = build_leaderboard(
        [
            _standing(user_id=1, score=0, completed_minute=None),
            _standing(user_id=2, score=10, completed_minute=4),
        ]
    )

    assert [entry.user_id for entry in leaderboard] == [2]
    assert find_rank(leaderboard, user_id=1) is None
    assert find_rank(leaderboard, user_id=2) == 1


def test_build_leaderboard_keeps_ranks_distinct_on_full_ties() -> None:
    leaderboard = build_leaderboard(
        [
            _standing(user_id=9, score=10, completed_minute=2, joined_minute=1),
            _standing(user_id=4, score=10, completed_minute=2, joined_minute=1),
            _standing(user_id=7, score=10, completed_minute=2, joined_minute=0),
        ]
    )

    assert [entry.user_id for entry in leaderboard] == [7, 4, 9]
    assert [entry.rank for entry in leaderboard] == [1, 2, 3]


def test_build_leaderboard_is_empty_without_finishers() -> None:
    assert build_leaderboard([]) == []
    assert build_leaderboard([_standing(user_id=1, score=0, completed_minute=None)]) == []
