from __future__ import annotations

from quizhub.game.stats.rules import apply_quiz_result
from quizhub.game.stats.types import UserStatsSnapshot

EMPTY = UserStatsSnapshot(total_quizzes=0, total_score=0, average_score=0.0, badges=())


def test_apply_quiz_result_updates_totals_and_average() -> None:
    first = apply_quiz_result(EMPTY, score=20, max_score=30)
    second = apply_quiz_result(first, score=10, max_score=30)

    assert second.total_quizzes == 2
    assert second.total_score == 30
    assert second.average_score == 15.0
    assert second.badges == ()


def test_apply_quiz_result_awards_perfect_score_once() -> None:
    first = apply_quiz_result(EMPTY, score=30, max_score=30)
    second = apply_quiz_result(first, score=30, max_score=30)

    assert first.badges == ("Perfect Score",)
    assert second.badges == ("Perfect Score",)


def test_apply_quiz_result_zero_max_score_is_not_perfect() -> None:
    result = apply_quiz_result(EMPTY, score=0, max_score=0)

    assert result.badges == ()
    assert result.total_quizzes == 1


def test_apply_quiz_result_awards_quiz_master_at_ten_quizzes() -> None:
    stats = UserStatsSnapshot(total_quizzes=9, total_score=90, average_score=10.0, badges=())

    result = apply_quiz_result(stats, score=5, max_score=30)

    assert result.total_quizzes == 10
    assert "Quiz Master" in result.badges
