from __future__ import annotations

from quizhub.game.quizzes.scoring import score_percentage
from quizhub.game.stats.constants import (
    BADGE_PERFECT_SCORE,
    BADGE_QUIZ_MASTER,
    PERFECT_SCORE_PERCENTAGE,
    QUIZ_MASTER_MIN_QUIZZES,
)
from quizhub.game.stats.types import UserStatsSnapshot


def apply_quiz_result(stats: UserStatsSnapshot, *, score: int, max_score: int) -> UserStatsSnapshot:
    total_quizzes = stats.total_quizzes + 1
    total_score = stats.total_score + int(score)
    badges = list(stats.badges)

    percentage = score_percentage(score=score, max_score=max_score)
    if percentage >= PERFECT_SCORE_PERCENTAGE and BADGE_PERFECT_SCORE not in badges:
        badges.append(BADGE_PERFECT_SCORE)
    if total_quizzes >= QUIZ_MASTER_MIN_QUIZZES and BADGE_QUIZ_MASTER not in badges:
        badges.append(BADGE_QUIZ_MASTER)

    return UserStatsSnapshot(
        total_quizzes=total_quizzes,
        total_score=total_score,
        average_score=total_score / total_quizzes,
        badges=tuple(badges),
    )
