from __future__ import annotations

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from quizhub.db.models.users import User
from quizhub.db.repo.users_repo import UsersRepo
from quizhub.game.quizzes.errors import QuizUserNotFoundError
from quizhub.game.stats.constants import GLOBAL_LEADERBOARD_DEFAULT_LIMIT
from quizhub.game.stats.rules import apply_quiz_result
from quizhub.game.stats.types import GlobalLeaderboardEntry, UserStatsSnapshot

logger = structlog.get_logger(__name__)


def build_stats_snapshot(user: User) -> UserStatsSnapshot:
    return UserStatsSnapshot(
        total_quizzes=int(user.total_quizzes),
        total_score=int(user.total_score),
        average_score=float(user.average_score),
        badges=tuple(user.badges or ()),
    )


class UserStatsService:
    @staticmethod
    async def record_quiz_result(
        session: AsyncSession,
        *,
        user_id: int,
        score: int,
        max_score: int,
    ) -> UserStatsSnapshot:
        user = await UsersRepo.get_by_id_for_update(session, user_id)
        if user is None:
            raise QuizUserNotFoundError

        updated = apply_quiz_result(build_stats_snapshot(user), score=score, max_score=max_score)
        new_badges = [badge for badge in updated.badges if badge not in (user.badges or [])]

        user.total_quizzes = updated.total_quizzes
        user.total_score = updated.total_score
        user.average_score = updated.average_score
        user.badges = list(updated.badges)

        if new_badges:
            logger.info("user_badges_awarded", user_id=user_id, badges=new_badges)
        return updated

    @staticmethod
    async def get_global_leaderboard(
        session: AsyncSession,
        *,
        limit: int = GLOBAL_LEADERBOARD_DEFAULT_LIMIT,
    ) -> list[GlobalLeaderboardEntry]:
        users = await UsersRepo.list_top_by_average_score(session, limit=limit)
        return [
            GlobalLeaderboardEntry(
                rank=index + 1,
                user_id=int(user.id),
                username=user.username,
                avatar=user.avatar,
                total_quizzes=int(user.total_quizzes),
                total_score=int(user.total_score),
                average_score=float(user.average_score),
                badges=tuple(user.badges or ()),
            )
            for index, user in enumerate(users)
        ]
