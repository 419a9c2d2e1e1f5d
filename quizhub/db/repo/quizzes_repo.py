from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quizhub.db.models.quiz_questions import QuizQuestion
from quizhub.db.models.quizzes import Quiz


class QuizzesRepo:
    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        quiz: Quiz,
        questions: Sequence[QuizQuestion],
    ) -> Quiz:
        session.add(quiz)
        session.add_all(list(questions))
        await session.flush()
        return quiz

    @staticmethod
    async def get_by_id(session: AsyncSession, quiz_id: UUID) -> Quiz | None:
        return await session.get(Quiz, quiz_id)

    @staticmethod
    async def get_by_id_for_update(session: AsyncSession, quiz_id: UUID) -> Quiz | None:
        stmt = select(Quiz).where(Quiz.id == quiz_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_questions(session: AsyncSession, *, quiz_id: UUID) -> list[QuizQuestion]:
        stmt = (
            select(QuizQuestion)
            .where(QuizQuestion.quiz_id == quiz_id)
            .order_by(QuizQuestion.position.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
