from __future__ import annotations

from uuid import uuid4

import pytest
from sqlalchemy import select

from quizhub.db.models.quiz_attempts import QuizAttempt
from quizhub.db.models.quizzes import Quiz
from quizhub.game.quizzes.errors import QuizNotFoundError, QuizValidationError
from quizhub.game.quizzes.service import create_quiz, get_quiz, submit_quiz
from quizhub.game.quizzes.types import QuestionDraft
from quizhub.game.stats.service import UserStatsService
from tests.integration.tournament_fixtures import (
    DURING,
    START_AT,
    create_two_question_quiz,
    create_user,
)


@pytest.mark.asyncio
async def test_submit_quiz_records_attempt_and_updates_stats(session_factory) -> None:
    owner_id = await create_user(session_factory, "owner")
    player_id = await create_user(session_factory, "player")
    quiz_id = await create_two_question_quiz(session_factory, created_by=owner_id)

    async with session_factory.begin() as session:
        first = await submit_quiz(
            session,
            quiz_id=quiz_id,
            user_id=player_id,
            selected_options=[1, 0],
            now_utc=DURING,
        )
    async with session_factory.begin() as session:
        second = await submit_quiz(
            session,
            quiz_id=quiz_id,
            user_id=player_id,
            selected_options=[0, 0],
            now_utc=DURING,
        )

    assert (first.score, first.max_score, first.percentage) == (30, 30, 100.0)
    assert first.stats.badges == ("Perfect Score",)
    assert [item.correct_option for item in first.results] == [1, 0]
    assert second.stats.total_quizzes == 2
    assert second.stats.total_score == 50
    assert second.stats.average_score == 25.0

    async with session_factory() as session:
        attempts = (await session.execute(select(QuizAttempt))).scalars().all()
        quiz = await session.get(Quiz, quiz_id)
    assert len(attempts) == 2
    assert quiz.total_attempts == 2
    assert quiz.average_score == pytest.approx((100.0 + 200 / 3) / 2)


@pytest.mark.asyncio
async def test_get_quiz_and_missing_quiz(session_factory) -> None:
    owner_id = await create_user(session_factory, "owner")
    quiz_id = await create_two_question_quiz(session_factory, created_by=owner_id)

    async with session_factory() as session:
        snapshot = await get_quiz(session, quiz_id=quiz_id)
        with pytest.raises(QuizNotFoundError):
            await get_quiz(session, quiz_id=uuid4())

    assert snapshot.max_score == 30
    assert [question.position for question in snapshot.questions] == [0, 1]


@pytest.mark.asyncio
async def test_create_quiz_rejects_out_of_range_correct_option(session_factory) -> None:
    owner_id = await create_user(session_factory, "owner")

    with pytest.raises(QuizValidationError):
        async with session_factory.begin() as session:
            await create_quiz(
                session,
                created_by=owner_id,
                title="Broken",
                category="Science",
                questions=[
                    QuestionDraft(
                        question_text="Pick one",
                        options=("a", "b"),
                        correct_option=2,
                        points=10,
                        time_limit_seconds=30,
                        difficulty="easy",
                    )
                ],
                now_utc=START_AT,
            )


@pytest.mark.asyncio
async def test_global_leaderboard_orders_by_average_score(session_factory) -> None:
    owner_id = await create_user(session_factory, "owner")
    strong = await create_user(session_factory, "strong")
    weak = await create_user(session_factory, "weak")
    quiz_id = await create_two_question_quiz(session_factory, created_by=owner_id)
    for user_id, selected in ((weak, [1, 1]), (strong, [1, 0])):
        async with session_factory.begin() as session:
            await submit_quiz(
                session,
                quiz_id=quiz_id,
                user_id=user_id,
                selected_options=selected,
                now_utc=DURING,
            )

    async with session_factory() as session:
        entries = await UserStatsService.get_global_leaderboard(session, limit=2)

    assert [(entry.rank, entry.username) for entry in entries] == [(1, "strong"), (2, "weak")]
