from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID, uuid4

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from quizhub.db.models.quiz_attempts import QuizAttempt
from quizhub.db.models.quiz_questions import QuizQuestion
from quizhub.db.models.quizzes import Quiz
from quizhub.db.repo.quiz_attempts_repo import QuizAttemptsRepo
from quizhub.db.repo.quizzes_repo import QuizzesRepo
from quizhub.db.repo.users_repo import UsersRepo
from quizhub.game.quizzes.constants import (
    QUESTION_MIN_OPTIONS,
    QUIZ_CATEGORIES,
    QUIZ_DEFAULT_DIFFICULTY,
    QUIZ_DIFFICULTIES,
)
from quizhub.game.quizzes.errors import (
    QuizNotFoundError,
    QuizUserNotFoundError,
    QuizValidationError,
)
from quizhub.game.quizzes.scoring import max_score, score_answers, score_percentage
from quizhub.game.quizzes.types import (
    QuestionDraft,
    QuizQuestionSnapshot,
    QuizSnapshot,
    QuizSubmitResult,
    ScoringQuestion,
)
from quizhub.game.stats.service import UserStatsService

logger = structlog.get_logger(__name__)


def _question_snapshot(row: QuizQuestion) -> QuizQuestionSnapshot:
    return QuizQuestionSnapshot(
        position=int(row.position),
        question_text=row.question_text,
        options=tuple(row.options or ()),
        correct_option=int(row.correct_option),
        points=int(row.points),
        time_limit_seconds=int(row.time_limit_seconds),
        difficulty=row.difficulty,
    )


def build_quiz_snapshot(quiz: Quiz, questions: Sequence[QuizQuestion]) -> QuizSnapshot:
    question_snapshots = tuple(_question_snapshot(row) for row in questions)
    return QuizSnapshot(
        quiz_id=quiz.id,
        title=quiz.title,
        description=quiz.description,
        category=quiz.category,
        difficulty=quiz.difficulty,
        created_by=int(quiz.created_by),
        is_public=bool(quiz.is_public),
        time_limit_seconds=int(quiz.time_limit_seconds),
        total_attempts=int(quiz.total_attempts),
        average_score=float(quiz.average_score),
        questions=question_snapshots,
        max_score=max_score(scoring_questions(question_snapshots)),
        created_at=quiz.created_at,
    )


def scoring_questions(questions: Sequence[QuizQuestionSnapshot]) -> list[ScoringQuestion]:
    return [
        ScoringQuestion(correct_option=question.correct_option, points=question.points)
        for question in questions
    ]


def validate_question_drafts(questions: Sequence[QuestionDraft]) -> None:
    if not questions:
        raise QuizValidationError("quiz must contain at least one question")
    for index, question in enumerate(questions):
        if not question.question_text.strip():
            raise QuizValidationError(f"question {index} text must not be blank")
        if len(question.options) < QUESTION_MIN_OPTIONS:
            raise QuizValidationError(
                f"question {index} needs at least {QUESTION_MIN_OPTIONS} options"
            )
        if not 0 <= question.correct_option < len(question.options):
            raise QuizValidationError(f"question {index} correct option is out of range")
        if question.points <= 0:
            raise QuizValidationError(f"question {index} points must be positive")
        if question.time_limit_seconds <= 0:
            raise QuizValidationError(f"question {index} time limit must be positive")
        if question.difficulty not in QUIZ_DIFFICULTIES:
            raise QuizValidationError(f"question {index} difficulty is unknown")


async def load_quiz_snapshot(session: AsyncSession, quiz_id: UUID) -> QuizSnapshot:
    quiz = await QuizzesRepo.get_by_id(session, quiz_id)
    if quiz is None:
        raise QuizNotFoundError
    questions = await QuizzesRepo.list_questions(session, quiz_id=quiz.id)
    return build_quiz_snapshot(quiz, questions)


async def create_quiz(
    session: AsyncSession,
    *,
    created_by: int,
    title: str,
    category: str,
    questions: Sequence[QuestionDraft],
    now_utc: datetime,
    description: str = "",
    difficulty: str = QUIZ_DEFAULT_DIFFICULTY,
    is_public: bool = True,
    time_limit_seconds: int = 0,
) -> QuizSnapshot:
    if not title.strip():
        raise QuizValidationError("title must not be blank")
    if category not in QUIZ_CATEGORIES:
        raise QuizValidationError("category is unknown")
    if difficulty not in QUIZ_DIFFICULTIES:
        raise QuizValidationError("difficulty is unknown")
    if time_limit_seconds < 0:
        raise QuizValidationError("time limit must not be negative")
    validate_question_drafts(questions)
    if await UsersRepo.get_by_id(session, created_by) is None:
        raise QuizUserNotFoundError

    quiz_id = uuid4()
    quiz = Quiz(
        id=quiz_id,
        title=title.strip(),
        description=description.strip(),
        category=category,
        difficulty=difficulty,
        created_by=created_by,
        is_public=is_public,
        time_limit_seconds=time_limit_seconds,
        total_attempts=0,
        average_score=0.0,
        created_at=now_utc,
    )
    rows = [
        QuizQuestion(
            quiz_id=quiz_id,
            position=position,
            question_text=draft.question_text.strip(),
            options=list(draft.options),
            correct_option=draft.correct_option,
            points=draft.points,
            time_limit_seconds=draft.time_limit_seconds,
            difficulty=draft.difficulty,
        )
        for position, draft in enumerate(questions)
    ]
    await QuizzesRepo.create(session, quiz=quiz, questions=rows)
    logger.info("quiz_created", quiz_id=str(quiz_id), created_by=created_by, questions=len(rows))
    return build_quiz_snapshot(quiz, rows)


async def get_quiz(session: AsyncSession, *, quiz_id: UUID) -> QuizSnapshot:
    return await load_quiz_snapshot(session, quiz_id)


async def submit_quiz(
    session: AsyncSession,
    *,
    quiz_id: UUID,
    user_id: int,
    selected_options: Sequence[object],
    now_utc: datetime,
) -> QuizSubmitResult:
    quiz = await QuizzesRepo.get_by_id_for_update(session, quiz_id)
    if quiz is None:
        raise QuizNotFoundError
    questions = [
        _question_snapshot(row) for row in await QuizzesRepo.list_questions(session, quiz_id=quiz.id)
    ]

    scored = score_answers(
        scoring_questions(questions),
        selected_options,
        options_totals=[len(question.options) for question in questions],
    )
    quiz_max_score = max_score(scoring_questions(questions))
    percentage = score_percentage(score=scored.total_score, max_score=quiz_max_score)

    stats = await UserStatsService.record_quiz_result(
        session,
        user_id=user_id,
        score=scored.total_score,
        max_score=quiz_max_score,
    )
    await QuizAttemptsRepo.create(
        session,
        attempt=QuizAttempt(
            user_id=user_id,
            quiz_id=quiz.id,
            score=scored.total_score,
            max_score=quiz_max_score,
            percentage=percentage,
            attempted_at=now_utc,
        ),
    )

    attempts_total = int(quiz.total_attempts) + 1
    quiz.average_score = (
        float(quiz.average_score) * (attempts_total - 1) + percentage
    ) / attempts_total
    quiz.total_attempts = attempts_total

    logger.info(
        "quiz_submission_scored",
        quiz_id=str(quiz.id),
        user_id=user_id,
        score=scored.total_score,
        max_score=quiz_max_score,
    )
    return QuizSubmitResult(
        quiz_id=quiz.id,
        score=scored.total_score,
        max_score=quiz_max_score,
        percentage=percentage,
        results=scored.per_question,
        stats=stats,
    )
