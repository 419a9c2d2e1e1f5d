from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import DBAPIError, OperationalError

from quizhub.api.routes.errors import as_http_error
from quizhub.api.routes.identity import require_user_id
from quizhub.api.routes.quizzes_models import (
    QuestionResponse,
    QuestionResultResponse,
    QuizCreateRequest,
    QuizResponse,
    QuizSubmitRequest,
    QuizSubmitResponse,
    UserStatsResponse,
)
from quizhub.db.errors import StorageUnavailableError
from quizhub.db.session import SessionLocal
from quizhub.game.quizzes import service as quiz_service
from quizhub.game.quizzes.errors import QuizError
from quizhub.game.quizzes.types import QuestionDraft, QuizSnapshot

router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])
logger = structlog.get_logger(__name__)


def _as_quiz_response(snapshot: QuizSnapshot) -> QuizResponse:
    return QuizResponse(
        id=snapshot.quiz_id,
        title=snapshot.title,
        description=snapshot.description,
        category=snapshot.category,
        difficulty=snapshot.difficulty,
        created_by=snapshot.created_by,
        is_public=snapshot.is_public,
        time_limit_seconds=snapshot.time_limit_seconds,
        total_attempts=snapshot.total_attempts,
        average_score=snapshot.average_score,
        max_score=snapshot.max_score,
        questions=[
            QuestionResponse(
                position=question.position,
                question_text=question.question_text,
                options=list(question.options),
                points=question.points,
                time_limit_seconds=question.time_limit_seconds,
                difficulty=question.difficulty,
            )
            for question in snapshot.questions
        ],
        created_at=snapshot.created_at,
    )


def _storage_error(operation: str, exc: Exception) -> StorageUnavailableError:
    logger.warning("storage_unavailable", operation=operation, error=type(exc).__name__)
    return StorageUnavailableError()


@router.post("", response_model=QuizResponse, status_code=status.HTTP_201_CREATED)
async def create_quiz(
    payload: QuizCreateRequest,
    user_id: int = Depends(require_user_id),
) -> QuizResponse:
    try:
        async with SessionLocal.begin() as session:
            snapshot = await quiz_service.create_quiz(
                session,
                created_by=user_id,
                title=payload.title,
                description=payload.description,
                category=payload.category,
                difficulty=payload.difficulty,
                is_public=payload.is_public,
                time_limit_seconds=payload.time_limit_seconds,
                questions=[
                    QuestionDraft(
                        question_text=question.question_text,
                        options=tuple(question.options),
                        correct_option=question.correct_option,
                        points=question.points,
                        time_limit_seconds=question.time_limit_seconds,
                        difficulty=question.difficulty,
                    )
                    for question in payload.questions
                ],
                now_utc=datetime.now(timezone.utc),
            )
    except QuizError as exc:
        raise as_http_error(exc) from exc
    except (OperationalError, DBAPIError) as exc:
        raise as_http_error(_storage_error("create_quiz", exc)) from exc
    return _as_quiz_response(snapshot)


@router.get("/{quiz_id}", response_model=QuizResponse)
async def get_quiz(quiz_id: UUID) -> QuizResponse:
    try:
        async with SessionLocal() as session:
            snapshot = await quiz_service.get_quiz(session, quiz_id=quiz_id)
    except QuizError as exc:
        raise as_http_error(exc) from exc
    except (OperationalError, DBAPIError) as exc:
        raise as_http_error(_storage_error("get_quiz", exc)) from exc
    return _as_quiz_response(snapshot)


@router.post("/{quiz_id}/submit", response_model=QuizSubmitResponse)
async def submit_quiz(
    quiz_id: UUID,
    payload: QuizSubmitRequest,
    user_id: int = Depends(require_user_id),
) -> QuizSubmitResponse:
    try:
        async with SessionLocal.begin() as session:
            result = await quiz_service.submit_quiz(
                session,
                quiz_id=quiz_id,
                user_id=user_id,
                selected_options=payload.answers,
                now_utc=datetime.now(timezone.utc),
            )
    except QuizError as exc:
        raise as_http_error(exc) from exc
    except (OperationalError, DBAPIError) as exc:
        raise as_http_error(_storage_error("submit_quiz", exc)) from exc
    return QuizSubmitResponse(
        quiz_id=result.quiz_id,
        score=result.score,
        max_score=result.max_score,
        percentage=result.percentage,
        results=[
            QuestionResultResponse(
                question_index=item.question_index,
                selected_option=item.selected_option,
                correct_option=item.correct_option,
                is_correct=item.is_correct,
                points_awarded=item.points_awarded,
            )
            for item in result.results
        ],
        stats=UserStatsResponse(
            total_quizzes=result.stats.total_quizzes,
            total_score=result.stats.total_score,
            average_score=result.stats.average_score,
            badges=list(result.stats.badges),
        ),
    )
