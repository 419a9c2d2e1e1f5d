from __future__ import annotations

from fastapi import HTTPException

from quizhub.db.errors import StorageUnavailableError
from quizhub.game.quizzes.errors import (
    QuizError,
    QuizNotFoundError,
    QuizUserNotFoundError,
    QuizValidationError,
)
from quizhub.game.tournaments.errors import (
    TournamentAccessError,
    TournamentAlreadyJoinedError,
    TournamentAlreadySubmittedError,
    TournamentError,
    TournamentFullError,
    TournamentInvalidStateError,
    TournamentNotFoundError,
    TournamentNotRegisteredError,
    TournamentQuizNotFoundError,
    TournamentUserNotFoundError,
    TournamentValidationError,
)

_STATUS_BY_ERROR: dict[type[Exception], int] = {
    TournamentNotFoundError: 404,
    TournamentQuizNotFoundError: 404,
    TournamentUserNotFoundError: 404,
    TournamentInvalidStateError: 409,
    TournamentFullError: 409,
    TournamentAlreadyJoinedError: 409,
    TournamentAlreadySubmittedError: 409,
    TournamentNotRegisteredError: 403,
    TournamentAccessError: 403,
    TournamentValidationError: 422,
    QuizNotFoundError: 404,
    QuizUserNotFoundError: 404,
    QuizValidationError: 422,
    StorageUnavailableError: 503,
}


def error_detail(exc: TournamentError | QuizError | StorageUnavailableError) -> dict[str, str]:
    message = str(exc) or exc.message
    return {"code": exc.code, "message": message}


def as_http_error(exc: TournamentError | QuizError | StorageUnavailableError) -> HTTPException:
    status_code = _STATUS_BY_ERROR.get(type(exc), 400)
    return HTTPException(status_code=status_code, detail=error_detail(exc))
