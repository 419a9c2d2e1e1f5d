from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from quizhub.db.repo.tournament_participants_repo import TournamentParticipantsRepo
from quizhub.db.repo.tournaments_repo import TournamentsRepo
from quizhub.game.quizzes.errors import QuizNotFoundError
from quizhub.game.quizzes.scoring import score_answers
from quizhub.game.quizzes.service import load_quiz_snapshot, scoring_questions
from quizhub.game.quizzes.types import ScoreResult
from quizhub.game.stats.service import UserStatsService
from quizhub.game.tournaments.constants import TOURNAMENT_OPERATION_SUBMIT
from quizhub.game.tournaments.errors import (
    TournamentAlreadySubmittedError,
    TournamentNotFoundError,
    TournamentNotRegisteredError,
    TournamentQuizNotFoundError,
)
from quizhub.game.tournaments.internal import standings_from_rows
from quizhub.game.tournaments.lifecycle import (
    derive_tournament_status,
    ensure_operation_allowed,
)
from quizhub.game.tournaments.ranking import build_leaderboard, find_rank
from quizhub.game.tournaments.types import SubmittedAnswer, TournamentSubmitResult

logger = structlog.get_logger(__name__)


def build_stored_answers(
    answers: Sequence[SubmittedAnswer],
    scored: ScoreResult,
) -> list[dict[str, Any]]:
    stored: list[dict[str, Any]] = []
    for result in scored.per_question:
        submitted = answers[result.question_index] if result.question_index < len(answers) else None
        stored.append(
            {
                "question_index": result.question_index,
                "selected_answer": result.selected_option,
                "time_spent": max(0, int(submitted.time_spent)) if submitted is not None else 0,
                "is_correct": result.is_correct,
            }
        )
    return stored


async def submit_tournament_answers(
    session: AsyncSession,
    *,
    tournament_id: UUID,
    user_id: int,
    answers: Sequence[SubmittedAnswer],
    now_utc: datetime,
    update_user_stats: bool = False,
) -> TournamentSubmitResult:
    """Scores and stores a participant's single attempt, then ranks it.

    Only the first accepted submission counts. A later or concurrent one fails
    with ``TournamentAlreadySubmittedError`` and leaves the stored score as is.
    """
    tournament = await TournamentsRepo.get_by_id(session, tournament_id)
    if tournament is None:
        raise TournamentNotFoundError
    ensure_operation_allowed(
        status=derive_tournament_status(tournament, now_utc=now_utc),
        operation=TOURNAMENT_OPERATION_SUBMIT,
    )
    participant = await TournamentParticipantsRepo.get(
        session,
        tournament_id=tournament_id,
        user_id=user_id,
    )
    if participant is None:
        raise TournamentNotRegisteredError
    if participant.completed_at is not None:
        raise TournamentAlreadySubmittedError

    try:
        quiz = await load_quiz_snapshot(session, tournament.quiz_id)
    except QuizNotFoundError as exc:
        raise TournamentQuizNotFoundError from exc

    scored = score_answers(
        scoring_questions(quiz.questions),
        [answer.selected_answer for answer in answers],
        options_totals=[len(question.options) for question in quiz.questions],
    )
    completed = await TournamentParticipantsRepo.complete_once(
        session,
        tournament_id=tournament_id,
        user_id=user_id,
        score=scored.total_score,
        answers=build_stored_answers(answers, scored),
        completed_at=now_utc,
    )
    if not completed:
        tournament = await TournamentsRepo.get_by_id(session, tournament_id, refresh=True)
        if tournament is None:
            raise TournamentNotFoundError
        ensure_operation_allowed(
            status=derive_tournament_status(tournament, now_utc=now_utc),
            operation=TOURNAMENT_OPERATION_SUBMIT,
        )
        raise TournamentAlreadySubmittedError

    if update_user_stats:
        await UserStatsService.record_quiz_result(
            session,
            user_id=user_id,
            score=scored.total_score,
            max_score=quiz.max_score,
        )

    rows = await TournamentParticipantsRepo.list_standings(session, tournament_id=tournament_id)
    leaderboard = build_leaderboard(standings_from_rows(rows))
    rank = find_rank(leaderboard, user_id=user_id)
    logger.info(
        "tournament_submission_scored",
        tournament_id=str(tournament_id),
        user_id=user_id,
        score=scored.total_score,
        max_score=quiz.max_score,
        rank=rank,
    )
    return TournamentSubmitResult(
        tournament_id=tournament_id,
        user_id=user_id,
        score=scored.total_score,
        max_score=quiz.max_score,
        rank=rank,
        leaderboard=tuple(leaderboard),
    )
