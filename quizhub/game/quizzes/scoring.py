from __future__ import annotations

from collections.abc import Sequence

from quizhub.game.quizzes.types import QuestionResult, ScoreResult, ScoringQuestion


def _normalize_selected_option(raw: object, *, options_total: int | None) -> int | None:
    # bool is an int subclass, but True is never a valid option index.
    if raw is None or isinstance(raw, bool) or not isinstance(raw, int):
        return None
    if raw < 0:
        return None
    if options_total is not None and raw >= options_total:
        return None
    return raw


def score_answers(
    questions: Sequence[ScoringQuestion],
    selected_options: Sequence[object],
    *,
    options_totals: Sequence[int] | None = None,
) -> ScoreResult:
    """Scores a submission against the quiz questions.

    ``selected_options[i]`` answers ``questions[i]``. Missing, ``None``,
    non-integer and out-of-range answers count as incorrect; extra answers
    beyond the last question are ignored. The function is pure: equal inputs
    always yield equal results.
    """
    results: list[QuestionResult] = []
    total_score = 0
    for index, question in enumerate(questions):
        raw = selected_options[index] if index < len(selected_options) else None
        options_total = options_totals[index] if options_totals is not None else None
        selected = _normalize_selected_option(raw, options_total=options_total)
        is_correct = selected is not None and selected == question.correct_option
        points_awarded = question.points if is_correct else 0
        total_score += points_awarded
        results.append(
            QuestionResult(
                question_index=index,
                selected_option=selected,
                correct_option=question.correct_option,
                is_correct=is_correct,
                points_awarded=points_awarded,
            )
        )
    return ScoreResult(per_question=tuple(results), total_score=total_score)


def max_score(questions: Sequence[ScoringQuestion]) -> int:
    return sum(int(question.points) for question in questions)


def score_percentage(*, score: int, max_score: int) -> float:
    if max_score <= 0:
        return 0.0
    return score / max_score * 100
