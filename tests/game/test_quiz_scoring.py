from __future__ import annotations

from quizhub.game.quizzes.scoring import max_score, score_answers, score_percentage
from quizhub.game.quizzes.types import ScoringQuestion

QUESTIONS = [
    ScoringQuestion(correct_option=1, points=10),
    ScoringQuestion(correct_option=0, points=20),
]


def test_score_answers_awards_points_for_all_correct() -> None:
    result = score_answers(QUESTIONS, [1, 0])

    assert result.total_score == 30
    assert [item.is_correct for item in result.per_question] == [True, True]
    assert [item.points_awarded for item in result.per_question] == [10, 20]


def test_score_answers_counts_only_matching_options() -> None:
    result = score_answers(QUESTIONS, [0, 0])

    assert result.total_score == 20
    assert result.per_question[0].is_correct is False
    assert result.per_question[0].correct_option == 1
    assert result.per_question[1].points_awarded == 20


def test_score_answers_treats_unanswered_as_incorrect() -> None:
    result = score_answers(QUESTIONS, [None, 1])

    assert result.total_score == 0
    assert result.per_question[0].selected_option is None


def test_score_answers_handles_missing_and_extra_answers() -> None:
    short = score_answers(QUESTIONS, [1])
    long = score_answers(QUESTIONS, [1, 0, 3, 2])

    assert short.total_score == 10
    assert short.per_question[1].selected_option is None
    assert long.total_score == 30
    assert len(long.per_question) == 2


def test_score_answers_rejects_out_of_range_and_non_integer_answers() -> None:
    result = score_answers(
        QUESTIONS,
        [True, "0"],
        options_totals=[3, 2],
    )
    out_of_range = score_answers(
        [ScoringQuestion(correct_option=0, points=5)],
        [-1],
        options_totals=[2],
    )

    assert result.total_score == 0
    assert out_of_range.total_score == 0
    assert score_answers(QUESTIONS, [7, 0], options_totals=[3, 2]).per_question[0].selected_option is None


def test_score_answers_is_deterministic() -> None:
    first = score_answers(QUESTIONS, [1, 1])
    second = score_answers(QUESTIONS, [1, 1])

    assert first == second


def test_max_score_and_percentage() -> None:
    assert max_score(QUESTIONS) == 30
    assert max_score([]) == 0
    assert score_percentage(score=15, max_score=30) == 50.0
    assert score_percentage(score=0, max_score=0) == 0.0
