from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from quizhub.game.stats.types import UserStatsSnapshot


@dataclass(frozen=True, slots=True)
class ScoringQuestion:
    correct_option: int
    points: int


@dataclass(frozen=True, slots=True)
class QuestionResult:
    question_index: int
    selected_option: int | None
    correct_option: int
    is_correct: bool
    points_awarded: int


@dataclass(frozen=True, slots=True)
class ScoreResult:
    per_question: tuple[QuestionResult, ...]
    total_score: int


@dataclass(frozen=True, slots=True)
class QuestionDraft:
    question_text: str
    options: tuple[str, ...]
    correct_option: int
    points: int
    time_limit_seconds: int
    difficulty: str


@dataclass(frozen=True, slots=True)
class QuizQuestionSnapshot:
    position: int
    question_text: str
    options: tuple[str, ...]
    correct_option: int
    points: int
    time_limit_seconds: int
    difficulty: str


@dataclass(frozen=True, slots=True)
class QuizSnapshot:
    quiz_id: UUID
    title: str
    description: str
    category: str
    difficulty: str
    created_by: int
    is_public: bool
    time_limit_seconds: int
    total_attempts: int
    average_score: float
    questions: tuple[QuizQuestionSnapshot, ...]
    max_score: int
    created_at: datetime


@dataclass(frozen=True, slots=True)
class QuizSubmitResult:
    quiz_id: UUID
    score: int
    max_score: int
    percentage: float
    results: tuple[QuestionResult, ...]
    stats: UserStatsSnapshot
