from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from quizhub.game.quizzes.constants import (
    QUESTION_DEFAULT_POINTS,
    QUESTION_DEFAULT_TIME_LIMIT_SECONDS,
    QUESTION_MIN_OPTIONS,
    QUIZ_DEFAULT_DIFFICULTY,
)


class QuestionIn(BaseModel):
    question_text: str = Field(min_length=1, max_length=1000)
    options: list[str] = Field(min_length=QUESTION_MIN_OPTIONS, max_length=10)
    correct_option: int = Field(ge=0)
    points: int = Field(default=QUESTION_DEFAULT_POINTS, gt=0)
    time_limit_seconds: int = Field(default=QUESTION_DEFAULT_TIME_LIMIT_SECONDS, gt=0)
    difficulty: str = QUIZ_DEFAULT_DIFFICULTY


class QuizCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=128)
    description: str = Field(default="", max_length=1000)
    category: str
    difficulty: str = QUIZ_DEFAULT_DIFFICULTY
    is_public: bool = True
    time_limit_seconds: int = Field(default=0, ge=0)
    questions: list[QuestionIn] = Field(min_length=1, max_length=200)


class QuestionResponse(BaseModel):
    position: int
    question_text: str
    options: list[str]
    points: int
    time_limit_seconds: int
    difficulty: str


class QuizResponse(BaseModel):
    id: UUID
    title: str
    description: str
    category: str
    difficulty: str
    created_by: int
    is_public: bool
    time_limit_seconds: int
    total_attempts: int
    average_score: float
    max_score: int
    questions: list[QuestionResponse]
    created_at: datetime


class QuizSubmitRequest(BaseModel):
    answers: list[int | None] = Field(max_length=500)


class QuestionResultResponse(BaseModel):
    question_index: int
    selected_option: int | None = None
    correct_option: int
    is_correct: bool
    points_awarded: int


class UserStatsResponse(BaseModel):
    total_quizzes: int
    total_score: int
    average_score: float
    badges: list[str]


class QuizSubmitResponse(BaseModel):
    quiz_id: UUID
    score: int
    max_score: int
    percentage: float
    results: list[QuestionResultResponse]
    stats: UserStatsResponse
