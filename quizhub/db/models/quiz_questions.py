from __future__ import annotations

from uuid import UUID

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from quizhub.db.models.base import Base


class QuizQuestion(Base):
    __tablename__ = "quiz_questions"
    __table_args__ = (
        CheckConstraint("position >= 0", name="ck_quiz_questions_position_non_negative"),
        CheckConstraint("correct_option >= 0", name="ck_quiz_questions_correct_option_non_negative"),
        CheckConstraint("points > 0", name="ck_quiz_questions_points_positive"),
        CheckConstraint("time_limit_seconds > 0", name="ck_quiz_questions_time_limit_positive"),
        CheckConstraint(
            "difficulty IN ('easy','medium','hard')",
            name="ck_quiz_questions_difficulty",
        ),
    )

    quiz_id: Mapped[UUID] = mapped_column(Uuid(), ForeignKey("quizzes.id"), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    options: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    correct_option: Mapped[int] = mapped_column(Integer, nullable=False)
    points: Mapped[int] = mapped_column(Integer, nullable=False)
    time_limit_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    difficulty: Mapped[str] = mapped_column(String(8), nullable=False)
