from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from quizhub.db.models.base import Base, UTCDateTime


class Quiz(Base):
    __tablename__ = "quizzes"
    __table_args__ = (
        CheckConstraint(
            "difficulty IN ('easy','medium','hard')",
            name="ck_quizzes_difficulty",
        ),
        CheckConstraint("time_limit_seconds >= 0", name="ck_quizzes_time_limit_non_negative"),
        CheckConstraint("total_attempts >= 0", name="ck_quizzes_total_attempts_non_negative"),
        Index("idx_quizzes_created_by", "created_by"),
        Index("idx_quizzes_public_created_at", "is_public", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(), primary_key=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False, server_default=text("''"))
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    difficulty: Mapped[str] = mapped_column(String(8), nullable=False)
    created_by: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False)
    time_limit_seconds: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=text("0")
    )
    total_attempts: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    average_score: Mapped[float] = mapped_column(Float, nullable=False, server_default=text("0"))
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
