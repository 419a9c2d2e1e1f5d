from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, Float, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from quizhub.db.models.base import Base, BigIntegerPK, UTCDateTime


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("total_quizzes >= 0", name="ck_users_total_quizzes_non_negative"),
        CheckConstraint("total_score >= 0", name="ck_users_total_score_non_negative"),
        Index("idx_users_average_score", "average_score", "total_score"),
    )

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    avatar: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    total_quizzes: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    total_score: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    average_score: Mapped[float] = mapped_column(Float, nullable=False, server_default=text("0"))
    badges: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
