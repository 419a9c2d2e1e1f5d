from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from quizhub.db.models.base import Base, UTCDateTime


class Tournament(Base):
    __tablename__ = "tournaments"
    __table_args__ = (
        CheckConstraint(
            "status IN ('upcoming','active','completed','cancelled')",
            name="ck_tournaments_status",
        ),
        CheckConstraint("max_participants >= 1", name="ck_tournaments_max_participants_positive"),
        CheckConstraint(
            "participants_count >= 0 AND participants_count <= max_participants",
            name="ck_tournaments_participants_within_capacity",
        ),
        CheckConstraint("end_time > start_time", name="ck_tournaments_time_window"),
        Index("idx_tournaments_status_start_time", "status", "start_time"),
        Index("idx_tournaments_created_by", "created_by"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(), primary_key=True)
    title: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str] = mapped_column(String(1000), nullable=False, server_default=text("''"))
    quiz_id: Mapped[UUID] = mapped_column(Uuid(), ForeignKey("quizzes.id"), nullable=False)
    created_by: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    max_participants: Mapped[int] = mapped_column(Integer, nullable=False)
    participants_count: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=text("0")
    )
    start_time: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    end_time: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False)
    invite_code: Mapped[str | None] = mapped_column(String(32), unique=True, nullable=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
