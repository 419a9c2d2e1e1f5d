from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, BigInteger, CheckConstraint, ForeignKey, Index, Integer, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from quizhub.db.models.base import Base, UTCDateTime


class TournamentParticipant(Base):
    __tablename__ = "tournament_participants"
    __table_args__ = (
        CheckConstraint("score >= 0", name="ck_tournament_participants_score_non_negative"),
        Index(
            "idx_tournament_participants_tournament_score",
            "tournament_id",
            "score",
            "completed_at",
        ),
    )

    tournament_id: Mapped[UUID] = mapped_column(
        Uuid(),
        ForeignKey("tournaments.id"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), primary_key=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    joined_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    answers: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
