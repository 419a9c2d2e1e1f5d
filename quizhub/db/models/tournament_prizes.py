from __future__ import annotations

from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from quizhub.db.models.base import Base


class TournamentPrize(Base):
    __tablename__ = "tournament_prizes"
    __table_args__ = (
        CheckConstraint("position >= 1", name="ck_tournament_prizes_position_positive"),
        CheckConstraint("points >= 0", name="ck_tournament_prizes_points_non_negative"),
    )

    tournament_id: Mapped[UUID] = mapped_column(
        Uuid(),
        ForeignKey("tournaments.id"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    description: Mapped[str] = mapped_column(String(256), nullable=False)
    points: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
