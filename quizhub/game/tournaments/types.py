from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class TournamentPrizeSnapshot:
    position: int
    description: str
    points: int


@dataclass(frozen=True, slots=True)
class TournamentSnapshot:
    tournament_id: UUID
    title: str
    description: str
    quiz_id: UUID
    created_by: int
    max_participants: int
    participants_count: int
    start_time: datetime
    end_time: datetime
    status: str
    is_private: bool
    invite_code: str | None
    prizes: tuple[TournamentPrizeSnapshot, ...]
    created_at: datetime


@dataclass(frozen=True, slots=True)
class ParticipantStanding:
    user_id: int
    username: str
    avatar: str
    score: int
    joined_at: datetime
    completed_at: datetime | None


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    rank: int
    user_id: int
    username: str
    avatar: str
    score: int
    completed_at: datetime


@dataclass(frozen=True, slots=True)
class SubmittedAnswer:
    selected_answer: int | None
    time_spent: int = 0


@dataclass(frozen=True, slots=True)
class TournamentJoinResult:
    tournament_id: UUID
    user_id: int
    participants_total: int


@dataclass(frozen=True, slots=True)
class TournamentSubmitResult:
    tournament_id: UUID
    user_id: int
    score: int
    max_score: int
    rank: int | None
    leaderboard: tuple[LeaderboardEntry, ...]
