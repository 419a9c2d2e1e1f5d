from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserStatsSnapshot:
    total_quizzes: int
    total_score: int
    average_score: float
    badges: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class GlobalLeaderboardEntry:
    rank: int
    user_id: int
    username: str
    avatar: str
    total_quizzes: int
    total_score: int
    average_score: float
    badges: tuple[str, ...]
