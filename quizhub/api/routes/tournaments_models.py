from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, Field


class TournamentPrizeIn(BaseModel):
    position: int = Field(ge=1)
    description: str = Field(min_length=1, max_length=256)
    points: int = Field(default=0, ge=0)


class TournamentCreateRequest(BaseModel):
    quiz_id: UUID
    title: str = Field(min_length=1, max_length=128)
    description: str = Field(default="", max_length=1000)
    max_participants: int | None = Field(default=None, ge=1, le=10_000)
    start_time: AwareDatetime
    end_time: AwareDatetime
    is_private: bool = False
    prizes: list[TournamentPrizeIn] = Field(default_factory=list, max_length=50)


class TournamentPrizeResponse(BaseModel):
    position: int
    description: str
    points: int


class TournamentResponse(BaseModel):
    id: UUID
    title: str
    description: str
    quiz_id: UUID
    created_by: int
    max_participants: int
    participant_count: int
    start_time: datetime
    end_time: datetime
    status: str
    is_private: bool
    invite_code: str | None = None
    prizes: list[TournamentPrizeResponse]
    created_at: datetime


class TournamentJoinResponse(BaseModel):
    tournament_id: UUID
    participant_count: int = Field(ge=0)


class TournamentAnswerIn(BaseModel):
    selected_answer: int | None = None
    time_spent: int = Field(default=0, ge=0)


class TournamentSubmitRequest(BaseModel):
    answers: list[TournamentAnswerIn] = Field(max_length=500)


class LeaderboardEntryResponse(BaseModel):
    rank: int = Field(ge=1)
    user_id: int
    username: str
    avatar: str
    score: int = Field(ge=0)
    completed_at: datetime


class TournamentSubmitResponse(BaseModel):
    tournament_id: UUID
    score: int = Field(ge=0)
    max_score: int = Field(ge=0)
    rank: int | None = Field(default=None, ge=1)
    leaderboard: list[LeaderboardEntryResponse]


class TournamentLeaderboardResponse(BaseModel):
    tournament_id: UUID
    entries: list[LeaderboardEntryResponse]
