from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from uuid import UUID

from sqlalchemy import create_engine, update
from sqlalchemy.orm import Session

from quizhub.db.models.tournaments import Tournament
from quizhub.db.models.users import User

UTC = timezone.utc

QUIZ_PAYLOAD = {
    "title": "Capitals",
    "category": "Geography",
    "questions": [
        {
            "question_text": "Capital of France?",
            "options": ["Berlin", "Paris", "Rome"],
            "correct_option": 1,
            "points": 10,
        },
        {
            "question_text": "Capital of Japan?",
            "options": ["Tokyo", "Kyoto"],
            "correct_option": 0,
            "points": 20,
        },
    ],
}


def auth(user_id: int) -> dict[str, str]:
    return {"X-User-Id": str(user_id)}


def seed_users(db_path: Path, *usernames: str) -> list[int]:
    engine = create_engine(f"sqlite:///{db_path}")
    try:
        with Session(engine) as session, session.begin():
            users = [
                User(
                    username=username,
                    avatar="",
                    total_quizzes=0,
                    total_score=0,
                    average_score=0.0,
                    badges=[],
                    created_at=datetime.now(UTC),
                )
                for username in usernames
            ]
            session.add_all(users)
            session.flush()
            return [int(user.id) for user in users]
    finally:
        engine.dispose()


def open_play_window(db_path: Path, tournament_id: str | UUID) -> None:
    """Moves a tournament's start into the past so it accepts submissions."""
    now_utc = datetime.now(UTC)
    engine = create_engine(f"sqlite:///{db_path}")
    try:
        with Session(engine) as session, session.begin():
            session.execute(
                update(Tournament)
                .where(Tournament.id == UUID(str(tournament_id)))
                .values(start_time=now_utc - timedelta(minutes=1))
            )
    finally:
        engine.dispose()


def tournament_payload(quiz_id: str, **overrides: object) -> dict[str, object]:
    now_utc = datetime.now(UTC)
    payload: dict[str, object] = {
        "quiz_id": quiz_id,
        "title": "Friday Cup",
        "max_participants": 4,
        "start_time": (now_utc + timedelta(hours=1)).isoformat(),
        "end_time": (now_utc + timedelta(hours=2)).isoformat(),
    }
    payload.update(overrides)
    return payload
