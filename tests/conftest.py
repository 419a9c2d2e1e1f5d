from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any
from uuid import UUID

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from quizhub.core.config import Settings, get_settings
from quizhub.db import models  # noqa: F401
from quizhub.db.models.base import Base


class RecordingPublisher:
    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    async def publish(
        self,
        tournament_id: UUID | str,
        event: str,
        payload: dict[str, Any],
        *,
        exclude_connection_id: str | None = None,
    ) -> int:
        self.events.append((str(tournament_id), event, payload))
        return 1


def sqlite_url(path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
async def db_engine(tmp_path) -> AsyncIterator[AsyncEngine]:
    # One file per test; NullPool gives every session its own connection so
    # concurrent transactions really contend on the database.
    engine = create_async_engine(
        sqlite_url(tmp_path / "quizhub.db"),
        poolclass=NullPool,
        connect_args={"timeout": 30},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def settings() -> Settings:
    return get_settings().model_copy(
        update={
            "tournament_min_participants": 2,
            "tournament_default_max_participants": 50,
            "tournament_updates_user_stats": False,
            "invite_code_length": 6,
        }
    )
