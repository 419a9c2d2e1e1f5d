from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from quizhub.api.routes import quizzes as quizzes_routes
from quizhub.api.routes import tournaments as tournaments_routes
from quizhub.api.routes import users as users_routes
from quizhub.db import models  # noqa: F401
from quizhub.db.models.base import Base


@pytest.fixture
def api_db_path(tmp_path, monkeypatch) -> Path:
    db_path = tmp_path / "api.db"
    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    session_factory = async_sessionmaker(
        create_async_engine(
            f"sqlite+aiosqlite:///{db_path}",
            poolclass=NullPool,
            connect_args={"timeout": 30},
        ),
        expire_on_commit=False,
    )
    for module in (quizzes_routes, tournaments_routes, users_routes):
        monkeypatch.setattr(module, "SessionLocal", session_factory)
    return db_path
