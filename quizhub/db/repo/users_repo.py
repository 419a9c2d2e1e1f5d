from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quizhub.db.models.users import User


class UsersRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, user_id: int) -> User | None:
        return await session.get(User, user_id)

    @staticmethod
    async def get_by_id_for_update(session: AsyncSession, user_id: int) -> User | None:
        stmt = select(User).where(User.id == user_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        username: str,
        created_at: datetime,
        avatar: str = "",
    ) -> User:
        user = User(
            username=username,
            avatar=avatar,
            total_quizzes=0,
            total_score=0,
            average_score=0.0,
            badges=[],
            created_at=created_at,
        )
        session.add(user)
        await session.flush()
        return user

    @staticmethod
    async def list_top_by_average_score(session: AsyncSession, *, limit: int) -> list[User]:
        resolved_limit = max(1, min(200, int(limit)))
        stmt = (
            select(User)
            .order_by(
                User.average_score.desc(),
                User.total_score.desc(),
                User.id.asc(),
            )
            .limit(resolved_limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
