from __future__ import annotations

import asyncio
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from quizhub.db.models.tournament_participants import TournamentParticipant
from quizhub.db.models.tournaments import Tournament
from quizhub.game.tournaments.errors import (
    TournamentAlreadyJoinedError,
    TournamentFullError,
    TournamentInvalidStateError,
    TournamentNotFoundError,
)
from quizhub.game.tournaments.service import TournamentService
from tests.integration.tournament_fixtures import (
    BEFORE_START,
    DURING,
    create_two_question_quiz,
    create_user,
    insert_tournament,
)


async def _stored_counts(session_factory, tournament_id) -> tuple[int, int]:
    async with session_factory() as session:
        counter = await session.scalar(
            select(Tournament.participants_count).where(Tournament.id == tournament_id)
        )
        rows = await session.scalar(
            select(func.count())
            .select_from(TournamentParticipant)
            .where(TournamentParticipant.tournament_id == tournament_id)
        )
    return int(counter), int(rows)


@pytest.mark.asyncio
async def test_join_registers_participant_and_publishes_count(
    session_factory, publisher, settings
) -> None:
    owner_id = await create_user(session_factory, "owner")
    player_id = await create_user(session_factory, "player")
    quiz_id = await create_two_question_quiz(session_factory, created_by=owner_id)
    tournament_id = await insert_tournament(session_factory, created_by=owner_id, quiz_id=quiz_id)
    service = TournamentService(session_factory, publisher, settings)

    result = await service.join(tournament_id=tournament_id, user_id=player_id, now_utc=BEFORE_START)

    assert result.participants_total == 1
    assert await _stored_counts(session_factory, tournament_id) == (1, 1)
    assert publisher.events == [
        (str(tournament_id), "participant-joined", {"participant_count": 1}),
    ]


@pytest.mark.asyncio
async def test_join_rejects_second_join_by_same_user(session_factory, publisher, settings) -> None:
    owner_id = await create_user(session_factory, "owner")
    player_id = await create_user(session_factory, "player")
    quiz_id = await create_two_question_quiz(session_factory, created_by=owner_id)
    tournament_id = await insert_tournament(session_factory, created_by=owner_id, quiz_id=quiz_id)
    service = TournamentService(session_factory, publisher, settings)

    await service.join(tournament_id=tournament_id, user_id=player_id, now_utc=BEFORE_START)
    with pytest.raises(TournamentAlreadyJoinedError):
        await service.join(tournament_id=tournament_id, user_id=player_id, now_utc=BEFORE_START)

    assert await _stored_counts(session_factory, tournament_id) == (1, 1)
    assert len(publisher.events) == 1


@pytest.mark.asyncio
async def test_join_rejects_full_tournament(session_factory, publisher, settings) -> None:
    owner_id = await create_user(session_factory, "owner")
    first_id = await create_user(session_factory, "first")
    second_id = await create_user(session_factory, "second")
    quiz_id = await create_two_question_quiz(session_factory, created_by=owner_id)
    tournament_id = await insert_tournament(
        session_factory,
        created_by=owner_id,
        quiz_id=quiz_id,
        max_participants=1,
    )
    service = TournamentService(session_factory, publisher, settings)

    await service.join(tournament_id=tournament_id, user_id=first_id, now_utc=BEFORE_START)
    with pytest.raises(TournamentFullError):
        await service.join(tournament_id=tournament_id, user_id=second_id, now_utc=BEFORE_START)

    assert await _stored_counts(session_factory, tournament_id) == (1, 1)


@pytest.mark.asyncio
async def test_full_tournament_wins_over_duplicate_join(session_factory, publisher, settings) -> None:
    owner_id = await create_user(session_factory, "owner")
    player_id = await create_user(session_factory, "player")
    quiz_id = await create_two_question_quiz(session_factory, created_by=owner_id)
    tournament_id = await insert_tournament(
        session_factory,
        created_by=owner_id,
        quiz_id=quiz_id,
        max_participants=1,
    )
    service = TournamentService(session_factory, publisher, settings)

    await service.join(tournament_id=tournament_id, user_id=player_id, now_utc=BEFORE_START)
    with pytest.raises(TournamentFullError):
        await service.join(tournament_id=tournament_id, user_id=player_id, now_utc=BEFORE_START)

    assert await _stored_counts(session_factory, tournament_id) == (1, 1)
    assert len(publisher.events) == 1


@pytest.mark.asyncio
async def test_join_rejects_started_and_cancelled_tournaments(
    session_factory, publisher, settings
) -> None:
    owner_id = await create_user(session_factory, "owner")
    player_id = await create_user(session_factory, "player")
    quiz_id = await create_two_question_quiz(session_factory, created_by=owner_id)
    started_id = await insert_tournament(session_factory, created_by=owner_id, quiz_id=quiz_id)
    cancelled_id = await insert_tournament(
        session_factory,
        created_by=owner_id,
        quiz_id=quiz_id,
        status="cancelled",
    )
    service = TournamentService(session_factory, publisher, settings)

    with pytest.raises(TournamentInvalidStateError):
        await service.join(tournament_id=started_id, user_id=player_id, now_utc=DURING)
    with pytest.raises(TournamentInvalidStateError):
        await service.join(tournament_id=cancelled_id, user_id=player_id, now_utc=BEFORE_START)

    assert publisher.events == []


@pytest.mark.asyncio
async def test_join_unknown_tournament(session_factory, publisher, settings) -> None:
    player_id = await create_user(session_factory, "player")
    service = TournamentService(session_factory, publisher, settings)

    with pytest.raises(TournamentNotFoundError):
        await service.join(tournament_id=uuid4(), user_id=player_id, now_utc=BEFORE_START)


@pytest.mark.asyncio
async def test_parallel_joins_never_exceed_capacity(session_factory, publisher, settings) -> None:
    capacity = 4
    owner_id = await create_user(session_factory, "owner")
    player_ids = [await create_user(session_factory, f"player{index}") for index in range(capacity + 1)]
    quiz_id = await create_two_question_quiz(session_factory, created_by=owner_id)
    tournament_id = await insert_tournament(
        session_factory,
        created_by=owner_id,
        quiz_id=quiz_id,
        max_participants=capacity,
    )
    service = TournamentService(session_factory, publisher, settings)
    barrier = asyncio.Event()

    async def _attempt(user_id: int) -> str:
        await barrier.wait()
        try:
            await service.join(tournament_id=tournament_id, user_id=user_id, now_utc=BEFORE_START)
        except TournamentFullError:
            return "full"
        return "joined"

    tasks = [asyncio.create_task(_attempt(user_id)) for user_id in player_ids]
    barrier.set()
    outcomes = await asyncio.gather(*tasks)

    assert sorted(outcomes) == ["full"] + ["joined"] * capacity
    assert await _stored_counts(session_factory, tournament_id) == (capacity, capacity)
    counts = sorted(payload["participant_count"] for _, _, payload in publisher.events)
    assert counts == list(range(1, capacity + 1))


@pytest.mark.asyncio
async def test_parallel_joins_by_same_user_register_once(session_factory, publisher, settings) -> None:
    owner_id = await create_user(session_factory, "owner")
    player_id = await create_user(session_factory, "player")
    quiz_id = await create_two_question_quiz(session_factory, created_by=owner_id)
    tournament_id = await insert_tournament(session_factory, created_by=owner_id, quiz_id=quiz_id)
    service = TournamentService(session_factory, publisher, settings)
    barrier = asyncio.Event()

    async def _attempt() -> str:
        await barrier.wait()
        try:
            await service.join(tournament_id=tournament_id, user_id=player_id, now_utc=BEFORE_START)
        except TournamentAlreadyJoinedError:
            return "already_joined"
        return "joined"

    tasks = [asyncio.create_task(_attempt()) for _ in range(3)]
    barrier.set()
    outcomes = await asyncio.gather(*tasks)

    assert sorted(outcomes) == ["already_joined", "already_joined", "joined"]
    assert await _stored_counts(session_factory, tournament_id) == (1, 1)
