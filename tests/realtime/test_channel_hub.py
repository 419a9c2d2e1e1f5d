from __future__ import annotations

from uuid import uuid4

import pytest

from quizhub.realtime.hub import TournamentChannelHub
from quizhub.realtime.publisher import NullPublisher


@pytest.mark.asyncio
async def test_publish_reaches_only_subscribers_of_the_tournament() -> None:
    hub = TournamentChannelHub(queue_size=10)
    tournament_id = uuid4()
    subscribed = hub.register(user_id=1)
    other = hub.register(user_id=2)
    hub.subscribe(subscribed.connection_id, tournament_id)
    hub.subscribe(other.connection_id, uuid4())

    delivered = await hub.publish(tournament_id, "participant-joined", {"participant_count": 3})

    assert delivered == 1
    assert subscribed.outbox.get_nowait() == {
        "event": "participant-joined",
        "data": {"participant_count": 3},
    }
    assert other.outbox.empty()


@pytest.mark.asyncio
async def test_publish_skips_the_excluded_connection() -> None:
    hub = TournamentChannelHub(queue_size=10)
    tournament_id = uuid4()
    sender = hub.register(user_id=1)
    listener = hub.register(user_id=2)
    hub.subscribe(sender.connection_id, tournament_id)
    hub.subscribe(listener.connection_id, str(tournament_id).upper())

    delivered = await hub.publish(
        tournament_id,
        "player-answered",
        {"player_id": 1, "answer": 2, "time_left": 12},
        exclude_connection_id=sender.connection_id,
    )

    assert delivered == 1
    assert sender.outbox.empty()
    assert listener.outbox.get_nowait()["data"]["player_id"] == 1


@pytest.mark.asyncio
async def test_full_outbox_drops_oldest_message() -> None:
    hub = TournamentChannelHub(queue_size=2)
    tournament_id = uuid4()
    slow = hub.register()
    hub.subscribe(slow.connection_id, tournament_id)

    for count in range(1, 4):
        await hub.publish(tournament_id, "participant-joined", {"participant_count": count})

    received = [slow.outbox.get_nowait()["data"]["participant_count"] for _ in range(2)]
    assert received == [2, 3]
    assert slow.dropped_messages == 1


@pytest.mark.asyncio
async def test_disconnect_removes_all_subscriptions() -> None:
    hub = TournamentChannelHub()
    first, second = uuid4(), uuid4()
    connection = hub.register()
    hub.subscribe(connection.connection_id, first)
    hub.subscribe(connection.connection_id, second)

    hub.disconnect(connection.connection_id)

    assert hub.subscriber_count(first) == 0
    assert hub.subscriber_count(second) == 0
    assert hub.get_connection(connection.connection_id) is None
    assert await hub.publish(first, "participant-joined", {"participant_count": 1}) == 0


def test_unsubscribe_and_unknown_connection() -> None:
    hub = TournamentChannelHub()
    tournament_id = uuid4()
    connection = hub.register()

    assert hub.subscribe("missing", tournament_id) is False
    assert hub.subscribe(connection.connection_id, tournament_id) is True
    assert hub.subscriber_count(tournament_id) == 1
    assert hub.unsubscribe(connection.connection_id, tournament_id) is True
    assert hub.unsubscribe(connection.connection_id, tournament_id) is False
    assert hub.subscriber_count(tournament_id) == 0


@pytest.mark.asyncio
async def test_null_publisher_delivers_nothing() -> None:
    assert await NullPublisher().publish(uuid4(), "participant-joined", {}) == 0
