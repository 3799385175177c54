import asyncio
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from portal.api.error import ClientError
from portal.api.routes.realtime import (
    CLOSE_FORBIDDEN,
    CLOSE_TRY_AGAIN,
    CLOSE_UNAUTHENTICATED,
    RealtimeStream,
)
from portal.app.services.change_feed import ChangeFeed
from portal.domain.entities import Role
from portal.libs.result import Error
from tests.utils.factories import make_auth_session


def _stream(feed, authenticate, table="clients", client_id=None, recheck_seconds=60):
    return RealtimeStream(
        AsyncMock(),
        feed,
        table,
        client_id,
        "access-token",
        authenticate=authenticate,
        recheck_seconds=recheck_seconds,
    )


@pytest.mark.asyncio
async def test_sign_out_ends_the_stream():
    feed = ChangeFeed()
    admin = make_auth_session(Role.admin)
    stream = _stream(feed, AsyncMock(side_effect=[admin, None]))

    assert await stream.authorize() is None
    # The table subscription plus the caller's own sessions
    assert len(feed) == 2
    feed.publish("clients", {"id": "c1", "event": "updated"})
    assert stream.queue.get_nowait() == {"table": "clients", "event": "updated", "id": "c1"}

    watcher = asyncio.create_task(stream.watch_access())
    await asyncio.sleep(0)
    feed.publish("sessions", {"user_id": str(admin.principal.id), "event": "signed_out"})

    assert await asyncio.wait_for(watcher, timeout=1) == CLOSE_UNAUTHENTICATED
    stream.close()
    assert len(feed) == 0


@pytest.mark.asyncio
async def test_other_principals_sessions_do_not_trigger_a_check():
    feed = ChangeFeed()
    authenticate = AsyncMock(return_value=make_auth_session(Role.admin))
    stream = _stream(feed, authenticate)
    await stream.authorize()

    feed.publish("sessions", {"user_id": str(uuid4()), "event": "signed_out"})

    assert not stream.access_changed.is_set()
    assert authenticate.await_count == 1


@pytest.mark.asyncio
async def test_role_change_away_from_the_client_is_forbidden():
    feed = ChangeFeed()
    client_id = uuid4()
    before = make_auth_session(Role.client, client_id=client_id)
    after = make_auth_session(Role.client, client_id=uuid4())
    stream = _stream(feed, AsyncMock(side_effect=[before, after]), client_id=client_id)
    await stream.authorize()

    stream.access_changed.set()

    assert await asyncio.wait_for(stream.watch_access(), timeout=1) == CLOSE_FORBIDDEN


@pytest.mark.asyncio
async def test_admin_demoted_to_client_is_narrowed_to_its_rows():
    feed = ChangeFeed()
    client_id = uuid4()
    admin = make_auth_session(Role.admin)
    demoted = make_auth_session(Role.client, client_id=client_id)
    stream = _stream(feed, AsyncMock(side_effect=[admin, demoted]), table="interactions")
    await stream.authorize()

    assert await stream.authorize() is None
    assert len(feed) == 2

    feed.publish("interactions", {"id": "i1", "client_id": str(uuid4())})
    assert stream.queue.empty()
    feed.publish("interactions", {"id": "i2", "client_id": str(client_id)})
    assert stream.queue.get_nowait()["id"] == "i2"


@pytest.mark.asyncio
async def test_expired_access_is_caught_by_the_periodic_check():
    feed = ChangeFeed()
    admin = make_auth_session(Role.admin)
    stream = _stream(feed, AsyncMock(side_effect=[admin, admin, None]), recheck_seconds=0.01)
    await stream.authorize()

    assert await asyncio.wait_for(stream.watch_access(), timeout=1) == CLOSE_UNAUTHENTICATED


@pytest.mark.asyncio
async def test_unavailable_role_resolution_asks_to_retry():
    error = ClientError(Error("ROLE_RESOLUTION_UNAVAILABLE", "retry"), status_code=503)
    stream = _stream(ChangeFeed(), AsyncMock(side_effect=error))

    assert await stream.authorize() == CLOSE_TRY_AGAIN
