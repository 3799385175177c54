"""
Realtime change notifications over WebSocket.

A subscriber receives {"table", "event", "id"} hints and re-reads through
the REST API. Client principals only ever see rows of their own client.
"""

import asyncio
import logging
from functools import partial
from typing import Any, Awaitable, Callable, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect

from config import ApplicationConfig
from portal.api.error import ClientError
from portal.app.services.change_feed import ChangeFeed
from portal.depends import authenticate_token, get_change_feed, get_session_factory
from portal.domain.entities import Role
from portal.domain.identity import AuthSession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Realtime"])

REALTIME_TABLES = {
    "clients",
    "client_activities",
    "client_invitations",
    "interactions",
    "website_urls",
    "google_drive_links",
    "sessions",
}

CLOSE_UNAUTHENTICATED = 4401
CLOSE_FORBIDDEN = 4403
CLOSE_UNKNOWN_TABLE = 4404
CLOSE_TRY_AGAIN = 1013

QUEUE_SIZE = 100


def row_filter_for(
    table: str, auth_session: AuthSession, client_id: Optional[UUID]
) -> Optional[Dict[str, Any]]:
    """
    Filter applied to a subscription, or None when it is not permitted.

    Session changes are always scoped to the caller. A client principal is
    pinned to its own client; an admin may narrow to one client or see all.
    """
    if table == "sessions":
        return {"user_id": auth_session.principal.id}

    if auth_session.role == Role.client:
        if auth_session.client_id is None:
            return None
        if client_id is not None and client_id != auth_session.client_id:
            return None
        client_id = auth_session.client_id
    elif auth_session.role != Role.admin:
        return None

    if client_id is None:
        return {}
    key = "id" if table == "clients" else "client_id"
    return {key: client_id}


Authenticator = Callable[[str], Awaitable[Optional[AuthSession]]]


class RealtimeStream:
    """
    One socket's subscription.

    Access is re-checked whenever a sessions change for the principal is
    published (sign-out, revocation, role change) and at least every
    recheck_seconds. Losing access ends the stream with a close code.
    """

    def __init__(
        self,
        websocket: WebSocket,
        feed: ChangeFeed,
        table: str,
        client_id: Optional[UUID],
        token: str,
        authenticate: Authenticator,
        recheck_seconds: float,
    ):
        self.websocket = websocket
        self.feed = feed
        self.table = table
        self.client_id = client_id
        self.token = token
        self.authenticate = authenticate
        self.recheck_seconds = recheck_seconds
        self.auth_session: Optional[AuthSession] = None
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=QUEUE_SIZE)
        self.access_changed = asyncio.Event()
        self._row_filter: Optional[Dict[str, Any]] = None
        self._handle: Optional[UUID] = None
        self._session_handle: Optional[UUID] = None

    def _on_change(self, changed_table: str, row: Dict[str, Any]) -> None:
        message = {
            "table": changed_table,
            "event": row.get("event", "changed"),
            "id": row.get("id"),
        }
        try:
            self.queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.debug(f"Dropping {changed_table} notification for a slow subscriber")

    def _on_session_change(self, changed_table: str, row: Dict[str, Any]) -> None:
        self.access_changed.set()

    async def authorize(self) -> Optional[int]:
        """(Re)authenticate the token; a close code when access is gone."""
        try:
            auth_session = await self.authenticate(self.token)
        except ClientError as exc:
            logger.warning(f"Realtime access check failed: {exc.base_error.code}")
            return CLOSE_TRY_AGAIN

        if auth_session is None:
            return CLOSE_UNAUTHENTICATED

        row_filter = row_filter_for(self.table, auth_session, self.client_id)
        if row_filter is None:
            return CLOSE_FORBIDDEN

        if self._handle is None or row_filter != self._row_filter:
            if self._handle is not None:
                self.feed.unsubscribe(self._handle)
            self._handle = self.feed.subscribe(self.table, row_filter, self._on_change)
            self._row_filter = row_filter
        if self._session_handle is None:
            self._session_handle = self.feed.subscribe(
                "sessions", {"user_id": auth_session.principal.id}, self._on_session_change
            )
        self.auth_session = auth_session
        return None

    async def watch_access(self) -> int:
        """Runs until access is lost; returns the close code."""
        while True:
            try:
                await asyncio.wait_for(self.access_changed.wait(), self.recheck_seconds)
            except asyncio.TimeoutError:
                pass
            self.access_changed.clear()
            code = await self.authorize()
            if code is not None:
                logger.info(f"Realtime access to {self.table} ended with {code}")
                return code

    async def send_changes(self) -> None:
        while True:
            message = await self.queue.get()
            await self.websocket.send_json(message)

    async def wait_for_disconnect(self) -> None:
        try:
            while True:
                await self.websocket.receive_text()
        except WebSocketDisconnect:
            return

    def close(self) -> None:
        for handle in (self._handle, self._session_handle):
            if handle is not None:
                self.feed.unsubscribe(handle)
        self._handle = self._session_handle = None


@router.websocket("/realtime/{table}")
async def subscribe_changes(
    websocket: WebSocket,
    table: str,
    access_token: str = Query(""),
    client_id: Optional[UUID] = Query(None),
    session_factory=Depends(get_session_factory),
    feed: ChangeFeed = Depends(get_change_feed),
):
    if table not in REALTIME_TABLES:
        await websocket.close(code=CLOSE_UNKNOWN_TABLE)
        return

    # Every check opens and closes its own database session
    stream = RealtimeStream(
        websocket,
        feed,
        table,
        client_id,
        access_token,
        authenticate=partial(authenticate_token, session_factory=session_factory, feed=feed),
        recheck_seconds=ApplicationConfig.REALTIME_AUTH_RECHECK_SECONDS,
    )
    code = await stream.authorize()
    if code is not None:
        stream.close()
        await websocket.close(code=code)
        return

    await websocket.accept()
    user_id = stream.auth_session.principal.id
    logger.info(f"User {user_id} subscribed to {table}")

    sender = asyncio.create_task(stream.send_changes())
    receiver = asyncio.create_task(stream.wait_for_disconnect())
    watcher = asyncio.create_task(stream.watch_access())
    try:
        done, pending = await asyncio.wait(
            {sender, receiver, watcher}, return_when=asyncio.FIRST_COMPLETED
        )
        for task in pending:
            task.cancel()
        for task in done:
            if not task.cancelled() and task.exception() is not None:
                logger.warning(f"Realtime stream for {table} ended: {task.exception()!r}")
        if watcher in done and not watcher.cancelled() and watcher.exception() is None:
            await websocket.close(code=watcher.result())
    finally:
        stream.close()
        logger.info(f"User {user_id} unsubscribed from {table}")
