"""
Activity feed use cases.

Stored metadata is parsed back through the typed activity events; entries
that no longer parse are shown without metadata.
"""

import logging
from typing import Dict, Optional
from uuid import UUID

from pydantic import ValidationError

from portal.app.services.client_access import load_accessible_client
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import parse_activity_event
from portal.domain.entities import ClientActivity
from portal.domain.identity import AuthSession
from portal.libs.result import Result, Return

from .dtos import ActivityFeedResponse, ActivityInfo

logger = logging.getLogger(__name__)


def to_activity_info(activity: ClientActivity, client_name: Optional[str] = None) -> ActivityInfo:
    try:
        metadata = parse_activity_event(
            activity.activity_type, activity.event_metadata
        ).to_metadata()
    except ValidationError:
        logger.warning(f"Activity {activity.id} has metadata that does not match its type")
        metadata = {}
    return ActivityInfo(
        id=str(activity.id),
        client_id=str(activity.client_id) if activity.client_id else None,
        client_name=client_name,
        activity_type=activity.activity_type.value,
        description=activity.description,
        metadata=metadata,
        created_at=activity.created_at,
    )


class ListClientActivityUseCase:
    """Activity feed of one client, newest first (admin or the bound client)."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, auth_session: AuthSession, client_id: UUID, limit: int = 50
    ) -> Result[ActivityFeedResponse]:
        async with self.uow:
            result = await load_accessible_client(self.uow, auth_session, client_id)
            if result.is_err():
                return Return.err(result.error)
            client = result.value

            activities = await self.uow.activities.list_by_client_id(client_id, limit=limit)
            return Return.ok(
                ActivityFeedResponse(
                    activities=[to_activity_info(a, client.client_name) for a in activities]
                )
            )


class ListRecentActivityUseCase:
    """Recent activity across all clients (admin dashboard)."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, limit: int = 50) -> Result[ActivityFeedResponse]:
        async with self.uow:
            activities = await self.uow.activities.list_recent(limit=limit)

            names: Dict[UUID, Optional[str]] = {}
            for activity in activities:
                if activity.client_id is None or activity.client_id in names:
                    continue
                client = await self.uow.clients.get_by_id(activity.client_id)
                names[activity.client_id] = client.client_name if client else None

            return Return.ok(
                ActivityFeedResponse(
                    activities=[
                        to_activity_info(a, names.get(a.client_id)) for a in activities
                    ]
                )
            )
