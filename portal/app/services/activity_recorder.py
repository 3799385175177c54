import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import ActivityEventBase
from portal.domain.entities import ActivityType, ClientActivity

logger = logging.getLogger(__name__)


class ActivityRecorder:
    """
    Appends typed activity events to the client activity feed.

    Recording runs in its own commit after the primary action has been
    committed. A failure is logged and rolled back; it never undoes or fails
    the action it describes.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def record(self, client_id: Optional[UUID], event: ActivityEventBase) -> bool:
        activity = ClientActivity(
            client_id=client_id,
            activity_type=ActivityType(event.activity_type),
            description=event.describe(),
            event_metadata=event.to_metadata(),
        )
        try:
            await self.uow.activities.create(activity)
            self.uow.publish_change(
                "client_activities",
                {"id": str(activity.id), "client_id": str(client_id) if client_id else None},
            )
            await self.uow.commit()
        except SQLAlchemyError as exc:
            logger.warning(
                f"Failed to record {event.activity_type} activity for client {client_id}: {exc}"
            )
            await self.uow.rollback()
            return False
        return True
