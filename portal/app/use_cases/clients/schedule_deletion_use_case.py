"""
Schedule Client Deletion Use Case

Soft-deletes a client and emails a recovery link.
"""

import logging
from datetime import timedelta
from uuid import UUID

from config import ApplicationConfig
from portal.app.services.activity_recorder import ActivityRecorder
from portal.app.services.email_sender import EmailSender
from portal.app.services.recovery_issuer import RecoveryIssuer
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import ClientDeleted
from portal.domain.base import utcnow
from portal.domain.entities import ClientStatus
from portal.libs.result import Error, Result, Return

from .dtos import ScheduleDeletionResponse

logger = logging.getLogger(__name__)


class ScheduleClientDeletionUseCase:
    """
    Use case for soft-deleting a client.

    Business Rules:
    - Sets deleted_at and deletion_scheduled_at (now + grace period)
    - Status becomes inactive
    - Pending invitations are expired
    - A recovery token is issued and emailed (warn-and-continue)
    - The client stops counting towards client totals immediately
    """

    def __init__(self, uow: UnitOfWork, email_sender: EmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def execute(self, client_id: UUID) -> Result[ScheduleDeletionResponse]:
        async with self.uow:
            client = await self.uow.clients.get_by_id(client_id)
            if client is None:
                return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))

            if client.deleted_at is not None:
                return Return.err(
                    Error(
                        "ALREADY_SCHEDULED",
                        "Client is already scheduled for deletion",
                    )
                )

            now = utcnow()
            client.deleted_at = now
            client.deletion_scheduled_at = now + timedelta(
                days=ApplicationConfig.DELETION_GRACE_DAYS
            )
            client.status = ClientStatus.inactive
            client.updated_at = now
            client = await self.uow.clients.update(client)
            await self.uow.invitations.expire_pending_for_client(client.id)
            self.uow.publish_change("clients", {"id": str(client.id), "event": "deleted"})
            await self.uow.commit()
            logger.info(
                f"Client {client.id} scheduled for deletion at {client.deletion_scheduled_at}"
            )

            dispatch = await RecoveryIssuer(self.uow, self.email_sender).issue(client)
            response = ScheduleDeletionResponse(
                client_id=str(client.id),
                deleted_at=client.deleted_at,
                deletion_scheduled_at=client.deletion_scheduled_at,
                recovery_status=dispatch.dispatch_status,
                warnings=[dispatch.warning] if dispatch.warning else [],
            )

            await ActivityRecorder(self.uow).record(
                client_id,
                ClientDeleted(purge_scheduled_at=response.deletion_scheduled_at.isoformat()),
            )
            return Return.ok(response)
