"""
Recover Client Use Case

Undoes a scheduled deletion using an emailed recovery token.
"""

import logging

from portal.app.services.activity_recorder import ActivityRecorder
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import ClientRecovered
from portal.domain.base import utcnow
from portal.domain.entities import ClientStatus
from portal.libs.result import Error, Result, Return

from .dtos import RecoverClientResponse

logger = logging.getLogger(__name__)

INVALID_RECOVERY_MESSAGE = "Invalid or expired recovery link"


def _invalid() -> Result:
    return Return.err(Error("INVALID_TOKEN", INVALID_RECOVERY_MESSAGE))


class RecoverClientUseCase:
    """
    Use case for recovering a soft-deleted client.

    Business Rules:
    - Missing, used and expired tokens all yield the same INVALID_TOKEN error
    - The conditional mark_used update is the commit point
    - Clears the deletion fields and reactivates the client
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[RecoverClientResponse]:
        if not token:
            return _invalid()

        async with self.uow:
            now = utcnow()
            recovery_token = await self.uow.recovery_tokens.get_by_token(token)
            if recovery_token is None or not recovery_token.is_redeemable(now):
                return _invalid()

            client = await self.uow.clients.get_by_id(recovery_token.client_id)
            if client is None or client.deleted_at is None:
                return _invalid()

            if not await self.uow.recovery_tokens.mark_used(token, now):
                return _invalid()

            client.deleted_at = None
            client.deletion_scheduled_at = None
            client.status = ClientStatus.active
            client.updated_at = now
            client = await self.uow.clients.update(client)
            self.uow.publish_change("clients", {"id": str(client.id), "event": "recovered"})
            await self.uow.commit()
            logger.info(f"Client {client.id} recovered")

            response = RecoverClientResponse(
                client_id=str(client.id),
                client_name=client.client_name,
                status=client.status.value,
            )
            await ActivityRecorder(self.uow).record(client.id, ClientRecovered())
            return Return.ok(response)
