"""
Purge Due Clients Use Case

Hard-deletes clients whose deletion grace period has passed.
"""

import logging

from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.base import utcnow
from portal.libs.result import Result, Return

from .dtos import PurgeClientsResponse

logger = logging.getLogger(__name__)


class PurgeDueClientsUseCase:
    """
    Use case for purging clients past deletion_scheduled_at.

    Business Rules:
    - Only soft-deleted clients whose purge time has passed are removed
    - Dependent rows go with the client
    - Each client is purged in its own commit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[PurgeClientsResponse]:
        purged = []
        async with self.uow:
            due = await self.uow.clients.list_due_for_purge(utcnow())
            due_ids = [client.id for client in due]

            for client_id in due_ids:
                client = await self.uow.clients.get_by_id(client_id)
                if client is None:
                    continue
                await self.uow.invitations.delete_by_client_id(client_id)
                await self.uow.recovery_tokens.delete_by_client_id(client_id)
                await self.uow.activities.delete_by_client_id(client_id)
                await self.uow.interactions.delete_by_client_id(client_id)
                await self.uow.website_urls.delete_by_client_id(client_id)
                await self.uow.drive_links.delete_by_client_id(client_id)
                await self.uow.error_logs.delete_by_client_id(client_id)
                await self.uow.user_roles.delete_by_client_id(client_id)
                await self.uow.clients.delete(client)
                self.uow.publish_change("clients", {"id": str(client_id), "event": "purged"})
                await self.uow.commit()
                purged.append(str(client_id))
                logger.info(f"Purged client {client_id}")

        return Return.ok(PurgeClientsResponse(purged=purged, count=len(purged)))
