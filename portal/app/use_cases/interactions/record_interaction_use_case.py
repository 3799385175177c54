"""
Record Interaction Use Case

Ingests one chat interaction from a client's widget backend.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from portal.app.services.activity_recorder import ActivityRecorder
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import ChatInteraction
from portal.domain.base import utcnow
from portal.domain.entities import Interaction
from portal.libs.result import Error, Result, Return


class RecordInteractionResponse(BaseModel):
    id: str
    client_id: str
    created_at: datetime


class RecordInteractionUseCase:
    """
    Use case for recording a chat interaction.

    Business Rules:
    - Client must exist and not be soft-deleted
    - Bumps the client's last_active
    - All clients share the interactions table, keyed by client_id
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, client_id: UUID, query_text: str, response_time_ms: Optional[int] = None
    ) -> Result[RecordInteractionResponse]:
        query_text = query_text.strip()
        if not query_text:
            return Return.err(Error("VALIDATION_ERROR", "query_text is required"))
        if response_time_ms is not None and response_time_ms < 0:
            return Return.err(
                Error("VALIDATION_ERROR", "response_time_ms can not be negative")
            )

        async with self.uow:
            client = await self.uow.clients.get_by_id(client_id)
            if client is None or client.deleted_at is not None:
                return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))

            now = utcnow()
            interaction = await self.uow.interactions.create(
                Interaction(
                    client_id=client_id,
                    query_text=query_text,
                    response_time_ms=response_time_ms,
                    created_at=now,
                )
            )
            client.last_active = now
            await self.uow.clients.update(client)
            self.uow.publish_change(
                "interactions", {"id": str(interaction.id), "client_id": str(client_id)}
            )
            await self.uow.commit()

            response = RecordInteractionResponse(
                id=str(interaction.id), client_id=str(client_id), created_at=now
            )
            await ActivityRecorder(self.uow).record(
                client_id, ChatInteraction(interaction_id=response.id)
            )
            return Return.ok(response)
