from uuid import UUID

from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.base import utcnow
from portal.libs.result import Error, Result, Return

from .dtos import InvitationInfo, ListInvitationsResponse


class ListInvitationsUseCase:
    """Lists a client's invitations with expiry applied at read time."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, client_id: UUID) -> Result[ListInvitationsResponse]:
        async with self.uow:
            client = await self.uow.clients.get_by_id(client_id)
            if client is None:
                return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))

            now = utcnow()
            invitations = await self.uow.invitations.list_by_client_id(client_id)
            return Return.ok(
                ListInvitationsResponse(
                    client_id=str(client_id),
                    invitations=[
                        InvitationInfo(
                            id=str(inv.id),
                            email=inv.email,
                            status=inv.effective_status(now).value,
                            created_at=inv.created_at,
                            expires_at=inv.expires_at,
                            accepted_at=inv.accepted_at,
                        )
                        for inv in invitations
                    ],
                )
            )
