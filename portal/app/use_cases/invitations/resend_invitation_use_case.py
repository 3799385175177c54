"""
Resend Invitation Use Case

Replaces a client's outstanding setup links with a fresh one.
"""

from uuid import UUID

from portal.app.services.email_sender import EmailSender
from portal.app.services.invitation_issuer import InvitationIssuer
from portal.app.services.unit_of_work import UnitOfWork
from portal.libs.result import Error, Result, Return

from .dtos import ResendInvitationResponse


class ResendInvitationUseCase:
    """
    Use case for resending a setup invitation.

    Business Rules:
    - Client must exist and not be scheduled for deletion
    - Older pending invitations of the client are expired first
    - A new token with a fresh TTL is issued and emailed
    """

    def __init__(self, uow: UnitOfWork, email_sender: EmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def execute(self, client_id: UUID) -> Result[ResendInvitationResponse]:
        async with self.uow:
            client = await self.uow.clients.get_by_id(client_id)
            if client is None or client.deleted_at is not None:
                return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))

            if await self.uow.users.get_by_email(client.email) is not None:
                return Return.err(
                    Error(
                        "ACCOUNT_EXISTS",
                        "This client has already completed account setup",
                    )
                )

            expired = await self.uow.invitations.expire_pending_for_client(client.id)
            await self.uow.commit()

            dispatch = await InvitationIssuer(self.uow, self.email_sender).issue(client)

            return Return.ok(
                ResendInvitationResponse(
                    invitation_id=str(dispatch.invitation_id),
                    email=dispatch.email,
                    expires_at=dispatch.expires_at,
                    dispatch_status=dispatch.dispatch_status,
                    expired_previous=expired,
                    warnings=[dispatch.warning] if dispatch.warning else [],
                )
            )
