import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from config import ApplicationConfig
from portal.app.services.activity_recorder import ActivityRecorder
from portal.app.services.credentials import new_opaque_token
from portal.app.services.email_sender import EmailSender
from portal.app.services.email_templates import invitation_email
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import InvitationSent
from portal.domain.base import utcnow
from portal.domain.entities import ClientAccount, Invitation

logger = logging.getLogger(__name__)

UNNOTIFIED_WARNING = (
    "The invitation email could not be sent. The account was created; "
    "use resend to deliver a new setup link."
)


class InvitationDispatch(BaseModel):
    invitation_id: UUID
    email: str
    expires_at: datetime
    dispatch_status: str  # "sent" or "unnotified"
    warning: Optional[str] = None


class InvitationIssuer:
    """
    Issues a setup token for a client and emails the setup link.

    The invitation is committed before the email is attempted. A failed email
    leaves the invitation in place and reports dispatch_status="unnotified".
    """

    def __init__(self, uow: UnitOfWork, email_sender: EmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def issue(self, client: ClientAccount, email: Optional[str] = None) -> InvitationDispatch:
        recipient = (email or client.email).strip().lower()
        now = utcnow()
        invitation = Invitation(
            client_id=client.id,
            email=recipient,
            token=new_opaque_token(),
            created_at=now,
            expires_at=now + timedelta(days=ApplicationConfig.INVITATION_TTL_DAYS),
        )
        invitation = await self.uow.invitations.create(invitation)
        self.uow.publish_change(
            "client_invitations", {"id": str(invitation.id), "client_id": str(client.id)}
        )
        await self.uow.commit()

        setup_url = f"{ApplicationConfig.APP_BASE_URL.rstrip('/')}/setup?token={invitation.token}"
        subject, html = invitation_email(client.client_name, setup_url, invitation.expires_at)
        result = await self.email_sender.send(recipient, subject, html)

        delivered = result.is_ok()
        if not delivered:
            logger.warning(
                f"Invitation {invitation.id} for client {client.id} issued but not emailed: "
                f"{result.error.code}"
            )

        dispatch = InvitationDispatch(
            invitation_id=invitation.id,
            email=recipient,
            expires_at=invitation.expires_at,
            dispatch_status="sent" if delivered else "unnotified",
            warning=None if delivered else UNNOTIFIED_WARNING,
        )
        await ActivityRecorder(self.uow).record(
            client.id, InvitationSent(email=recipient, delivered=delivered)
        )
        return dispatch
