import logging
from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel

from config import ApplicationConfig
from portal.app.services.credentials import new_opaque_token
from portal.app.services.email_sender import EmailSender
from portal.app.services.email_templates import recovery_email
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.base import utcnow
from portal.domain.entities import ClientAccount, RecoveryToken

logger = logging.getLogger(__name__)

UNNOTIFIED_WARNING = (
    "The deletion notice could not be emailed. The recovery link was still issued."
)


class RecoveryDispatch(BaseModel):
    expires_at: datetime
    dispatch_status: str
    warning: Optional[str] = None


class RecoveryIssuer:
    """Issues a recovery token for a client scheduled for deletion and emails it."""

    def __init__(self, uow: UnitOfWork, email_sender: EmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def issue(self, client: ClientAccount) -> RecoveryDispatch:
        now = utcnow()
        recovery_token = RecoveryToken(
            client_id=client.id,
            token=new_opaque_token(),
            created_at=now,
            expires_at=now + timedelta(days=ApplicationConfig.RECOVERY_TOKEN_TTL_DAYS),
        )
        recovery_token = await self.uow.recovery_tokens.create(recovery_token)
        await self.uow.commit()

        recovery_url = (
            f"{ApplicationConfig.APP_BASE_URL.rstrip('/')}/recover?token={recovery_token.token}"
        )
        purge_at = client.deletion_scheduled_at or recovery_token.expires_at
        subject, html = recovery_email(client.client_name, recovery_url, purge_at)
        result = await self.email_sender.send(client.email, subject, html)

        if result.is_err():
            logger.warning(
                f"Recovery token for client {client.id} issued but not emailed: {result.error.code}"
            )
            return RecoveryDispatch(
                expires_at=recovery_token.expires_at,
                dispatch_status="unnotified",
                warning=UNNOTIFIED_WARNING,
            )
        return RecoveryDispatch(expires_at=recovery_token.expires_at, dispatch_status="sent")
