"""
Verify Invitation Use Case

Read-only check of a setup token, used to render the setup page.
"""

import logging

from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.base import utcnow
from portal.libs.result import Result, Return

from .dtos import DEFAULT_CLIENT_NAME, TokenVerification

logger = logging.getLogger(__name__)


class VerifyInvitationUseCase:
    """
    Use case for verifying a setup token.

    Business Rules:
    - Valid only if the token exists, is pending, is not past expires_at and
      its client is live
    - Every failed check yields the same is_valid=False answer
    - Does not consume the token
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[TokenVerification]:
        invalid = TokenVerification(is_valid=False)
        if not token:
            return Return.ok(invalid)

        async with self.uow:
            invitation = await self.uow.invitations.get_by_token(token)
            if invitation is None or not invitation.is_redeemable(utcnow()):
                logger.info("Setup token rejected during verification")
                return Return.ok(invalid)

            client = await self.uow.clients.get_by_id(invitation.client_id)
            if client is None or client.deleted_at is not None:
                return Return.ok(invalid)

            return Return.ok(
                TokenVerification(
                    is_valid=True,
                    client_id=str(client.id),
                    email=invitation.email,
                    client_name=client.client_name or DEFAULT_CLIENT_NAME,
                    expires_at=invitation.expires_at,
                )
            )
