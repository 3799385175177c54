import logging
from typing import Optional

from portal.app.services.totp import new_secret, provisioning_uri
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.base import utcnow
from portal.domain.entities import MfaFactor
from portal.domain.identity import AuthSession
from portal.libs.result import Error, Result, Return

from .dtos import EnrollFactorResponse, FactorInfo

logger = logging.getLogger(__name__)


class EnrollFactorUseCase:
    """
    Use case for starting TOTP enrollment.

    Business Rules:
    - Any unfinished (unverified) enrollment of the principal is discarded
    - The new factor stays unverified until VerifyFactorUseCase accepts a code
    - friendly_name defaults to TOTP-<unix millis>
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, auth_session: AuthSession, friendly_name: Optional[str] = None
    ) -> Result[EnrollFactorResponse]:
        principal = auth_session.principal
        name = (friendly_name or "").strip()
        if len(name) > 100:
            return Return.err(
                Error("VALIDATION_ERROR", "Factor name must be at most 100 characters")
            )
        if not name:
            name = f"TOTP-{int(utcnow().timestamp() * 1000)}"

        async with self.uow:
            dropped = await self.uow.mfa_factors.delete_unverified_for_user(principal.id)
            if dropped:
                logger.info(f"Discarded {dropped} unfinished MFA enrollments of {principal.id}")

            secret = new_secret()
            factor = await self.uow.mfa_factors.create(
                MfaFactor(user_id=principal.id, friendly_name=name, secret=secret)
            )
            await self.uow.commit()
            logger.info(f"User {principal.id} started MFA enrollment {factor.id}")

            return Return.ok(
                EnrollFactorResponse(
                    factor=FactorInfo.from_entity(factor),
                    secret=secret,
                    otpauth_uri=provisioning_uri(secret, principal.email),
                )
            )
