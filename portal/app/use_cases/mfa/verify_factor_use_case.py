import logging
from uuid import UUID

from portal.app.services.totp import verify_code
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.base import utcnow
from portal.domain.entities import MfaFactorStatus
from portal.domain.identity import AuthSession
from portal.libs.result import Error, Result, Return

from .dtos import FactorInfo

logger = logging.getLogger(__name__)

INVALID_CODE = Error("INVALID_MFA_CODE", "Invalid one-time password")


class VerifyFactorUseCase:
    """
    Use case for finishing TOTP enrollment.

    Business Rules:
    - Only the principal's own factors can be verified
    - A wrong code leaves the factor unverified so the user can retry
    - Verifying an already verified factor with a valid code is a no-op
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, auth_session: AuthSession, factor_id: UUID, code: str
    ) -> Result[FactorInfo]:
        async with self.uow:
            factor = await self.uow.mfa_factors.get_by_id(factor_id)
            if factor is None or factor.user_id != auth_session.principal.id:
                return Return.err(Error("MFA_FACTOR_NOT_FOUND", "MFA factor not found"))

            if not verify_code(factor.secret, code):
                return Return.err(INVALID_CODE)

            if factor.status != MfaFactorStatus.verified:
                factor.status = MfaFactorStatus.verified
                factor.verified_at = utcnow()
                factor = await self.uow.mfa_factors.update(factor)
                await self.uow.commit()
                logger.info(f"User {factor.user_id} enabled MFA factor {factor.id}")

            return Return.ok(FactorInfo.from_entity(factor))
