import logging
from typing import Optional
from uuid import UUID

from portal.app.services.totp import verified_factors, verify_code
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.entities import MfaFactorStatus
from portal.domain.identity import AuthSession
from portal.libs.result import Error, Result, Return

from .dtos import UnenrollFactorResponse
from .verify_factor_use_case import INVALID_CODE

logger = logging.getLogger(__name__)


class UnenrollFactorUseCase:
    """
    Use case for removing a TOTP factor.

    Business Rules:
    - A verified factor is removed only with a valid code from it
    - An unverified factor can be dropped without a code
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, auth_session: AuthSession, factor_id: UUID, code: Optional[str] = None
    ) -> Result[UnenrollFactorResponse]:
        async with self.uow:
            factor = await self.uow.mfa_factors.get_by_id(factor_id)
            if factor is None or factor.user_id != auth_session.principal.id:
                return Return.err(Error("MFA_FACTOR_NOT_FOUND", "MFA factor not found"))

            if factor.status == MfaFactorStatus.verified and not verify_code(
                factor.secret, code
            ):
                return Return.err(INVALID_CODE)

            await self.uow.mfa_factors.delete(factor.id)
            remaining = await self.uow.mfa_factors.list_by_user_id(factor.user_id)
            await self.uow.commit()
            logger.info(f"User {factor.user_id} removed MFA factor {factor.id}")

            return Return.ok(
                UnenrollFactorResponse(
                    factor_id=str(factor.id), enabled=bool(verified_factors(remaining))
                )
            )
