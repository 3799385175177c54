from portal.app.services.totp import verified_factors
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.identity import AuthSession
from portal.libs.result import Result, Return

from .dtos import FactorInfo, MfaStatusResponse


class ListFactorsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, auth_session: AuthSession) -> Result[MfaStatusResponse]:
        async with self.uow:
            factors = await self.uow.mfa_factors.list_by_user_id(auth_session.principal.id)
            return Return.ok(
                MfaStatusResponse(
                    enabled=bool(verified_factors(factors)),
                    factors=[FactorInfo.from_entity(factor) for factor in factors],
                )
            )
