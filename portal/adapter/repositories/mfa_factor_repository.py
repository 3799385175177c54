from typing import List, Optional
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from portal.app.repositories.mfa_factor_repository import IMfaFactorRepository
from portal.domain.entities import MfaFactor, MfaFactorStatus


class MfaFactorRepository(IMfaFactorRepository):
    """MFA factor repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, factor_id: UUID) -> Optional[MfaFactor]:
        stmt = select(MfaFactor).where(MfaFactor.id == factor_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_user_id(self, user_id: UUID) -> List[MfaFactor]:
        stmt = (
            select(MfaFactor)
            .where(MfaFactor.user_id == user_id)
            .order_by(MfaFactor.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, factor: MfaFactor) -> MfaFactor:
        self.session.add(factor)
        await self.session.flush()
        await self.session.refresh(factor)
        return factor

    async def update(self, factor: MfaFactor) -> MfaFactor:
        self.session.add(factor)
        await self.session.flush()
        await self.session.refresh(factor)
        return factor

    async def delete(self, factor_id: UUID) -> bool:
        stmt = delete(MfaFactor).where(MfaFactor.id == factor_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_unverified_for_user(self, user_id: UUID) -> int:
        stmt = delete(MfaFactor).where(
            MfaFactor.user_id == user_id,
            MfaFactor.status == MfaFactorStatus.unverified,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_all_for_user(self, user_id: UUID) -> int:
        stmt = delete(MfaFactor).where(MfaFactor.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
