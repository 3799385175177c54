from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from portal.app.repositories.recovery_token_repository import IRecoveryTokenRepository
from portal.domain.entities import RecoveryToken


class RecoveryTokenRepository(IRecoveryTokenRepository):
    """Recovery token repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_token(self, token: str) -> Optional[RecoveryToken]:
        stmt = select(RecoveryToken).where(RecoveryToken.token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, recovery_token: RecoveryToken) -> RecoveryToken:
        self.session.add(recovery_token)
        await self.session.flush()
        await self.session.refresh(recovery_token)
        return recovery_token

    async def mark_used(self, token: str, now: datetime) -> bool:
        """Conditionally consume an unused, unexpired token"""
        stmt = (
            update(RecoveryToken)
            .where(
                RecoveryToken.token == token,
                RecoveryToken.used_at.is_(None),
                RecoveryToken.expires_at >= now,
            )
            .values(used_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def delete_by_client_id(self, client_id: UUID) -> int:
        stmt = delete(RecoveryToken).where(RecoveryToken.client_id == client_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
