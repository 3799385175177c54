from typing import List
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from portal.app.repositories.activity_repository import IActivityRepository
from portal.domain.entities import ClientActivity


class ActivityRepository(IActivityRepository):
    """Client activity repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, activity: ClientActivity) -> ClientActivity:
        """Append an activity entry (never updated)"""
        self.session.add(activity)
        await self.session.flush()
        await self.session.refresh(activity)
        return activity

    async def list_by_client_id(
        self, client_id: UUID, limit: int = 50
    ) -> List[ClientActivity]:
        stmt = (
            select(ClientActivity)
            .where(ClientActivity.client_id == client_id)
            .order_by(ClientActivity.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_recent(self, limit: int = 50) -> List[ClientActivity]:
        stmt = (
            select(ClientActivity)
            .order_by(ClientActivity.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_client_id(self, client_id: UUID) -> int:
        stmt = delete(ClientActivity).where(ClientActivity.client_id == client_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
