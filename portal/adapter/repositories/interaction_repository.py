from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import delete, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from portal.app.repositories.interaction_repository import IInteractionRepository
from portal.domain.entities import Interaction


class InteractionRepository(IInteractionRepository):
    """Chat interaction repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, interaction: Interaction) -> Interaction:
        self.session.add(interaction)
        await self.session.flush()
        await self.session.refresh(interaction)
        return interaction

    async def list_by_client_id(
        self, client_id: UUID, since: Optional[datetime] = None
    ) -> List[Interaction]:
        stmt = select(Interaction).where(Interaction.client_id == client_id)
        if since is not None:
            stmt = stmt.where(Interaction.created_at >= since)
        stmt = stmt.order_by(Interaction.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_active_clients(self, start: datetime, end: datetime) -> int:
        """Distinct clients with at least one interaction in [start, end)"""
        stmt = select(func.count(func.distinct(Interaction.client_id))).where(
            Interaction.created_at >= start,
            Interaction.created_at < end,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def delete_by_client_id(self, client_id: UUID) -> int:
        stmt = delete(Interaction).where(Interaction.client_id == client_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
