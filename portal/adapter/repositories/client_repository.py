from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from portal.app.repositories.client_repository import IClientRepository
from portal.domain.entities import ClientAccount


class ClientRepository(IClientRepository):
    """Client account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, client_id: UUID) -> Optional[ClientAccount]:
        """Get client by ID, soft-deleted ones included"""
        stmt = select(ClientAccount).where(ClientAccount.id == client_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[ClientAccount]:
        """Get the live client registered under an email (case-insensitive)"""
        stmt = (
            select(ClientAccount)
            .where(
                func.lower(ClientAccount.email) == email.strip().lower(),
                ClientAccount.deleted_at.is_(None),
            )
            .order_by(ClientAccount.created_at)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list(self, include_deleted: bool = False) -> List[ClientAccount]:
        """List clients, newest first"""
        stmt = select(ClientAccount)
        if not include_deleted:
            stmt = stmt.where(ClientAccount.deleted_at.is_(None))
        stmt = stmt.order_by(ClientAccount.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_active(self) -> int:
        """Count clients that are not soft-deleted"""
        stmt = select(func.count()).select_from(ClientAccount).where(
            ClientAccount.deleted_at.is_(None)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def list_due_for_purge(self, now: datetime) -> List[ClientAccount]:
        stmt = select(ClientAccount).where(
            ClientAccount.deleted_at.is_not(None),
            ClientAccount.deletion_scheduled_at <= now,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, client: ClientAccount) -> ClientAccount:
        """Create a new client"""
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def update(self, client: ClientAccount) -> ClientAccount:
        """Update existing client"""
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def delete(self, client: ClientAccount) -> None:
        """Hard delete; only the purge job calls this"""
        await self.session.delete(client)
        await self.session.flush()
