from typing import Optional
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from portal.app.repositories.user_role_repository import IUserRoleRepository
from portal.domain.entities import UserRole


class UserRoleRepository(IUserRoleRepository):
    """UserRole repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: UUID) -> Optional[UserRole]:
        stmt = select(UserRole).where(UserRole.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, user_role: UserRole) -> UserRole:
        self.session.add(user_role)
        await self.session.flush()
        await self.session.refresh(user_role)
        return user_role

    async def update(self, user_role: UserRole) -> UserRole:
        self.session.add(user_role)
        await self.session.flush()
        await self.session.refresh(user_role)
        return user_role

    async def delete_by_client_id(self, client_id: UUID) -> int:
        stmt = delete(UserRole).where(UserRole.client_id == client_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
