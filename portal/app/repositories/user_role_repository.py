from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from portal.domain.entities import UserRole


class IUserRoleRepository(ABC):
    """UserRole repository interface - application layer"""

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> Optional[UserRole]:
        """Get the role record of a user"""
        pass

    @abstractmethod
    async def create(self, user_role: UserRole) -> UserRole:
        """Create a role record"""
        pass

    @abstractmethod
    async def update(self, user_role: UserRole) -> UserRole:
        """Update a role record"""
        pass

    @abstractmethod
    async def delete_by_client_id(self, client_id: UUID) -> int:
        """Delete role records bound to a client"""
        pass
