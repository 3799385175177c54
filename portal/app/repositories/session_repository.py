from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from portal.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def get_by_refresh_token_hash(self, token_hash: str) -> Optional[Session]:
        """Get session by SHA-256 digest of its refresh token"""
        pass

    @abstractmethod
    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def update(self, session_obj: Session) -> Session:
        """Update existing session"""
        pass

    @abstractmethod
    async def revoke_by_id(self, session_id: UUID) -> bool:
        """Revoke a session; False if it was already revoked"""
        pass

    @abstractmethod
    async def revoke_all_except(self, user_id: UUID, session_id: UUID) -> int:
        """Revoke every active session of a user except one"""
        pass

    @abstractmethod
    async def revoke_all_for_user(self, user_id: UUID) -> int:
        """Revoke every active session of a user"""
        pass
