from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from portal.domain.entities import Invitation


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[Invitation]:
        """Get invitation by token"""
        pass

    @abstractmethod
    async def list_by_client_id(self, client_id: UUID) -> List[Invitation]:
        """Get all invitations for a client, newest first"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def claim_pending(self, token: str, now: datetime) -> bool:
        """
        Move a pending, unexpired invitation to accepted.

        Single conditional update; True only if exactly one row changed.
        """
        pass

    @abstractmethod
    async def expire_pending_for_client(self, client_id: UUID) -> int:
        """Mark every pending invitation of a client as expired"""
        pass

    @abstractmethod
    async def delete_by_client_id(self, client_id: UUID) -> int:
        """Delete all invitations of a client"""
        pass
