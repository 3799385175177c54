from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from portal.domain.entities import ClientAccount


class IClientRepository(ABC):
    """ClientAccount repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, client_id: UUID) -> Optional[ClientAccount]:
        """Get client by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[ClientAccount]:
        """Get the oldest client whose contact email matches (case-insensitive)"""
        pass

    @abstractmethod
    async def list(self, include_deleted: bool = False) -> List[ClientAccount]:
        """List clients, newest first"""
        pass

    @abstractmethod
    async def count_active(self) -> int:
        """Count clients not scheduled for deletion"""
        pass

    @abstractmethod
    async def list_due_for_purge(self, now: datetime) -> List[ClientAccount]:
        """List soft-deleted clients whose purge time has passed"""
        pass

    @abstractmethod
    async def create(self, client: ClientAccount) -> ClientAccount:
        """Create a new client"""
        pass

    @abstractmethod
    async def update(self, client: ClientAccount) -> ClientAccount:
        """Update existing client"""
        pass

    @abstractmethod
    async def delete(self, client: ClientAccount) -> None:
        """Hard-delete a client row"""
        pass
