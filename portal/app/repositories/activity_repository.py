from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from portal.domain.entities import ClientActivity


class IActivityRepository(ABC):
    """ClientActivity repository interface - application layer"""

    @abstractmethod
    async def create(self, activity: ClientActivity) -> ClientActivity:
        """Append an activity"""
        pass

    @abstractmethod
    async def list_by_client_id(
        self, client_id: UUID, limit: int = 50
    ) -> List[ClientActivity]:
        """Activities of one client, newest first"""
        pass

    @abstractmethod
    async def list_recent(self, limit: int = 50) -> List[ClientActivity]:
        """Activities across all clients, newest first"""
        pass

    @abstractmethod
    async def delete_by_client_id(self, client_id: UUID) -> int:
        """Delete all activities of a client"""
        pass
