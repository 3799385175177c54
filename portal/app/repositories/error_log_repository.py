from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from portal.domain.entities import ErrorLog


class IErrorLogRepository(ABC):
    """ErrorLog repository interface - application layer"""

    @abstractmethod
    async def create(self, error_log: ErrorLog) -> ErrorLog:
        """Record a failure"""
        pass

    @abstractmethod
    async def list_by_client_id(self, client_id: UUID, limit: int = 50) -> List[ErrorLog]:
        """Failures of one client, newest first"""
        pass

    @abstractmethod
    async def delete_by_client_id(self, client_id: UUID) -> int:
        """Delete all failures of a client"""
        pass
