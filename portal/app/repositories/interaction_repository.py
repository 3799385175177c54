from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from portal.domain.entities import Interaction


class IInteractionRepository(ABC):
    """Interaction repository interface - application layer"""

    @abstractmethod
    async def create(self, interaction: Interaction) -> Interaction:
        """Record an interaction"""
        pass

    @abstractmethod
    async def list_by_client_id(
        self, client_id: UUID, since: Optional[datetime] = None
    ) -> List[Interaction]:
        """Interactions of a client, optionally only those after `since`"""
        pass

    @abstractmethod
    async def count_active_clients(self, start: datetime, end: datetime) -> int:
        """Distinct clients with at least one interaction in [start, end)"""
        pass

    @abstractmethod
    async def delete_by_client_id(self, client_id: UUID) -> int:
        """Delete all interactions of a client"""
        pass
