from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from portal.domain.entities import RecoveryToken


class IRecoveryTokenRepository(ABC):
    """RecoveryToken repository interface - application layer"""

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[RecoveryToken]:
        """Get recovery token by token string"""
        pass

    @abstractmethod
    async def create(self, recovery_token: RecoveryToken) -> RecoveryToken:
        """Create a new recovery token"""
        pass

    @abstractmethod
    async def mark_used(self, token: str, now: datetime) -> bool:
        """
        Consume an unused, unexpired recovery token.

        Single conditional update; True only if exactly one row changed.
        """
        pass

    @abstractmethod
    async def delete_by_client_id(self, client_id: UUID) -> int:
        """Delete all recovery tokens of a client"""
        pass
