from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from portal.domain.entities import MfaFactor


class IMfaFactorRepository(ABC):
    """MfaFactor repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, factor_id: UUID) -> Optional[MfaFactor]:
        """Get factor by ID"""
        pass

    @abstractmethod
    async def list_by_user_id(self, user_id: UUID) -> List[MfaFactor]:
        """Every factor of a user, oldest first"""
        pass

    @abstractmethod
    async def create(self, factor: MfaFactor) -> MfaFactor:
        """Create a new factor"""
        pass

    @abstractmethod
    async def update(self, factor: MfaFactor) -> MfaFactor:
        """Update existing factor"""
        pass

    @abstractmethod
    async def delete(self, factor_id: UUID) -> bool:
        """Delete a factor; False if it did not exist"""
        pass

    @abstractmethod
    async def delete_unverified_for_user(self, user_id: UUID) -> int:
        """Drop enrollments the user never finished"""
        pass

    @abstractmethod
    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Drop every factor of a user"""
        pass
