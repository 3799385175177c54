from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from portal.domain.entities import DriveLink, WebsiteUrl


class IWebsiteUrlRepository(ABC):
    """WebsiteUrl repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, url_id: UUID) -> Optional[WebsiteUrl]:
        pass

    @abstractmethod
    async def list_by_client_id(self, client_id: UUID) -> List[WebsiteUrl]:
        pass

    @abstractmethod
    async def create(self, website_url: WebsiteUrl) -> WebsiteUrl:
        pass

    @abstractmethod
    async def delete(self, website_url: WebsiteUrl) -> None:
        pass

    @abstractmethod
    async def delete_by_client_id(self, client_id: UUID) -> int:
        pass


class IDriveLinkRepository(ABC):
    """DriveLink repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, link_id: UUID) -> Optional[DriveLink]:
        pass

    @abstractmethod
    async def list_by_client_id(self, client_id: UUID) -> List[DriveLink]:
        pass

    @abstractmethod
    async def create(self, drive_link: DriveLink) -> DriveLink:
        pass

    @abstractmethod
    async def delete(self, drive_link: DriveLink) -> None:
        pass

    @abstractmethod
    async def delete_by_client_id(self, client_id: UUID) -> int:
        pass
