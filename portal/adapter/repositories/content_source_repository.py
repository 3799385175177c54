from typing import List, Optional
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from portal.app.repositories.content_source_repository import (
    IDriveLinkRepository,
    IWebsiteUrlRepository,
)
from portal.domain.entities import DriveLink, WebsiteUrl


class WebsiteUrlRepository(IWebsiteUrlRepository):
    """Website URL repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, url_id: UUID) -> Optional[WebsiteUrl]:
        stmt = select(WebsiteUrl).where(WebsiteUrl.id == url_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_client_id(self, client_id: UUID) -> List[WebsiteUrl]:
        stmt = (
            select(WebsiteUrl)
            .where(WebsiteUrl.client_id == client_id)
            .order_by(WebsiteUrl.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, website_url: WebsiteUrl) -> WebsiteUrl:
        self.session.add(website_url)
        await self.session.flush()
        await self.session.refresh(website_url)
        return website_url

    async def delete(self, website_url: WebsiteUrl) -> None:
        await self.session.delete(website_url)
        await self.session.flush()

    async def delete_by_client_id(self, client_id: UUID) -> int:
        stmt = delete(WebsiteUrl).where(WebsiteUrl.client_id == client_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount


class DriveLinkRepository(IDriveLinkRepository):
    """Google Drive link repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, link_id: UUID) -> Optional[DriveLink]:
        stmt = select(DriveLink).where(DriveLink.id == link_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_client_id(self, client_id: UUID) -> List[DriveLink]:
        stmt = (
            select(DriveLink)
            .where(DriveLink.client_id == client_id)
            .order_by(DriveLink.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, drive_link: DriveLink) -> DriveLink:
        self.session.add(drive_link)
        await self.session.flush()
        await self.session.refresh(drive_link)
        return drive_link

    async def delete(self, drive_link: DriveLink) -> None:
        await self.session.delete(drive_link)
        await self.session.flush()

    async def delete_by_client_id(self, client_id: UUID) -> int:
        stmt = delete(DriveLink).where(DriveLink.client_id == client_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
