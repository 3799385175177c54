from datetime import datetime
from typing import List

from pydantic import BaseModel

from portal.domain.entities import DriveLink, WebsiteUrl


class WebsiteUrlInfo(BaseModel):
    id: str
    url: str
    refresh_rate: int
    created_at: datetime

    @classmethod
    def from_entity(cls, website_url: WebsiteUrl) -> "WebsiteUrlInfo":
        return cls(
            id=str(website_url.id),
            url=website_url.url,
            refresh_rate=website_url.refresh_rate,
            created_at=website_url.created_at,
        )


class DriveLinkInfo(BaseModel):
    id: str
    link: str
    refresh_rate: int
    created_at: datetime

    @classmethod
    def from_entity(cls, drive_link: DriveLink) -> "DriveLinkInfo":
        return cls(
            id=str(drive_link.id),
            link=drive_link.link,
            refresh_rate=drive_link.refresh_rate,
            created_at=drive_link.created_at,
        )


class ListSourcesResponse(BaseModel):
    client_id: str
    website_urls: List[WebsiteUrlInfo]
    drive_links: List[DriveLinkInfo]


class DeleteSourceResponse(BaseModel):
    id: str
    status: str
