from uuid import UUID

from portal.app.services.activity_recorder import ActivityRecorder
from portal.app.services.client_access import load_accessible_client
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import WebsiteUrlAdded
from portal.domain.entities import WebsiteUrl
from portal.domain.identity import AuthSession
from portal.libs.result import Error, Result, Return

from .dtos import WebsiteUrlInfo
from .validation import validate_refresh_rate, validate_website_url


class AddWebsiteUrlUseCase:
    """
    Use case for adding a website URL source.

    Business Rules:
    - URL must be http(s) with a host
    - refresh_rate (hours) must be at least 1
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, auth_session: AuthSession, client_id: UUID, url: str, refresh_rate: int = 24
    ) -> Result[WebsiteUrlInfo]:
        url = url.strip()
        problem = validate_website_url(url) or validate_refresh_rate(refresh_rate)
        if problem:
            return Return.err(Error("VALIDATION_ERROR", problem))

        async with self.uow:
            result = await load_accessible_client(self.uow, auth_session, client_id)
            if result.is_err():
                return Return.err(result.error)

            website_url = await self.uow.website_urls.create(
                WebsiteUrl(client_id=client_id, url=url, refresh_rate=refresh_rate)
            )
            self.uow.publish_change(
                "website_urls", {"id": str(website_url.id), "client_id": str(client_id)}
            )
            await self.uow.commit()
            info = WebsiteUrlInfo.from_entity(website_url)

            await ActivityRecorder(self.uow).record(client_id, WebsiteUrlAdded(url=url))
            return Return.ok(info)
