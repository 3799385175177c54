from uuid import UUID

from portal.app.services.activity_recorder import ActivityRecorder
from portal.app.services.client_access import load_accessible_client
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import WebsiteUrlDeleted
from portal.domain.identity import AuthSession
from portal.libs.result import Error, Result, Return

from .dtos import DeleteSourceResponse


class DeleteWebsiteUrlUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, auth_session: AuthSession, client_id: UUID, url_id: UUID
    ) -> Result[DeleteSourceResponse]:
        async with self.uow:
            result = await load_accessible_client(self.uow, auth_session, client_id)
            if result.is_err():
                return Return.err(result.error)

            website_url = await self.uow.website_urls.get_by_id(url_id)
            if website_url is None or website_url.client_id != client_id:
                return Return.err(Error("SOURCE_NOT_FOUND", "Website URL not found"))

            url = website_url.url
            await self.uow.website_urls.delete(website_url)
            self.uow.publish_change(
                "website_urls", {"id": str(url_id), "client_id": str(client_id)}
            )
            await self.uow.commit()

            await ActivityRecorder(self.uow).record(client_id, WebsiteUrlDeleted(url=url))
            return Return.ok(DeleteSourceResponse(id=str(url_id), status="deleted"))
