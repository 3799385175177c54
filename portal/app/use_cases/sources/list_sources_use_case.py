from uuid import UUID

from portal.app.services.client_access import load_accessible_client
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.identity import AuthSession
from portal.libs.result import Result, Return

from .dtos import DriveLinkInfo, ListSourcesResponse, WebsiteUrlInfo


class ListSourcesUseCase:
    """Lists the website URLs and Drive links a client's chatbot learns from."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, auth_session: AuthSession, client_id: UUID
    ) -> Result[ListSourcesResponse]:
        async with self.uow:
            result = await load_accessible_client(self.uow, auth_session, client_id)
            if result.is_err():
                return Return.err(result.error)

            website_urls = await self.uow.website_urls.list_by_client_id(client_id)
            drive_links = await self.uow.drive_links.list_by_client_id(client_id)
            return Return.ok(
                ListSourcesResponse(
                    client_id=str(client_id),
                    website_urls=[WebsiteUrlInfo.from_entity(u) for u in website_urls],
                    drive_links=[DriveLinkInfo.from_entity(d) for d in drive_links],
                )
            )
