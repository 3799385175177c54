from uuid import UUID

from portal.app.services.activity_recorder import ActivityRecorder
from portal.app.services.client_access import load_accessible_client
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import DriveLinkDeleted
from portal.domain.identity import AuthSession
from portal.libs.result import Error, Result, Return

from .dtos import DeleteSourceResponse


class DeleteDriveLinkUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, auth_session: AuthSession, client_id: UUID, link_id: UUID
    ) -> Result[DeleteSourceResponse]:
        async with self.uow:
            result = await load_accessible_client(self.uow, auth_session, client_id)
            if result.is_err():
                return Return.err(result.error)

            drive_link = await self.uow.drive_links.get_by_id(link_id)
            if drive_link is None or drive_link.client_id != client_id:
                return Return.err(Error("SOURCE_NOT_FOUND", "Drive link not found"))

            link = drive_link.link
            await self.uow.drive_links.delete(drive_link)
            self.uow.publish_change(
                "google_drive_links", {"id": str(link_id), "client_id": str(client_id)}
            )
            await self.uow.commit()

            await ActivityRecorder(self.uow).record(client_id, DriveLinkDeleted(link=link))
            return Return.ok(DeleteSourceResponse(id=str(link_id), status="deleted"))
