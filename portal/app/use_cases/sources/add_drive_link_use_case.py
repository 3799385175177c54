import logging
from typing import Optional
from uuid import UUID

from portal.app.services.activity_recorder import ActivityRecorder
from portal.app.services.client_access import load_accessible_client
from portal.app.services.drive_access import DriveAccessChecker
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import DriveLinkAdded
from portal.domain.entities import DriveLink, ErrorLog
from portal.domain.identity import AuthSession
from portal.libs.result import Error, Result, Return

from .dtos import DriveLinkInfo
from .validation import drive_file_id, validate_drive_link, validate_refresh_rate

logger = logging.getLogger(__name__)

DRIVE_LINK_ACCESS = "drive_link_access"


class AddDriveLinkUseCase:
    """
    Use case for adding a Google Drive source.

    Business Rules:
    - Link must point at drive.google.com or docs.google.com
    - Link must contain a Drive file id
    - refresh_rate must be at least 1
    - The file must be publicly readable; a failed check is kept in
      error_logs as "drive_link_access" and nothing is stored
    """

    def __init__(self, uow: UnitOfWork, access_checker: Optional[DriveAccessChecker] = None):
        self.uow = uow
        self.access_checker = access_checker

    async def execute(
        self, auth_session: AuthSession, client_id: UUID, link: str, refresh_rate: int = 24
    ) -> Result[DriveLinkInfo]:
        link = link.strip()
        problem = validate_drive_link(link) or validate_refresh_rate(refresh_rate)
        if problem:
            return Return.err(Error("VALIDATION_ERROR", problem))

        async with self.uow:
            result = await load_accessible_client(self.uow, auth_session, client_id)
            if result.is_err():
                return Return.err(result.error)

            if self.access_checker is not None:
                access = await self.access_checker.check(drive_file_id(link))
                if access.is_err():
                    await self._record_failure(client_id, access.error)
                    return Return.err(access.error)

            drive_link = await self.uow.drive_links.create(
                DriveLink(client_id=client_id, link=link, refresh_rate=refresh_rate)
            )
            self.uow.publish_change(
                "google_drive_links", {"id": str(drive_link.id), "client_id": str(client_id)}
            )
            await self.uow.commit()
            info = DriveLinkInfo.from_entity(drive_link)

            await ActivityRecorder(self.uow).record(client_id, DriveLinkAdded(link=link))
            return Return.ok(info)

    async def _record_failure(self, client_id: UUID, error: Error) -> None:
        await self.uow.error_logs.create(
            ErrorLog(client_id=client_id, error_type=DRIVE_LINK_ACCESS, message=error.message)
        )
        await self.uow.commit()
        logger.warning(f"Drive link rejected for client {client_id}: {error.code}")
