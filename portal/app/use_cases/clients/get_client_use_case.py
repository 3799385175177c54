from uuid import UUID

from portal.app.services.client_access import load_accessible_client
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.identity import AuthSession
from portal.libs.result import Result, Return

from .dtos import ClientInfo


class GetClientUseCase:
    """Loads one client; admins may also see soft-deleted ones."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, auth_session: AuthSession, client_id: UUID) -> Result[ClientInfo]:
        async with self.uow:
            result = await load_accessible_client(
                self.uow, auth_session, client_id, include_deleted=True
            )
            if result.is_err():
                return Return.err(result.error)
            return Return.ok(ClientInfo.from_entity(result.value))
