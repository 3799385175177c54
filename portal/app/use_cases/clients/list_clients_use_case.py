from portal.app.services.unit_of_work import UnitOfWork
from portal.libs.result import Result, Return

from .dtos import ClientInfo, ListClientsResponse


class ListClientsUseCase:
    """Lists clients, newest first; soft-deleted ones only on request."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, include_deleted: bool = False) -> Result[ListClientsResponse]:
        async with self.uow:
            clients = await self.uow.clients.list(include_deleted=include_deleted)
            return Return.ok(
                ListClientsResponse(
                    clients=[ClientInfo.from_entity(c) for c in clients],
                    total=len(clients),
                )
            )
