from uuid import UUID

from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.entities import ClientAccount
from portal.domain.identity import AuthSession
from portal.libs.result import Error, Result, Return


async def load_accessible_client(
    uow: UnitOfWork,
    auth_session: AuthSession,
    client_id: UUID,
    include_deleted: bool = False,
) -> Result[ClientAccount]:
    """
    Load a client the acting principal may see.

    Admins see every client; a client principal only its own. Soft-deleted
    clients are hidden unless include_deleted is set by an admin caller.
    """
    if not auth_session.can_access_client(client_id):
        return Return.err(Error("FORBIDDEN", "You do not have access to this client"))

    client = await uow.clients.get_by_id(client_id)
    if client is None:
        return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))

    if client.deleted_at is not None and not (
        include_deleted and auth_session.identity.is_admin
    ):
        return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))

    return Return.ok(client)
