"""
Assign Role Use Case

Persists an explicit role for an existing principal.
"""

from typing import Optional
from uuid import UUID

from portal.app.services.role_resolver import RoleResolver
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.entities import AppRole, UserRole
from portal.domain.identity import Principal
from portal.libs.result import Error, Result, Return

from .dtos import AssignRoleResponse, IdentityInfo


class AssignRoleUseCase:
    """
    Use case for assigning a role record.

    Business Rules:
    - role=client requires an existing client
    - Profile data role/client_id are rewritten to match, since they take
      precedence over the role record during resolution
    - Publishes a sessions change so signed-in clients re-resolve
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, role: AppRole, client_id: Optional[UUID] = None
    ) -> Result[AssignRoleResponse]:
        if role == AppRole.client and client_id is None:
            return Return.err(
                Error("VALIDATION_ERROR", "client_id is required for role=client")
            )
        if role == AppRole.admin:
            client_id = None

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if client_id is not None and await self.uow.clients.get_by_id(client_id) is None:
                return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))

            record = await self.uow.user_roles.get_by_user_id(user_id)
            if record is None:
                await self.uow.user_roles.create(
                    UserRole(user_id=user_id, role=role, client_id=client_id)
                )
            else:
                record.role = role
                record.client_id = client_id
                await self.uow.user_roles.update(record)

            metadata = {
                k: v for k, v in (user.user_metadata or {}).items() if k not in ("role", "client_id")
            }
            metadata["role"] = role.value
            if client_id is not None:
                metadata["client_id"] = str(client_id)
            user.user_metadata = metadata
            user = await self.uow.users.update(user)

            identity = await RoleResolver(self.uow).resolve(Principal.from_user(user))
            self.uow.publish_change(
                "sessions", {"user_id": str(user_id), "event": "role_changed"}
            )
            await self.uow.commit()

            return Return.ok(
                AssignRoleResponse(
                    user_id=str(user_id), identity=IdentityInfo.from_identity(identity)
                )
            )
