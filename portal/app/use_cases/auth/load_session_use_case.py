"""
Load Session Use Case

Builds the per-request AuthSession from verified access token claims.
"""

from uuid import UUID

from portal.app.services.role_resolver import RoleResolver
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.base import utcnow
from portal.domain.entities import UserStatus
from portal.domain.identity import AuthSession, Principal
from portal.libs.result import Error, Result, Return


class LoadSessionUseCase:
    """
    Use case for loading the acting principal and its resolved role.

    Business Rules:
    - The session named in the token must exist, belong to the principal,
      and be neither revoked nor expired
    - Role and client binding are resolved on every call
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, session_id: UUID) -> Result[AuthSession]:
        async with self.uow:
            session_obj = await self.uow.sessions.get_by_id(session_id)
            if (
                session_obj is None
                or session_obj.user_id != user_id
                or session_obj.revoked
                or session_obj.expires_at < utcnow()
            ):
                return Return.err(Error("SESSION_INVALID", "Session is no longer valid"))

            user = await self.uow.users.get_by_id(user_id)
            if user is None or user.status == UserStatus.disabled:
                return Return.err(Error("SESSION_INVALID", "Session is no longer valid"))

            principal = Principal.from_user(user)
            identity = await RoleResolver(self.uow).resolve(principal)
            return Return.ok(
                AuthSession(principal=principal, session_id=session_id, identity=identity)
            )
