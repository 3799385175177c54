"""
Update Principal Use Case

Lets the signed-in principal change its display name and password.
"""

from typing import Optional

from portal.app.services.credentials import (
    MIN_PASSWORD_LENGTH,
    hash_password,
    verify_password,
)
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.identity import AuthSession
from portal.libs.result import Error, Result, Return

from .dtos import PrincipalInfo, UpdatePrincipalResponse


class UpdatePrincipalUseCase:
    """
    Use case for updating the current principal.

    Business Rules:
    - Password change requires the current password
    - Password change revokes every other session of the principal
    - role / client_id can not be changed here
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        auth_session: AuthSession,
        full_name: Optional[str] = None,
        current_password: Optional[str] = None,
        new_password: Optional[str] = None,
    ) -> Result[UpdatePrincipalResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(auth_session.principal.id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            revoked = 0
            if new_password is not None:
                if not current_password or not verify_password(
                    current_password, user.password_hash
                ):
                    return Return.err(
                        Error("INVALID_CREDENTIALS", "Current password is incorrect")
                    )
                if len(new_password) < MIN_PASSWORD_LENGTH:
                    return Return.err(
                        Error(
                            "INVALID_PASSWORD",
                            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                        )
                    )
                user.password_hash = hash_password(new_password)

            if full_name is not None:
                # Reassign so the JSON column is flagged dirty
                user.user_metadata = {**(user.user_metadata or {}), "full_name": full_name.strip()}

            user = await self.uow.users.update(user)
            if new_password is not None:
                revoked = await self.uow.sessions.revoke_all_except(
                    user.id, auth_session.session_id
                )
                self.uow.publish_change(
                    "sessions", {"user_id": str(user.id), "event": "revoked"}
                )
            await self.uow.commit()

            return Return.ok(
                UpdatePrincipalResponse(
                    user=PrincipalInfo(
                        id=str(user.id),
                        email=user.email,
                        full_name=(user.user_metadata or {}).get("full_name"),
                    ),
                    password_changed=new_password is not None,
                    revoked_sessions=revoked,
                )
            )
