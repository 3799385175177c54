"""
Create Principal Use Case

Service-credential principal creation, used to bootstrap admins and to
provision accounts outside the invitation flow.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from portal.app.services.credentials import MIN_PASSWORD_LENGTH, hash_password
from portal.app.services.role_resolver import RoleResolver
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.entities import AppRole, User, UserRole
from portal.domain.identity import Principal
from portal.libs.result import Error, Result, Return

from .dtos import CreatePrincipalResponse, IdentityInfo


class CreatePrincipalUseCase:
    """
    Use case for admin principal creation.

    Business Rules:
    - Email must be unique
    - A role in profile_data is also persisted as a user_roles record
    - role=client requires the client to exist
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        email: str,
        password: str,
        profile_data: Optional[Dict[str, Any]] = None,
        email_confirmed: bool = True,
    ) -> Result[CreatePrincipalResponse]:
        if len(password) < MIN_PASSWORD_LENGTH:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                )
            )

        metadata = dict(profile_data or {})
        role_value = metadata.get("role")
        role = None
        if role_value is not None:
            try:
                role = AppRole(role_value)
            except ValueError:
                return Return.err(
                    Error("VALIDATION_ERROR", f"Unknown role: {role_value}")
                )

        client_id = None
        if metadata.get("client_id") is not None:
            try:
                client_id = UUID(str(metadata["client_id"]))
            except ValueError:
                return Return.err(Error("VALIDATION_ERROR", "client_id must be a UUID"))
            metadata["client_id"] = str(client_id)

        if role == AppRole.client and client_id is None:
            return Return.err(
                Error("VALIDATION_ERROR", "client_id is required for role=client")
            )

        async with self.uow:
            if await self.uow.users.get_by_email(email) is not None:
                return Return.err(
                    Error("EMAIL_EXISTS", "An account with this email already exists")
                )

            if client_id is not None and await self.uow.clients.get_by_id(client_id) is None:
                return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))

            user = User(
                email=email.strip().lower(),
                password_hash=hash_password(password),
                user_metadata=metadata,
                email_confirmed=email_confirmed,
            )
            user = await self.uow.users.create(user)

            if role is not None:
                await self.uow.user_roles.create(
                    UserRole(
                        user_id=user.id,
                        role=role,
                        client_id=client_id if role == AppRole.client else None,
                    )
                )

            identity = await RoleResolver(self.uow).resolve(Principal.from_user(user))
            await self.uow.commit()

            return Return.ok(
                CreatePrincipalResponse(
                    user_id=str(user.id),
                    email=user.email,
                    email_confirmed=user.email_confirmed,
                    identity=IdentityInfo.from_identity(identity),
                )
            )
