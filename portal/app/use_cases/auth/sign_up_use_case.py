"""
Sign Up Use Case

Self-service principal registration. New principals carry no role until an
admin assigns one.
"""

from typing import Any, Dict, Optional

from portal.app.services.credentials import MIN_PASSWORD_LENGTH, hash_password
from portal.app.services.role_resolver import RoleResolver
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.entities import User
from portal.domain.identity import Principal
from portal.libs.result import Error, Result, Return

from .dtos import IdentityInfo, SignUpResponse

# Profile keys a principal may set about itself
SELF_SERVICE_PROFILE_KEYS = ("full_name",)


class SignUpUseCase:
    """
    Use case for principal sign-up.

    Business Rules:
    - Email must be unique (case-insensitive)
    - Password at least 8 characters, stored as bcrypt hash
    - role / client_id in submitted profile data are ignored
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, email: str, password: str, profile_data: Optional[Dict[str, Any]] = None
    ) -> Result[SignUpResponse]:
        if len(password) < MIN_PASSWORD_LENGTH:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                )
            )

        email = email.strip().lower()
        metadata = {
            key: value
            for key, value in (profile_data or {}).items()
            if key in SELF_SERVICE_PROFILE_KEYS
        }

        async with self.uow:
            if await self.uow.users.get_by_email(email) is not None:
                return Return.err(
                    Error("EMAIL_EXISTS", "An account with this email already exists")
                )

            user = User(
                email=email,
                password_hash=hash_password(password),
                user_metadata=metadata,
            )
            user = await self.uow.users.create(user)
            identity = await RoleResolver(self.uow).resolve(Principal.from_user(user))
            await self.uow.commit()

            return Return.ok(
                SignUpResponse(
                    user_id=str(user.id),
                    email=user.email,
                    identity=IdentityInfo.from_identity(identity),
                )
            )
