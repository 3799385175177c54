"""
Sign In Use Case

Authenticates a principal, opens a session and works out where to send it.
"""

from typing import Optional

from portal.app.services.credentials import burn_password_check, verify_password
from portal.app.services.role_resolver import RoleResolver
from portal.app.services.route_gate import post_sign_in_location
from portal.app.services.session_issuer import open_session
from portal.app.services.totp import matches_any, verified_factors
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.entities import UserStatus
from portal.domain.identity import AuthSession, Principal
from portal.libs.result import Error, Result, Return

from .dtos import IdentityInfo, PrincipalInfo, SignInResponse


class SignInUseCase:
    """
    Use case for sign-in.

    Business Rules:
    - Constant-time failure path (unknown email costs a bcrypt check too)
    - Disabled principals cannot sign in
    - A principal with a verified MFA factor also needs a current TOTP code;
      without one the answer is MFA_REQUIRED and no session is opened
    - Role is resolved at sign-in and returned, never embedded in the token
    - redirect_to is honoured only when the resolved role may view it
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        email: str,
        password: str,
        redirect_to: Optional[str] = None,
        mfa_code: Optional[str] = None,
    ) -> Result[SignInResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                burn_password_check()
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not verify_password(password, user.password_hash):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if user.status == UserStatus.disabled:
                return Return.err(Error("USER_DISABLED", "User account is disabled"))

            factors = await self.uow.mfa_factors.list_by_user_id(user.id)
            if verified_factors(factors):
                if not mfa_code:
                    return Return.err(
                        Error("MFA_REQUIRED", "Enter the code from your authenticator app")
                    )
                if not matches_any(factors, mfa_code):
                    return Return.err(Error("INVALID_MFA_CODE", "Invalid one-time password"))

            issued = await open_session(self.uow, user)
            principal = Principal.from_user(user)
            identity = await RoleResolver(self.uow).resolve(principal)
            await self.uow.commit()

            auth_session = AuthSession(
                principal=principal, session_id=issued.session.id, identity=identity
            )
            return Return.ok(
                SignInResponse(
                    access_token=issued.access_token,
                    refresh_token=issued.refresh_token,
                    expires_in=issued.expires_in,
                    session_id=str(issued.session.id),
                    user=PrincipalInfo(
                        id=str(user.id),
                        email=user.email,
                        full_name=principal.user_metadata.get("full_name"),
                    ),
                    identity=IdentityInfo.from_identity(identity),
                    redirect_to=post_sign_in_location(auth_session, redirect_to),
                )
            )
