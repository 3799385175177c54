"""
Refresh Session Use Case

Rotates the refresh token of a live session.
"""

from datetime import timedelta

from config import ApplicationConfig
from portal.api.utils.jwt import create_access_token
from portal.app.services.credentials import hash_token, new_opaque_token
from portal.app.services.session_issuer import session_change
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.base import utcnow
from portal.domain.entities import UserStatus
from portal.libs.result import Error, Result, Return

from .dtos import RefreshSessionResponse


class RefreshSessionUseCase:
    """
    Use case for refreshing access tokens.

    Business Rules:
    - Refresh token is looked up by its SHA-256 digest
    - Revoked or expired sessions are rejected
    - The refresh token rotates; the previous one stops working
    - Session expiry is not extended
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: str) -> Result[RefreshSessionResponse]:
        async with self.uow:
            session_obj = await self.uow.sessions.get_by_refresh_token_hash(
                hash_token(refresh_token)
            )
            if session_obj is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid refresh token"))

            if session_obj.revoked:
                return Return.err(Error("SESSION_REVOKED", "Session has been revoked"))

            if session_obj.expires_at < utcnow():
                return Return.err(Error("SESSION_EXPIRED", "Session has expired"))

            user = await self.uow.users.get_by_id(session_obj.user_id)
            if user is None or user.status == UserStatus.disabled:
                return Return.err(Error("USER_DISABLED", "User account is disabled"))

            new_refresh_token = new_opaque_token()
            session_obj.refresh_token_hash = hash_token(new_refresh_token)
            await self.uow.sessions.update(session_obj)
            self.uow.publish_change("sessions", session_change(session_obj, "refreshed"))
            await self.uow.commit()

            return Return.ok(
                RefreshSessionResponse(
                    access_token=create_access_token(
                        user.id,
                        user.email,
                        session_obj.id,
                        expires_delta=timedelta(
                            minutes=ApplicationConfig.ACCESS_TOKEN_TTL_MINUTES
                        ),
                    ),
                    refresh_token=new_refresh_token,
                    expires_in=ApplicationConfig.ACCESS_TOKEN_TTL_MINUTES * 60,
                    session_id=str(session_obj.id),
                )
            )
