from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from config import ApplicationConfig
from portal.api.utils.jwt import create_access_token
from portal.app.services.credentials import hash_token, new_opaque_token
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.base import utcnow
from portal.domain.entities import Session, User


@dataclass
class IssuedSession:
    session: Session
    access_token: str
    refresh_token: str
    expires_in: int


async def open_session(uow: UnitOfWork, user: User) -> IssuedSession:
    """
    Create a session row for the user and mint its tokens.

    Only the SHA-256 digest of the refresh token is stored. The caller
    commits.
    """
    now = utcnow()
    refresh_token = new_opaque_token()
    session_obj = Session(
        user_id=user.id,
        refresh_token_hash=hash_token(refresh_token),
        created_at=now,
        expires_at=now + timedelta(days=ApplicationConfig.REFRESH_TOKEN_TTL_DAYS),
    )
    session_obj = await uow.sessions.create(session_obj)

    user.last_sign_in_at = now
    await uow.users.update(user)

    uow.publish_change("sessions", session_change(session_obj, "signed_in"))
    return IssuedSession(
        session=session_obj,
        access_token=create_access_token(user.id, user.email, session_obj.id),
        refresh_token=refresh_token,
        expires_in=ApplicationConfig.ACCESS_TOKEN_TTL_MINUTES * 60,
    )


def session_change(session_obj: Session, event: str, user_id: Optional[str] = None) -> dict:
    return {
        "id": str(session_obj.id),
        "user_id": user_id or str(session_obj.user_id),
        "event": event,
    }
