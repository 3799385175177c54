from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def create_access_token(
    user_id: UUID,
    email: str,
    session_id: UUID,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create JWT access token

    The token identifies the principal and the session it belongs to. It
    never carries a role: roles are resolved on every request.

    Args:
        user_id: User UUID
        email: User email
        session_id: Session UUID the token is bound to
        expires_delta: Token lifetime (defaults to ACCESS_TOKEN_TTL_MINUTES)

    Returns:
        JWT token string (HS256)
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_TTL_MINUTES)
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "sid": str(session_id),
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
    except JWTError:
        return None
    if not payload.get("sub") or not payload.get("sid"):
        return None
    return payload
