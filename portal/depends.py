import asyncio
import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from portal.adapter.services.drive_access import GoogleDriveAccessChecker
from portal.adapter.services.email_sender import LoggingEmailSender, ResendEmailSender
from portal.adapter.services.object_storage import LocalObjectStorage
from portal.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from portal.api.error import ClientError
from portal.api.utils.jwt import verify_jwt
from portal.app.services.change_feed import ChangeFeed
from portal.app.services.drive_access import DriveAccessChecker
from portal.app.services.email_sender import EmailSender
from portal.app.services.object_storage import ObjectStorage
from portal.app.services.route_gate import RouteGate
from portal.app.services.unit_of_work import UnitOfWork
from portal.app.use_cases.auth import LoadSessionUseCase
from portal.domain.entities import Role
from portal.domain.identity import AuthSession
from portal.libs.result import Error

logger = logging.getLogger(__name__)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

change_feed = ChangeFeed()

security = HTTPBearer(auto_error=False)


def get_session_factory():
    return AsyncSessionLocal


def get_change_feed() -> ChangeFeed:
    return change_feed


async def get_unit_of_work(feed: ChangeFeed = Depends(get_change_feed)):
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session, feed)


def get_email_sender() -> EmailSender:
    if ApplicationConfig.RESEND_API_KEY:
        return ResendEmailSender(
            api_key=ApplicationConfig.RESEND_API_KEY,
            sender=ApplicationConfig.EMAIL_FROM,
            timeout=ApplicationConfig.EMAIL_TIMEOUT_SECONDS,
        )
    return LoggingEmailSender()


def get_drive_access_checker() -> Optional[DriveAccessChecker]:
    if not ApplicationConfig.DRIVE_ACCESS_CHECK:
        return None
    return GoogleDriveAccessChecker(
        api_key=ApplicationConfig.GOOGLE_API_KEY,
        timeout=ApplicationConfig.DRIVE_CHECK_TIMEOUT_SECONDS,
    )


def get_object_storage() -> ObjectStorage:
    return LocalObjectStorage(
        root=ApplicationConfig.STORAGE_ROOT,
        public_url=ApplicationConfig.STORAGE_PUBLIC_URL,
    )


async def load_auth_session(uow: UnitOfWork, token: str) -> Optional[AuthSession]:
    """
    Verify an access token and resolve the acting principal.

    Returns None for an invalid token or dead session. Resolution is bounded
    by ROLE_RESOLUTION_TIMEOUT_SECONDS and fails with 503 instead of hanging.
    """
    payload = verify_jwt(token)
    if payload is None:
        return None
    try:
        user_id = UUID(payload["sub"])
        session_id = UUID(payload["sid"])
    except ValueError:
        return None

    try:
        result = await asyncio.wait_for(
            LoadSessionUseCase(uow).execute(user_id, session_id),
            timeout=ApplicationConfig.ROLE_RESOLUTION_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError:
        logger.error(f"Role resolution timed out for user {user_id}")
        raise ClientError(
            Error(
                "ROLE_RESOLUTION_UNAVAILABLE",
                "Could not determine your access right now, please retry",
            ),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if result.is_err():
        return None
    return result.value


async def authenticate_token(
    token: str, session_factory, feed: Optional[ChangeFeed] = None
) -> Optional[AuthSession]:
    """
    Resolve an access token in its own short-lived database session.

    For callers that outlive a request, such as a realtime socket that
    re-checks its access while open.
    """
    if not token:
        return None
    async with session_factory() as session:
        return await load_auth_session(SqlAlchemyUnitOfWork(session, feed), token)


async def get_optional_auth_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Optional[AuthSession]:
    if credentials is None:
        return None
    auth_session = await load_auth_session(uow, credentials.credentials)
    if auth_session is None:
        raise ClientError(
            Error("INVALID_TOKEN", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return auth_session


async def get_auth_session(
    auth_session: Optional[AuthSession] = Depends(get_optional_auth_session),
) -> AuthSession:
    """
    Dependency providing the AuthSession of the bearer token.

    Raises:
        ClientError: 401 if the token is missing, invalid or its session
        was revoked
    """
    if auth_session is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return auth_session


def require_roles(*roles: Role):
    """
    Dependency factory gating an API route to the given roles.

    A principal whose role is not permitted gets 403 with the home view of
    its role as redirect_to.
    """
    gate = RouteGate(roles)

    async def dependency(
        request: Request, auth_session: AuthSession = Depends(get_auth_session)
    ) -> AuthSession:
        decision = gate.evaluate(request.url.path, auth_session)
        if not decision.render_content:
            raise ClientError(
                Error("FORBIDDEN", "Your role does not permit this action"),
                status_code=status.HTTP_403_FORBIDDEN,
                extra={"redirect_to": decision.redirect_to},
            )
        return auth_session

    return dependency


require_admin = require_roles(Role.admin)
require_admin_or_client = require_roles(Role.admin, Role.client)
