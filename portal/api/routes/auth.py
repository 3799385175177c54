from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from portal.api.error import ClientError, ServerError
from portal.app.services.route_gate import ROLE_HOME
from portal.app.services.unit_of_work import UnitOfWork
from portal.app.use_cases.auth import (
    RefreshSessionResponse,
    RefreshSessionUseCase,
    SessionInfo,
    SignInResponse,
    SignInUseCase,
    SignOutResponse,
    SignOutUseCase,
    SignUpResponse,
    SignUpUseCase,
    UpdatePrincipalResponse,
    UpdatePrincipalUseCase,
)
from portal.depends import get_auth_session, get_unit_of_work
from portal.domain.identity import AuthSession

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    profile_data: Dict[str, Any] = Field(default_factory=dict)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    redirect_to: Optional[str] = Field(
        None, description="Originally requested view, honoured if the role permits it"
    )
    mfa_code: Optional[str] = Field(
        None, max_length=10, description="Current TOTP code, once MFA is enabled"
    )


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class UpdatePrincipalRequest(BaseModel):
    full_name: Optional[str] = Field(None, max_length=255)
    current_password: Optional[str] = None
    new_password: Optional[str] = None


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=SignUpResponse)
async def sign_up(request: SignUpRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Sign Up

    Creates a principal without a role; an admin assigns one later.

    Raises:
        - 400 Bad Request: INVALID_PASSWORD
        - 409 Conflict: EMAIL_EXISTS
    """
    result = await SignUpUseCase(uow).execute(
        request.email, request.password, request.profile_data
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "EMAIL_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.post("/signin", status_code=status.HTTP_200_OK, response_model=SignInResponse)
async def sign_in(request: SignInRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Sign In

    Returns tokens, the resolved role and where the UI should go next.

    Raises:
        - 401 Unauthorized: INVALID_CREDENTIALS, MFA_REQUIRED, INVALID_MFA_CODE
        - 403 Forbidden: USER_DISABLED
    """
    result = await SignInUseCase(uow).execute(
        request.email, request.password, request.redirect_to, request.mfa_code
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_CREDENTIALS", "MFA_REQUIRED", "INVALID_MFA_CODE"):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "USER_DISABLED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshSessionResponse)
async def refresh(request: RefreshRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Refresh Access Token

    Raises:
        - 401 Unauthorized: INVALID_TOKEN, SESSION_REVOKED, SESSION_EXPIRED,
                            USER_DISABLED
    """
    result = await RefreshSessionUseCase(uow).execute(request.refresh_token)

    if result.is_err():
        error = result.error
        if error.code in (
            "INVALID_TOKEN",
            "SESSION_REVOKED",
            "SESSION_EXPIRED",
            "USER_DISABLED",
        ):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


@router.post("/signout", status_code=status.HTTP_200_OK, response_model=SignOutResponse)
async def sign_out(
    auth_session: AuthSession = Depends(get_auth_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Sign Out

    Revokes the session of the bearer token.

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 404 Not Found: SESSION_NOT_FOUND
    """
    result = await SignOutUseCase(uow).execute(
        auth_session.principal.id, auth_session.session_id
    )

    if result.is_err():
        error = result.error
        if error.code == "SESSION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get("/session", status_code=status.HTTP_200_OK, response_model=SessionInfo)
async def get_session(auth_session: AuthSession = Depends(get_auth_session)):
    """
    Current Session

    Principal, resolved role, bound client and the role's home view.
    """
    return SessionInfo.from_auth_session(auth_session, ROLE_HOME[auth_session.role])


@router.patch("/me", status_code=status.HTTP_200_OK, response_model=UpdatePrincipalResponse)
async def update_me(
    request: UpdatePrincipalRequest,
    auth_session: AuthSession = Depends(get_auth_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Current Principal

    Raises:
        - 400 Bad Request: INVALID_PASSWORD
        - 401 Unauthorized: INVALID_CREDENTIALS (wrong current password)
        - 404 Not Found: USER_NOT_FOUND
    """
    result = await UpdatePrincipalUseCase(uow).execute(
        auth_session,
        full_name=request.full_name,
        current_password=request.current_password,
        new_password=request.new_password,
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
