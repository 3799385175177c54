from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from portal.api.error import ClientError, ServerError
from portal.app.services.unit_of_work import UnitOfWork
from portal.app.use_cases.mfa import (
    EnrollFactorResponse,
    EnrollFactorUseCase,
    FactorInfo,
    ListFactorsUseCase,
    MfaStatusResponse,
    UnenrollFactorResponse,
    UnenrollFactorUseCase,
    VerifyFactorUseCase,
)
from portal.depends import get_auth_session, get_unit_of_work
from portal.domain.identity import AuthSession
from portal.libs.result import Error

router = APIRouter(prefix="/auth/mfa", tags=["MFA"])


class EnrollFactorRequest(BaseModel):
    friendly_name: Optional[str] = Field(None, max_length=100)


class FactorCodeRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=10)


class UnenrollFactorRequest(BaseModel):
    code: Optional[str] = Field(None, max_length=10)


def _raise(error: Error):
    if error.code == "VALIDATION_ERROR":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    elif error.code == "INVALID_MFA_CODE":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    elif error.code == "MFA_FACTOR_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


@router.get("", status_code=status.HTTP_200_OK, response_model=MfaStatusResponse)
async def list_factors(
    auth_session: AuthSession = Depends(get_auth_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """MFA status and the TOTP factors of the current principal"""
    result = await ListFactorsUseCase(uow).execute(auth_session)
    if result.is_err():
        _raise(result.error)
    return result.value


@router.post("/enroll", status_code=status.HTTP_201_CREATED, response_model=EnrollFactorResponse)
async def enroll_factor(
    request: EnrollFactorRequest,
    auth_session: AuthSession = Depends(get_auth_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Start TOTP Enrollment

    Returns the secret and an otpauth:// URI for the authenticator app. The
    factor only counts after /verify.
    """
    result = await EnrollFactorUseCase(uow).execute(auth_session, request.friendly_name)
    if result.is_err():
        _raise(result.error)
    return result.value


@router.post("/{factor_id}/verify", status_code=status.HTTP_200_OK, response_model=FactorInfo)
async def verify_factor(
    factor_id: UUID,
    request: FactorCodeRequest,
    auth_session: AuthSession = Depends(get_auth_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Verify TOTP Factor

    Raises:
        - 400 Bad Request: INVALID_MFA_CODE
        - 404 Not Found: MFA_FACTOR_NOT_FOUND
    """
    result = await VerifyFactorUseCase(uow).execute(auth_session, factor_id, request.code)
    if result.is_err():
        _raise(result.error)
    return result.value


@router.post(
    "/{factor_id}/unenroll", status_code=status.HTTP_200_OK, response_model=UnenrollFactorResponse
)
async def unenroll_factor(
    factor_id: UUID,
    request: UnenrollFactorRequest,
    auth_session: AuthSession = Depends(get_auth_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove TOTP Factor

    A verified factor needs a current code from it.

    Raises:
        - 400 Bad Request: INVALID_MFA_CODE
        - 404 Not Found: MFA_FACTOR_NOT_FOUND
    """
    result = await UnenrollFactorUseCase(uow).execute(auth_session, factor_id, request.code)
    if result.is_err():
        _raise(result.error)
    return result.value
