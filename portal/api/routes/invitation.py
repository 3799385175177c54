"""
Invitation API Routes - Account Setup

Public endpoints behind the setup link. The token is the capability; every
kind of bad token gets the same answer.
"""

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from portal.api.error import ClientError, ServerError
from portal.app.services.unit_of_work import UnitOfWork
from portal.app.use_cases.invitations import (
    RedeemInvitationResponse,
    RedeemInvitationUseCase,
    TokenVerification,
    VerifyInvitationUseCase,
)
from portal.depends import get_unit_of_work

router = APIRouter(prefix="/invitations", tags=["Invitations"])


class RedeemInvitationRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Setup token from the link")
    password: str = Field(..., min_length=1)


@router.get("/verify", status_code=status.HTTP_200_OK, response_model=TokenVerification)
async def verify_invitation(
    token: str = Query("", description="Setup token from the link"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Verify Setup Token

    Always 200; `is_valid` is false for missing, unknown, used and expired
    tokens alike.
    """
    result = await VerifyInvitationUseCase(uow).execute(token)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post("/redeem", status_code=status.HTTP_200_OK, response_model=RedeemInvitationResponse)
async def redeem_invitation(
    request: RedeemInvitationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Complete Account Setup

    Creates the client principal and signs it in. Repeating the request with
    the same password signs the existing account in again.

    Raises:
        - 400 Bad Request: INVALID_TOKEN, INVALID_PASSWORD
        - 403 Forbidden: USER_DISABLED
        - 409 Conflict: ACCOUNT_EXISTS
    """
    result = await RedeemInvitationUseCase(uow).execute(request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_TOKEN", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "USER_DISABLED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "ACCOUNT_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
