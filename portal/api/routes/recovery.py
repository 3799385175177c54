from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from portal.api.error import ClientError, ServerError
from portal.app.services.unit_of_work import UnitOfWork
from portal.app.use_cases.clients import RecoverClientResponse, RecoverClientUseCase
from portal.depends import get_unit_of_work

router = APIRouter(prefix="/recovery", tags=["Recovery"])


class RecoverClientRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Recovery token from the email")


@router.post("/redeem", status_code=status.HTTP_200_OK, response_model=RecoverClientResponse)
async def recover_client(
    request: RecoverClientRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Recover Client

    Public; the recovery token is the credential.

    Raises:
        - 400 Bad Request: INVALID_TOKEN (missing, used or expired)
    """
    result = await RecoverClientUseCase(uow).execute(request.token)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_TOKEN":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
