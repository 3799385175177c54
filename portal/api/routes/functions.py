from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status

from portal.api.error import ClientError, ServerError
from portal.api.utils.admin_auth import verify_admin_api_key
from portal.app.services.email_sender import EmailSender
from portal.app.services.unit_of_work import UnitOfWork
from portal.app.use_cases.functions import FunctionResponse, InvokeFunctionUseCase
from portal.depends import get_email_sender, get_unit_of_work

router = APIRouter(prefix="/functions", tags=["Functions"])


@router.post(
    "/{name}",
    status_code=status.HTTP_200_OK,
    response_model=FunctionResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def invoke_function(
    name: str,
    payload: Dict[str, Any] = Body(default_factory=dict),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """
    Invoke a Named Function (service credential)

    Available: send-client-invitation, send-deletion-email, send-email.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 404 Not Found: FUNCTION_NOT_FOUND, CLIENT_NOT_FOUND
        - 409 Conflict: NOT_SCHEDULED
        - 502 Bad Gateway: EMAIL_SEND_FAILED
    """
    result = await InvokeFunctionUseCase(uow, email_sender).execute(name, payload)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("FUNCTION_NOT_FOUND", "CLIENT_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "NOT_SCHEDULED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "EMAIL_SEND_FAILED":
            raise ClientError(error, status_code=status.HTTP_502_BAD_GATEWAY)
        raise ServerError(error)

    return result.value
