from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from portal.api.error import ClientError, ServerError
from portal.api.utils.admin_auth import verify_admin_api_key
from portal.app.services.unit_of_work import UnitOfWork
from portal.app.use_cases.auth import (
    AssignRoleResponse,
    AssignRoleUseCase,
    CreatePrincipalResponse,
    CreatePrincipalUseCase,
)
from portal.app.use_cases.clients import PurgeClientsResponse, PurgeDueClientsUseCase
from portal.app.use_cases.interactions import (
    RecordInteractionResponse,
    RecordInteractionUseCase,
)
from portal.depends import get_unit_of_work
from portal.domain.entities import AppRole

router = APIRouter(
    prefix="/admin", tags=["Admin"], dependencies=[Depends(verify_admin_api_key)]
)


class CreatePrincipalRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    profile_data: Optional[Dict[str, Any]] = None
    email_confirmed: bool = True


class AssignRoleRequest(BaseModel):
    role: AppRole
    client_id: Optional[UUID] = None


class RecordInteractionRequest(BaseModel):
    client_id: UUID
    query_text: str = Field(..., min_length=1)
    response_time_ms: Optional[int] = None


@router.post(
    "/principals", status_code=status.HTTP_201_CREATED, response_model=CreatePrincipalResponse
)
async def create_principal(
    request: CreatePrincipalRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Principal (service credential)

    Provisions an account directly, e.g. the first admin. A "role" (and
    "client_id" for clients) in profile_data also writes a role record.

    Raises:
        - 400 Bad Request: INVALID_PASSWORD, VALIDATION_ERROR
        - 404 Not Found: CLIENT_NOT_FOUND
        - 409 Conflict: EMAIL_EXISTS
    """
    result = await CreatePrincipalUseCase(uow).execute(
        email=request.email,
        password=request.password,
        profile_data=request.profile_data,
        email_confirmed=request.email_confirmed,
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_PASSWORD", "VALIDATION_ERROR"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "CLIENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "EMAIL_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.put(
    "/principals/{user_id}/role",
    status_code=status.HTTP_200_OK,
    response_model=AssignRoleResponse,
)
async def assign_role(
    user_id: UUID,
    request: AssignRoleRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Assign Role Record (service credential)

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 404 Not Found: USER_NOT_FOUND, CLIENT_NOT_FOUND
    """
    result = await AssignRoleUseCase(uow).execute(user_id, request.role, request.client_id)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("USER_NOT_FOUND", "CLIENT_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/clients/purge-due", status_code=status.HTTP_200_OK, response_model=PurgeClientsResponse
)
async def purge_due_clients(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Purge Clients Past Their Recovery Window (service credential)

    Meant for a scheduler; hard-deletes clients whose deletion_scheduled_at
    has passed.
    """
    result = await PurgeDueClientsUseCase(uow).execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post(
    "/interactions",
    status_code=status.HTTP_201_CREATED,
    response_model=RecordInteractionResponse,
)
async def record_interaction(
    request: RecordInteractionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Record Chat Interaction (service credential)

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 404 Not Found: CLIENT_NOT_FOUND
    """
    result = await RecordInteractionUseCase(uow).execute(
        request.client_id, request.query_text, request.response_time_ms
    )

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "CLIENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
