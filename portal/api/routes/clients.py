from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from portal.api.error import ClientError, ServerError
from portal.app.services.email_sender import EmailSender
from portal.app.services.unit_of_work import UnitOfWork
from portal.app.use_cases.clients import (
    ClientInfo,
    CreateClientResponse,
    CreateClientUseCase,
    GetClientUseCase,
    ListClientsResponse,
    ListClientsUseCase,
    ScheduleClientDeletionUseCase,
    ScheduleDeletionResponse,
    UpdateClientResponse,
    UpdateClientUseCase,
)
from portal.app.use_cases.invitations import (
    ListInvitationsResponse,
    ListInvitationsUseCase,
    ResendInvitationResponse,
    ResendInvitationUseCase,
)
from portal.depends import (
    get_email_sender,
    get_unit_of_work,
    require_admin,
    require_admin_or_client,
)
from portal.domain.identity import AuthSession

router = APIRouter(prefix="/clients", tags=["Clients"])


class CreateClientRequest(BaseModel):
    client_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    agent_name: str = Field(..., min_length=1, max_length=255)
    company: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None


class UpdateClientRequest(BaseModel):
    client_name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    agent_name: Optional[str] = Field(None, max_length=255)
    company: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    status: Optional[str] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreateClientResponse)
async def create_client(
    request: CreateClientRequest,
    auth_session: AuthSession = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """
    Create Client (admin)

    Creates the client and sends its setup invitation. A failed email is
    reported in `warnings` with invitation_status="unnotified"; the client
    is still created.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 409 Conflict: CLIENT_EMAIL_EXISTS
    """
    result = await CreateClientUseCase(uow, email_sender).execute(
        auth_session,
        client_name=request.client_name,
        email=request.email,
        agent_name=request.agent_name,
        company=request.company,
        description=request.description,
    )

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "CLIENT_EMAIL_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=ListClientsResponse)
async def list_clients(
    include_deleted: bool = Query(False),
    auth_session: AuthSession = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List Clients (admin)"""
    result = await ListClientsUseCase(uow).execute(include_deleted=include_deleted)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/{client_id}", status_code=status.HTTP_200_OK, response_model=ClientInfo)
async def get_client(
    client_id: UUID,
    auth_session: AuthSession = Depends(require_admin_or_client),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Client (admin, or the bound client)

    Raises:
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: CLIENT_NOT_FOUND
    """
    result = await GetClientUseCase(uow).execute(auth_session, client_id)

    if result.is_err():
        error = result.error
        if error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "CLIENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.patch("/{client_id}", status_code=status.HTTP_200_OK, response_model=UpdateClientResponse)
async def update_client(
    client_id: UUID,
    request: UpdateClientRequest,
    auth_session: AuthSession = Depends(require_admin_or_client),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Client (admin, or the bound client for its own details)

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: CLIENT_NOT_FOUND
        - 409 Conflict: CLIENT_EMAIL_EXISTS
    """
    result = await UpdateClientUseCase(uow).execute(
        auth_session, client_id, request.model_dump(exclude_unset=True)
    )

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "CLIENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "CLIENT_EMAIL_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.delete(
    "/{client_id}", status_code=status.HTTP_200_OK, response_model=ScheduleDeletionResponse
)
async def delete_client(
    client_id: UUID,
    auth_session: AuthSession = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """
    Schedule Client Deletion (admin)

    Soft delete with a grace period; the client is emailed a recovery link.

    Raises:
        - 404 Not Found: CLIENT_NOT_FOUND
        - 409 Conflict: ALREADY_SCHEDULED
    """
    result = await ScheduleClientDeletionUseCase(uow, email_sender).execute(client_id)

    if result.is_err():
        error = result.error
        if error.code == "CLIENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "ALREADY_SCHEDULED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "/{client_id}/invitations",
    status_code=status.HTTP_200_OK,
    response_model=ListInvitationsResponse,
)
async def list_invitations(
    client_id: UUID,
    auth_session: AuthSession = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Client Invitations (admin)

    Raises:
        - 404 Not Found: CLIENT_NOT_FOUND
    """
    result = await ListInvitationsUseCase(uow).execute(client_id)

    if result.is_err():
        error = result.error
        if error.code == "CLIENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/{client_id}/invitations/resend",
    status_code=status.HTTP_200_OK,
    response_model=ResendInvitationResponse,
)
async def resend_invitation(
    client_id: UUID,
    auth_session: AuthSession = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """
    Resend Setup Link (admin)

    Expires outstanding setup links and sends a new one.

    Raises:
        - 404 Not Found: CLIENT_NOT_FOUND
        - 409 Conflict: ACCOUNT_EXISTS (setup already completed)
    """
    result = await ResendInvitationUseCase(uow, email_sender).execute(client_id)

    if result.is_err():
        error = result.error
        if error.code == "CLIENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "ACCOUNT_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
