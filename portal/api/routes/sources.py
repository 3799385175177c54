from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from portal.api.error import ClientError, ServerError
from portal.app.services.drive_access import DriveAccessChecker
from portal.app.services.unit_of_work import UnitOfWork
from portal.app.use_cases.sources import (
    AddDriveLinkUseCase,
    AddWebsiteUrlUseCase,
    DeleteDriveLinkUseCase,
    DeleteSourceResponse,
    DeleteWebsiteUrlUseCase,
    DriveLinkInfo,
    ListSourcesResponse,
    ListSourcesUseCase,
    WebsiteUrlInfo,
)
from portal.depends import get_drive_access_checker, get_unit_of_work, require_admin_or_client
from portal.domain.identity import AuthSession
from portal.libs.result import Error

router = APIRouter(prefix="/clients/{client_id}", tags=["Sources"])


class AddWebsiteUrlRequest(BaseModel):
    url: str = Field(..., min_length=1, max_length=2048)
    refresh_rate: int = Field(24, description="Hours between re-crawls")


class AddDriveLinkRequest(BaseModel):
    link: str = Field(..., min_length=1, max_length=2048)
    refresh_rate: int = Field(24)


def _raise(error: Error):
    if error.code == "VALIDATION_ERROR":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    elif error.code == "FORBIDDEN":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code in ("CLIENT_NOT_FOUND", "SOURCE_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code == "DRIVE_LINK_NOT_ACCESSIBLE":
        raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
    elif error.code == "DRIVE_CHECK_FAILED":
        raise ClientError(error, status_code=status.HTTP_502_BAD_GATEWAY)
    raise ServerError(error)


@router.get("/sources", status_code=status.HTTP_200_OK, response_model=ListSourcesResponse)
async def list_sources(
    client_id: UUID,
    auth_session: AuthSession = Depends(require_admin_or_client),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List Website URLs and Drive Links (admin, or the bound client)"""
    result = await ListSourcesUseCase(uow).execute(auth_session, client_id)
    if result.is_err():
        _raise(result.error)
    return result.value


@router.post("/website-urls", status_code=status.HTTP_201_CREATED, response_model=WebsiteUrlInfo)
async def add_website_url(
    client_id: UUID,
    request: AddWebsiteUrlRequest,
    auth_session: AuthSession = Depends(require_admin_or_client),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Add Website URL

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (not http(s), refresh_rate < 1)
        - 403 Forbidden / 404 Not Found
    """
    result = await AddWebsiteUrlUseCase(uow).execute(
        auth_session, client_id, request.url, request.refresh_rate
    )
    if result.is_err():
        _raise(result.error)
    return result.value


@router.delete(
    "/website-urls/{url_id}", status_code=status.HTTP_200_OK, response_model=DeleteSourceResponse
)
async def delete_website_url(
    client_id: UUID,
    url_id: UUID,
    auth_session: AuthSession = Depends(require_admin_or_client),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Delete Website URL"""
    result = await DeleteWebsiteUrlUseCase(uow).execute(auth_session, client_id, url_id)
    if result.is_err():
        _raise(result.error)
    return result.value


@router.post("/drive-links", status_code=status.HTTP_201_CREATED, response_model=DriveLinkInfo)
async def add_drive_link(
    client_id: UUID,
    request: AddDriveLinkRequest,
    auth_session: AuthSession = Depends(require_admin_or_client),
    uow: UnitOfWork = Depends(get_unit_of_work),
    access_checker: Optional[DriveAccessChecker] = Depends(get_drive_access_checker),
):
    """
    Add Google Drive Link

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (not a Drive link, no file id)
        - 422 Unprocessable Entity: DRIVE_LINK_NOT_ACCESSIBLE (file is not public)
        - 502 Bad Gateway: DRIVE_CHECK_FAILED (Drive did not answer)
        - 403 Forbidden / 404 Not Found
    """
    result = await AddDriveLinkUseCase(uow, access_checker).execute(
        auth_session, client_id, request.link, request.refresh_rate
    )
    if result.is_err():
        _raise(result.error)
    return result.value


@router.delete(
    "/drive-links/{link_id}", status_code=status.HTTP_200_OK, response_model=DeleteSourceResponse
)
async def delete_drive_link(
    client_id: UUID,
    link_id: UUID,
    auth_session: AuthSession = Depends(require_admin_or_client),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Delete Google Drive Link"""
    result = await DeleteDriveLinkUseCase(uow).execute(auth_session, client_id, link_id)
    if result.is_err():
        _raise(result.error)
    return result.value
