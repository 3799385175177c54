from typing import Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile, status
from pydantic import BaseModel, Field

from portal.api.error import ClientError, ServerError
from portal.app.services.object_storage import ObjectStorage
from portal.app.services.unit_of_work import UnitOfWork
from portal.app.use_cases.widget import (
    GetWidgetSettingsUseCase,
    LogoUploadResponse,
    UpdateWidgetSettingsUseCase,
    UploadLogoUseCase,
    WidgetSettingsResponse,
)
from portal.depends import get_object_storage, get_unit_of_work, require_admin_or_client
from portal.domain.identity import AuthSession
from portal.domain.widget_settings import WidgetSettingsPatch

router = APIRouter(prefix="/clients/{client_id}", tags=["Widget"])


class UpdateWidgetSettingsRequest(BaseModel):
    agent_name: Optional[str] = Field(None, max_length=255)
    webhook_url: Optional[str] = None
    chat_color: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    secondary_color: Optional[str] = None
    position: Optional[Literal["left", "right"]] = None
    welcome_text: Optional[str] = Field(None, max_length=500)
    response_time_text: Optional[str] = Field(None, max_length=255)


def _raise_for_access(error):
    if error.code == "FORBIDDEN":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code == "CLIENT_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)


@router.get(
    "/widget-settings", status_code=status.HTTP_200_OK, response_model=WidgetSettingsResponse
)
async def get_widget_settings(
    client_id: UUID,
    auth_session: AuthSession = Depends(require_admin_or_client),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Get Widget Settings (admin, or the bound client)"""
    result = await GetWidgetSettingsUseCase(uow).execute(auth_session, client_id)

    if result.is_err():
        _raise_for_access(result.error)
        raise ServerError(result.error)

    return result.value


@router.patch(
    "/widget-settings", status_code=status.HTTP_200_OK, response_model=WidgetSettingsResponse
)
async def update_widget_settings(
    client_id: UUID,
    request: UpdateWidgetSettingsRequest,
    auth_session: AuthSession = Depends(require_admin_or_client),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Widget Settings (admin, or the bound client)

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (bad colour, URL, ...)
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: CLIENT_NOT_FOUND
    """
    patch = WidgetSettingsPatch(**request.model_dump(exclude_unset=True))
    result = await UpdateWidgetSettingsUseCase(uow).execute(auth_session, client_id, patch)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        _raise_for_access(error)
        raise ServerError(error)

    return result.value


@router.post("/logo", status_code=status.HTTP_201_CREATED, response_model=LogoUploadResponse)
async def upload_logo(
    client_id: UUID,
    file: UploadFile = File(..., description="PNG, JPEG, GIF, WebP or SVG image, at most 2 MB"),
    auth_session: AuthSession = Depends(require_admin_or_client),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: ObjectStorage = Depends(get_object_storage),
):
    """
    Upload Widget Logo (admin, or the bound client)

    Multipart upload; the part's content type decides the stored format.

    Raises:
        - 400 Bad Request: INVALID_FILE_TYPE, VALIDATION_ERROR
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: CLIENT_NOT_FOUND
        - 413 Payload Too Large: FILE_TOO_LARGE
        - 502 Bad Gateway: UPLOAD_FAILED
    """
    try:
        result = await UploadLogoUseCase(uow, storage).execute(
            auth_session, client_id, file.content_type, file
        )
    finally:
        await file.close()

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_FILE_TYPE", "VALIDATION_ERROR"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "FILE_TOO_LARGE":
            raise ClientError(error, status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)
        elif error.code == "UPLOAD_FAILED":
            raise ClientError(error, status_code=status.HTTP_502_BAD_GATEWAY)
        _raise_for_access(error)
        raise ServerError(error)

    return result.value
