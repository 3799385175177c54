from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from portal.api.error import ClientError, ServerError
from portal.app.services.unit_of_work import UnitOfWork
from portal.app.use_cases.activity import (
    ActivityFeedResponse,
    ListClientActivityUseCase,
    ListRecentActivityUseCase,
)
from portal.depends import get_unit_of_work, require_admin, require_admin_or_client
from portal.domain.identity import AuthSession

router = APIRouter(tags=["Activity"])


@router.get(
    "/clients/{client_id}/activity",
    status_code=status.HTTP_200_OK,
    response_model=ActivityFeedResponse,
)
async def list_client_activity(
    client_id: UUID,
    limit: int = Query(50, ge=1, le=200),
    auth_session: AuthSession = Depends(require_admin_or_client),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Client Activity Feed (admin, or the bound client)"""
    result = await ListClientActivityUseCase(uow).execute(auth_session, client_id, limit=limit)

    if result.is_err():
        error = result.error
        if error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "CLIENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get("/activity/recent", status_code=status.HTTP_200_OK, response_model=ActivityFeedResponse)
async def list_recent_activity(
    limit: int = Query(50, ge=1, le=200),
    auth_session: AuthSession = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Recent Activity Across Clients (admin)"""
    result = await ListRecentActivityUseCase(uow).execute(limit=limit)

    if result.is_err():
        raise ServerError(result.error)

    return result.value
