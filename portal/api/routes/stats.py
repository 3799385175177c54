from uuid import UUID

from fastapi import APIRouter, Depends, status

from portal.api.error import ClientError, ServerError
from portal.app.services.unit_of_work import UnitOfWork
from portal.app.use_cases.stats import (
    AdminStatsResponse,
    AdminStatsUseCase,
    ClientDashboardResponse,
    ClientDashboardUseCase,
)
from portal.depends import get_unit_of_work, require_admin, require_admin_or_client
from portal.domain.identity import AuthSession

router = APIRouter(tags=["Stats"])


@router.get("/stats/overview", status_code=status.HTTP_200_OK, response_model=AdminStatsResponse)
async def admin_overview(
    auth_session: AuthSession = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Admin Dashboard Stats

    Total clients (soft-deleted excluded) and clients active in the last
    48 hours, with the change against the 48 hours before.
    """
    result = await AdminStatsUseCase(uow).execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get(
    "/clients/{client_id}/dashboard",
    status_code=status.HTTP_200_OK,
    response_model=ClientDashboardResponse,
)
async def client_dashboard(
    client_id: UUID,
    auth_session: AuthSession = Depends(require_admin_or_client),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Client Dashboard Stats (admin, or the bound client)"""
    result = await ClientDashboardUseCase(uow).execute(auth_session, client_id)

    if result.is_err():
        error = result.error
        if error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "CLIENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
