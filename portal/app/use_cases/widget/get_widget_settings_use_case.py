from uuid import UUID

from portal.app.services.client_access import load_accessible_client
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.identity import AuthSession
from portal.domain.widget_settings import parse_widget_settings
from portal.libs.result import Result, Return

from .dtos import WidgetSettingsResponse


class GetWidgetSettingsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, auth_session: AuthSession, client_id: UUID
    ) -> Result[WidgetSettingsResponse]:
        async with self.uow:
            result = await load_accessible_client(self.uow, auth_session, client_id)
            if result.is_err():
                return Return.err(result.error)
            return Return.ok(
                WidgetSettingsResponse(
                    client_id=str(client_id),
                    settings=parse_widget_settings(result.value.widget_settings),
                )
            )
