"""
Update Widget Settings Use Case

Applies a partial change to a client's widget configuration.
"""

from uuid import UUID

from pydantic import ValidationError

from portal.app.services.activity_recorder import ActivityRecorder
from portal.app.services.client_access import load_accessible_client
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import WidgetSettingsUpdated
from portal.domain.base import utcnow
from portal.domain.identity import AuthSession
from portal.domain.widget_settings import (
    WidgetSettings,
    WidgetSettingsPatch,
    parse_widget_settings,
)
from portal.libs.result import Error, Result, Return

from .dtos import WidgetSettingsResponse


class UpdateWidgetSettingsUseCase:
    """
    Use case for updating widget settings.

    Business Rules:
    - Admin or the bound client
    - The merged result must validate as WidgetSettings before it is stored
    - Logo fields are only changed by the logo upload
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, auth_session: AuthSession, client_id: UUID, patch: WidgetSettingsPatch
    ) -> Result[WidgetSettingsResponse]:
        async with self.uow:
            result = await load_accessible_client(self.uow, auth_session, client_id)
            if result.is_err():
                return Return.err(result.error)
            client = result.value

            current = parse_widget_settings(client.widget_settings)
            updates = patch.model_dump(exclude_unset=True, exclude_none=True)
            try:
                merged = WidgetSettings.model_validate({**current.model_dump(), **updates})
            except ValidationError as exc:
                first = exc.errors()[0]
                field = ".".join(str(part) for part in first["loc"])
                return Return.err(
                    Error("VALIDATION_ERROR", f"Invalid widget setting {field}: {first['msg']}")
                )

            changed = [
                name
                for name, value in merged.model_dump().items()
                if getattr(current, name) != value
            ]
            if changed:
                client.widget_settings = merged.model_dump()
                client.updated_at = utcnow()
                await self.uow.clients.update(client)
                self.uow.publish_change(
                    "clients", {"id": str(client_id), "event": "widget_settings_updated"}
                )
                await self.uow.commit()
                await ActivityRecorder(self.uow).record(
                    client_id, WidgetSettingsUpdated(changed_fields=changed)
                )

            return Return.ok(
                WidgetSettingsResponse(
                    client_id=str(client_id), settings=merged, changed_fields=changed
                )
            )
