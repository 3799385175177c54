"""
Update Client Use Case

Edits client account details, by an admin or by the bound client.
"""

from typing import Any, Dict
from uuid import UUID

from portal.app.services.activity_recorder import ActivityRecorder
from portal.app.services.client_access import load_accessible_client
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import ClientUpdated
from portal.domain.base import utcnow
from portal.domain.entities import ClientStatus, sanitize_agent_name
from portal.domain.identity import AuthSession
from portal.libs.result import Error, Result, Return

from .dtos import ClientInfo, UpdateClientResponse

CLIENT_EDITABLE_FIELDS = {"client_name", "company", "description"}
ADMIN_EDITABLE_FIELDS = CLIENT_EDITABLE_FIELDS | {"email", "agent_name", "status"}


class UpdateClientUseCase:
    """
    Use case for updating a client.

    Business Rules:
    - Admins may edit every field; a client only name, company, description
    - Soft-deleted clients can not be edited
    - Logs client_updated; a failed activity write does not fail the update
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, auth_session: AuthSession, client_id: UUID, changes: Dict[str, Any]
    ) -> Result[UpdateClientResponse]:
        allowed = ADMIN_EDITABLE_FIELDS if auth_session.identity.is_admin else CLIENT_EDITABLE_FIELDS
        forbidden = sorted(set(changes) - allowed)
        if forbidden:
            return Return.err(
                Error("FORBIDDEN", f"Not allowed to change: {', '.join(forbidden)}")
            )

        async with self.uow:
            result = await load_accessible_client(self.uow, auth_session, client_id)
            if result.is_err():
                return Return.err(result.error)
            client = result.value

            changed = []
            for field, value in changes.items():
                if field == "client_name":
                    value = (value or "").strip()
                    if not value:
                        return Return.err(
                            Error("VALIDATION_ERROR", "Client name is required")
                        )
                elif field == "email":
                    value = (value or "").strip().lower()
                    if "@" not in value:
                        return Return.err(
                            Error("VALIDATION_ERROR", "A valid email is required")
                        )
                    other = await self.uow.clients.get_by_email(value)
                    if other is not None and other.id != client.id:
                        return Return.err(
                            Error(
                                "CLIENT_EMAIL_EXISTS",
                                "A client with this email already exists",
                            )
                        )
                elif field == "agent_name":
                    value = sanitize_agent_name(value or "")
                    if not value.strip("_"):
                        return Return.err(
                            Error("VALIDATION_ERROR", "Agent name is required")
                        )
                elif field == "status":
                    try:
                        value = ClientStatus(value)
                    except ValueError:
                        return Return.err(
                            Error("VALIDATION_ERROR", f"Unknown status: {value}")
                        )

                if getattr(client, field) != value:
                    setattr(client, field, value)
                    changed.append(field)

            if changed:
                client.updated_at = utcnow()
                client = await self.uow.clients.update(client)
                self.uow.publish_change("clients", {"id": str(client.id), "event": "updated"})
                await self.uow.commit()

            info = ClientInfo.from_entity(client)
            if changed:
                await ActivityRecorder(self.uow).record(
                    client_id,
                    ClientUpdated(
                        changed_fields=changed, updated_by_role=auth_session.role.value
                    ),
                )

            return Return.ok(UpdateClientResponse(client=info, changed_fields=changed))
