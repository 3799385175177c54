"""
Create Client Use Case

Admin onboarding of a new chatbot client, ending with a setup invitation.
"""

import logging
from typing import Optional

from portal.app.services.activity_recorder import ActivityRecorder
from portal.app.services.email_sender import EmailSender
from portal.app.services.invitation_issuer import InvitationIssuer
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import ClientCreated
from portal.domain.entities import ClientAccount, ClientStatus, sanitize_agent_name
from portal.domain.identity import AuthSession
from portal.domain.widget_settings import WidgetSettings
from portal.libs.result import Error, Result, Return

from .dtos import ClientInfo, CreateClientResponse

logger = logging.getLogger(__name__)


class CreateClientUseCase:
    """
    Use case for creating a client.

    Business Rules:
    - client_name, email and agent_name are required
    - agent_name is stored sanitized
    - Email must not belong to another live client
    - Widget settings start from the fixed defaults
    - An invitation is issued right away; a failed email does not undo the
      client (warn-and-continue)
    """

    def __init__(self, uow: UnitOfWork, email_sender: EmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def execute(
        self,
        auth_session: AuthSession,
        client_name: str,
        email: str,
        agent_name: str,
        company: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Result[CreateClientResponse]:
        client_name = client_name.strip()
        email = email.strip().lower()
        sanitized_agent = sanitize_agent_name(agent_name)
        if not client_name:
            return Return.err(Error("VALIDATION_ERROR", "Client name is required"))
        if "@" not in email:
            return Return.err(Error("VALIDATION_ERROR", "A valid email is required"))
        if not sanitized_agent.strip("_"):
            return Return.err(Error("VALIDATION_ERROR", "Agent name is required"))

        async with self.uow:
            if await self.uow.clients.get_by_email(email) is not None:
                return Return.err(
                    Error("CLIENT_EMAIL_EXISTS", "A client with this email already exists")
                )

            client = ClientAccount(
                client_name=client_name,
                email=email,
                agent_name=sanitized_agent,
                company=company,
                description=description,
                status=ClientStatus.active,
                widget_settings=WidgetSettings(agent_name=agent_name.strip()).model_dump(),
            )
            client = await self.uow.clients.create(client)
            self.uow.publish_change("clients", {"id": str(client.id), "event": "created"})
            await self.uow.commit()
            client_id = client.id
            logger.info(f"Created client {client_id} ({client_name})")

            await ActivityRecorder(self.uow).record(
                client_id,
                ClientCreated(
                    client_name=client_name, created_by=auth_session.principal.email
                ),
            )

            # Reload: a failed activity write rolls the session back
            client = await self.uow.clients.get_by_id(client_id)
            info = ClientInfo.from_entity(client)
            dispatch = await InvitationIssuer(self.uow, self.email_sender).issue(client)

            return Return.ok(
                CreateClientResponse(
                    client=info,
                    invitation_status=dispatch.dispatch_status,
                    invitation_expires_at=dispatch.expires_at,
                    warnings=[dispatch.warning] if dispatch.warning else [],
                )
            )
