"""
Invoke Function Use Case

Named server-side functions callable with a service credential. Each entry
in the registry pairs a payload model with a handler.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, Type
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError

from portal.app.services.email_sender import EmailSender
from portal.app.services.invitation_issuer import InvitationIssuer
from portal.app.services.recovery_issuer import RecoveryIssuer
from portal.app.services.unit_of_work import UnitOfWork
from portal.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SendClientInvitationPayload(_Payload):
    client_id: UUID = Field(alias="clientId")
    email: Optional[EmailStr] = None


class SendDeletionEmailPayload(_Payload):
    client_id: UUID = Field(alias="clientId")


class SendEmailPayload(_Payload):
    to: EmailStr
    subject: str = Field(min_length=1)
    html: str = Field(min_length=1)


class FunctionResponse(BaseModel):
    function: str
    result: Dict[str, Any]


Handler = Callable[[Any], Awaitable[Result[Dict[str, Any]]]]


class InvokeFunctionUseCase:
    """
    Use case for invoking a named function.

    Business Rules:
    - Unknown names yield FUNCTION_NOT_FOUND
    - Payloads are validated before the handler runs
    - Handler failures come back as errors, never as crashes
    """

    def __init__(self, uow: UnitOfWork, email_sender: EmailSender):
        self.uow = uow
        self.email_sender = email_sender
        self.registry: Dict[str, Tuple[Type[BaseModel], Handler]] = {
            "send-client-invitation": (SendClientInvitationPayload, self._send_client_invitation),
            "send-deletion-email": (SendDeletionEmailPayload, self._send_deletion_email),
            "send-email": (SendEmailPayload, self._send_email),
        }

    async def execute(self, name: str, payload: Dict[str, Any]) -> Result[FunctionResponse]:
        entry = self.registry.get(name)
        if entry is None:
            return Return.err(Error("FUNCTION_NOT_FOUND", f"Unknown function: {name}"))

        payload_model, handler = entry
        try:
            parsed = payload_model.model_validate(payload or {})
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            return Return.err(Error("VALIDATION_ERROR", f"Invalid {field}: {first['msg']}"))

        logger.info(f"Invoking function {name}")
        result = await handler(parsed)
        if result.is_err():
            logger.warning(f"Function {name} failed: {result.error.code}")
            return Return.err(result.error)
        return Return.ok(FunctionResponse(function=name, result=result.value))

    async def _send_client_invitation(
        self, payload: SendClientInvitationPayload
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            client = await self.uow.clients.get_by_id(payload.client_id)
            if client is None or client.deleted_at is not None:
                return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))
            dispatch = await InvitationIssuer(self.uow, self.email_sender).issue(
                client, payload.email
            )
            return Return.ok(dispatch.model_dump(mode="json"))

    async def _send_deletion_email(
        self, payload: SendDeletionEmailPayload
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            client = await self.uow.clients.get_by_id(payload.client_id)
            if client is None:
                return Return.err(Error("CLIENT_NOT_FOUND", "Client not found"))
            if client.deleted_at is None:
                return Return.err(
                    Error("NOT_SCHEDULED", "Client is not scheduled for deletion")
                )
            dispatch = await RecoveryIssuer(self.uow, self.email_sender).issue(client)
            return Return.ok(dispatch.model_dump(mode="json"))

    async def _send_email(self, payload: SendEmailPayload) -> Result[Dict[str, Any]]:
        result = await self.email_sender.send(str(payload.to), payload.subject, payload.html)
        if result.is_err():
            return Return.err(Error("EMAIL_SEND_FAILED", "Failed to send email"))
        return Return.ok({"id": result.value})
