"""
Role resolution.

The chain, first match wins:
  1. role in the principal's profile data
  2. client_id in the profile data implies role=client
  3. persisted user_roles record
  4. a live ClientAccount with the principal's confirmed email implies
     role=client
  5. none

Profile data that answers the question short-circuits before any lookup.
Values that do not parse are ignored and the chain continues.
"""

import logging
from typing import Any, Optional
from uuid import UUID

from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.entities import AppRole, Role
from portal.domain.identity import Principal, ResolvedIdentity

logger = logging.getLogger(__name__)


def _parse_role(value: Any) -> Optional[Role]:
    if not isinstance(value, str):
        return None
    try:
        role = Role(value.strip().lower())
    except ValueError:
        return None
    # "none" in profile data is not an answer
    return None if role == Role.none else role


def _parse_uuid(value: Any) -> Optional[UUID]:
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str):
        return None
    try:
        return UUID(value)
    except ValueError:
        return None


class RoleResolver:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def resolve(self, principal: Principal) -> ResolvedIdentity:
        metadata = principal.user_metadata or {}
        role = _parse_role(metadata.get("role"))
        client_id = _parse_uuid(metadata.get("client_id"))

        if role == Role.admin:
            return ResolvedIdentity(role=Role.admin, source="profile")
        if role == Role.client or client_id is not None:
            if client_id is None:
                logger.warning(f"Client principal {principal.id} has no client_id in profile")
            return ResolvedIdentity(role=Role.client, client_id=client_id, source="profile")

        record = await self.uow.user_roles.get_by_user_id(principal.id)
        if record is not None:
            if record.role == AppRole.admin:
                return ResolvedIdentity(role=Role.admin, source="role_record")
            if record.client_id is not None:
                return ResolvedIdentity(
                    role=Role.client, client_id=record.client_id, source="role_record"
                )

        # Only an address the principal has proven may claim a client by email
        if principal.email_confirmed:
            client = await self.uow.clients.get_by_email(principal.email)
            if client is not None:
                return ResolvedIdentity(role=Role.client, client_id=client.id, source="email")

        if record is not None:
            logger.warning(f"Client principal {principal.id} is not bound to any client")
        return ResolvedIdentity(role=Role.none, source="unresolved")

    async def resolve_role(self, principal: Principal) -> Role:
        return (await self.resolve(principal)).role

    async def resolve_client_id(self, principal: Principal) -> Optional[UUID]:
        return (await self.resolve(principal)).client_id
