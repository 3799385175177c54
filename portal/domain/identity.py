"""
Identity value objects.

A Principal is the authenticated user as seen by role resolution. An
AuthSession is built once per request and passed explicitly to whatever
needs it; nothing keeps session state in module globals.
"""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .entities import Role, User


class Principal(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: str
    # Set once the principal has proven it owns the address
    email_confirmed: bool = False
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            id=user.id,
            email=user.email,
            email_confirmed=bool(user.email_confirmed),
            user_metadata=dict(user.user_metadata or {}),
        )


class ResolvedIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    client_id: Optional[UUID] = None
    # Which step of the resolution chain produced the role
    source: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.admin

    @property
    def is_client(self) -> bool:
        return self.role == Role.client


class AuthSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    principal: Principal
    session_id: UUID
    identity: ResolvedIdentity

    @property
    def role(self) -> Role:
        return self.identity.role

    @property
    def client_id(self) -> Optional[UUID]:
        return self.identity.client_id

    def can_access_client(self, client_id: UUID) -> bool:
        """Admins see every client; a client principal only its own record."""
        if self.identity.is_admin:
            return True
        return self.identity.is_client and self.identity.client_id == client_id
