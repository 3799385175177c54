"""
Invitation Entity

Pending account-setup grants for client principals.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import InvitationStatus


class Invitation(SQLModel, table=True):
    """
    Invitation entity - a single-use, time-limited setup token.

    Business Rules:
    - Token is an opaque capability (secrets.token_urlsafe)
    - Bound to exactly one client
    - Redeemable only while status=pending and now <= expires_at
    - Expired is derived at read time, whatever the stored status says
    - pending -> accepted happens through a conditional update only
    """

    __tablename__ = "client_invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    client_id: UUID = Field(foreign_key="clients.id", nullable=False, index=True)
    email: str = Field(max_length=255, nullable=False, index=True)

    token: str = Field(unique=True, index=True, max_length=64)

    status: InvitationStatus = Field(default=InvitationStatus.pending)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_expires_at", "expires_at"),
        Index("idx_invitation_status", "status"),
    )

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def is_redeemable(self, now: datetime) -> bool:
        return self.status == InvitationStatus.pending and not self.is_expired(now)

    def effective_status(self, now: datetime) -> InvitationStatus:
        if self.status == InvitationStatus.pending and self.is_expired(now):
            return InvitationStatus.expired
        return self.status
