"""
RecoveryToken Entity

Time-limited grants to undo a scheduled client deletion.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class RecoveryToken(SQLModel, table=True):
    """
    RecoveryToken entity - undo grant for a soft-deleted client.

    Business Rules:
    - Expires after 30 days (configurable)
    - Single-use: used_at is set through a conditional update
    """

    __tablename__ = "client_recovery_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    client_id: UUID = Field(foreign_key="clients.id", nullable=False, index=True)
    token: str = Field(unique=True, index=True, max_length=64)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_recovery_expires_at", "expires_at"),)

    def is_redeemable(self, now: datetime) -> bool:
        return self.used_at is None and now <= self.expires_at
