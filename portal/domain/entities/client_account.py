"""
ClientAccount Entity

A tenant of the chatbot platform.
"""

import re
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from ..base import utcnow
from .enums import ClientStatus


class ClientAccount(SQLModel, table=True):
    """
    ClientAccount entity - one chatbot customer.

    Business Rules:
    - agent_name is stored sanitized ([a-z0-9_] only) and is never used
      as a table or column identifier
    - widget_settings is always written from a validated WidgetSettings
    - Never hard-deleted synchronously: deleted_at marks the soft delete,
      deletion_scheduled_at is when the purge becomes due
    - Soft-deleted clients are excluded from client counts
    """

    __tablename__ = "clients"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    client_name: str = Field(max_length=255)
    email: str = Field(max_length=255, index=True)
    agent_name: str = Field(max_length=255)
    company: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None)

    widget_settings: dict = Field(default_factory=dict, sa_column=Column(JSON))

    status: ClientStatus = Field(default=ClientStatus.active)

    # Soft delete support
    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    deletion_scheduled_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    last_active: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_client_status", "status"),
        Index("idx_client_deletion_scheduled_at", "deletion_scheduled_at"),
    )

    @property
    def is_scheduled_for_deletion(self) -> bool:
        return self.deletion_scheduled_at is not None


def sanitize_agent_name(agent_name: str) -> str:
    """Lower-case, every character outside [a-z0-9] replaced with '_'."""
    return re.sub(r"[^a-z0-9]", "_", agent_name.strip().lower())
