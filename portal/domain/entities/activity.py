"""
ClientActivity Entity

Append-only activity feed per client.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from ..base import utcnow
from .enums import ActivityType


class ClientActivity(SQLModel, table=True):
    """
    ClientActivity entity - one entry of the activity feed.

    Business Rules:
    - Never updated
    - metadata is produced from a typed activity event, never free-form
    - Writing an activity is best-effort; failures do not undo the action
    """

    __tablename__ = "client_activities"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    client_id: Optional[UUID] = Field(default=None, foreign_key="clients.id")
    activity_type: ActivityType = Field(nullable=False)
    description: str = Field(max_length=500)
    event_metadata: dict = Field(default_factory=dict, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_activity_client_created", "client_id", "created_at"),
        Index("idx_activity_type_created", "activity_type", "created_at"),
    )
