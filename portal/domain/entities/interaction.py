"""
Interaction Entity

Chat interactions of every client's widget, in one table keyed by client_id.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class Interaction(SQLModel, table=True):
    __tablename__ = "interactions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    client_id: UUID = Field(foreign_key="clients.id", nullable=False)
    query_text: str = Field(max_length=2000)
    response_time_ms: Optional[int] = Field(default=None)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_interaction_client_created", "client_id", "created_at"),
    )
