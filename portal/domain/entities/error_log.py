"""
ErrorLog Entity

Client-facing failures worth showing to an admin later.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class ErrorLog(SQLModel, table=True):
    """
    ErrorLog entity - a failure recorded against a client.

    Business Rules:
    - error_type names the failing check, e.g. "drive_link_access"
    - Written in its own commit so the failed action does not roll it back
    """

    __tablename__ = "error_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    client_id: Optional[UUID] = Field(default=None, foreign_key="clients.id")
    error_type: str = Field(max_length=100)
    message: str = Field(max_length=1000)
    status: str = Field(default="error", max_length=20)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_error_log_client_created", "client_id", "created_at"),)
