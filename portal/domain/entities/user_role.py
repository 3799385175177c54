"""
UserRole Entity

Persisted role record, consulted when profile data carries no role.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow
from .enums import AppRole


class UserRole(SQLModel, table=True):
    """
    UserRole entity - explicit role assignment for a principal.

    Business Rules:
    - At most one record per user
    - client_id is required for role=client, empty for role=admin
    """

    __tablename__ = "user_roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", unique=True, index=True)
    role: AppRole = Field(nullable=False)
    client_id: Optional[UUID] = Field(default=None, index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
