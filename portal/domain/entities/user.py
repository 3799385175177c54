"""
User Entity

The authenticated principal. Profile data lives in user_metadata.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from ..base import utcnow
from .enums import UserStatus


class User(SQLModel, table=True):
    """
    User entity - a principal that can sign in to the portal.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash (cost factor 12)
    - user_metadata carries profile data (full_name, and for client
      principals role="client" and client_id)
    - Role is never read from the access token; it is resolved per request
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    user_metadata: dict = Field(default_factory=dict, sa_column=Column(JSON))

    status: UserStatus = Field(default=UserStatus.active)
    email_confirmed: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_sign_in_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_user_status", "status"),)
