"""
MfaFactor Entity

TOTP second factors of a principal.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import MfaFactorStatus


class MfaFactor(SQLModel, table=True):
    """
    MfaFactor entity - one TOTP authenticator enrolled by a user.

    Business Rules:
    - secret is the base32 TOTP seed shared with the authenticator app
    - A factor starts unverified and becomes verified with its first valid code
    - At most one unverified factor per user; enrolling again replaces it
    - Sign-in requires a code once the user has a verified factor
    """

    __tablename__ = "mfa_factors"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    friendly_name: str = Field(max_length=100)
    secret: str = Field(max_length=64)
    status: MfaFactorStatus = Field(default=MfaFactorStatus.unverified)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    verified_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_mfa_factor_user_status", "user_id", "status"),)
