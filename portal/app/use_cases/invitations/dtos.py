"""
Invitation Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from portal.app.use_cases.auth.dtos import SignInResponse

DEFAULT_CLIENT_NAME = "Your Company"


class TokenVerification(BaseModel):
    """Result of checking a setup token; never says why a token is invalid"""

    is_valid: bool
    client_id: Optional[str] = None
    email: Optional[str] = None
    client_name: Optional[str] = None
    expires_at: Optional[datetime] = None


class RedeemInvitationResponse(SignInResponse):
    client_id: str
    account_created: bool


class InvitationInfo(BaseModel):
    id: str
    email: str
    status: str
    created_at: datetime
    expires_at: datetime
    accepted_at: Optional[datetime] = None


class ListInvitationsResponse(BaseModel):
    client_id: str
    invitations: List[InvitationInfo]


class ResendInvitationResponse(BaseModel):
    invitation_id: str
    email: str
    expires_at: datetime
    dispatch_status: str
    expired_previous: int
    warnings: List[str] = []
