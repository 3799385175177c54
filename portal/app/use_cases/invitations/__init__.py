"""
Invitation Use Cases

Setup token verification, redemption and reissue.
"""

from .dtos import (
    InvitationInfo,
    ListInvitationsResponse,
    RedeemInvitationResponse,
    ResendInvitationResponse,
    TokenVerification,
)
from .list_invitations_use_case import ListInvitationsUseCase
from .redeem_invitation_use_case import RedeemInvitationUseCase
from .resend_invitation_use_case import ResendInvitationUseCase
from .verify_invitation_use_case import VerifyInvitationUseCase

__all__ = [
    "VerifyInvitationUseCase",
    "RedeemInvitationUseCase",
    "ResendInvitationUseCase",
    "ListInvitationsUseCase",
    "TokenVerification",
    "RedeemInvitationResponse",
    "ResendInvitationResponse",
    "ListInvitationsResponse",
    "InvitationInfo",
]
