"""
Portal Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ActivityType,
    AppRole,
    ClientStatus,
    InvitationStatus,
    MfaFactorStatus,
    Role,
    UserStatus,
)

# Export all entities
from .user import User
from .session import Session
from .user_role import UserRole
from .client_account import ClientAccount, sanitize_agent_name
from .invitation import Invitation
from .recovery_token import RecoveryToken
from .activity import ClientActivity
from .interaction import Interaction
from .content_source import DriveLink, WebsiteUrl
from .error_log import ErrorLog
from .mfa_factor import MfaFactor

__all__ = [
    # Enums
    "ActivityType",
    "AppRole",
    "ClientStatus",
    "InvitationStatus",
    "MfaFactorStatus",
    "Role",
    "UserStatus",
    # Entities
    "User",
    "Session",
    "UserRole",
    "ClientAccount",
    "Invitation",
    "RecoveryToken",
    "ClientActivity",
    "Interaction",
    "WebsiteUrl",
    "DriveLink",
    "ErrorLog",
    "MfaFactor",
    # Helpers
    "sanitize_agent_name",
]
