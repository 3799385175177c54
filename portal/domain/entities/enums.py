"""
Portal Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserStatus(str, Enum):
    """Principal account status"""

    active = "active"
    disabled = "disabled"


class AppRole(str, Enum):
    """Role persisted in a user_roles record"""

    admin = "admin"
    client = "client"


class Role(str, Enum):
    """Resolved role of the acting principal"""

    admin = "admin"
    client = "client"
    none = "none"


class ClientStatus(str, Enum):
    """Client account lifecycle status"""

    active = "active"
    inactive = "inactive"


class InvitationStatus(str, Enum):
    """Stored invitation status; expiry is also derived from expires_at"""

    pending = "pending"
    accepted = "accepted"
    expired = "expired"


class ActivityType(str, Enum):
    """Kinds of client activity recorded in client_activities"""

    client_created = "client_created"
    client_updated = "client_updated"
    client_deleted = "client_deleted"
    client_recovered = "client_recovered"
    invitation_sent = "invitation_sent"
    invitation_accepted = "invitation_accepted"
    widget_settings_updated = "widget_settings_updated"
    logo_uploaded = "logo_uploaded"
    website_url_added = "website_url_added"
    url_deleted = "url_deleted"
    drive_link_added = "drive_link_added"
    drive_link_deleted = "drive_link_deleted"
    chat_interaction = "chat_interaction"


class MfaFactorStatus(str, Enum):
    """A TOTP factor counts only once a code from it has been verified"""

    unverified = "unverified"
    verified = "verified"
