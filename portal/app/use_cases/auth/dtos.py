"""
Authentication Use Case DTOs (Data Transfer Objects)

All Response classes for the auth domain.
"""

from typing import Optional

from pydantic import BaseModel

from portal.domain.identity import AuthSession, ResolvedIdentity


# ============================================================================
# Shared pieces
# ============================================================================


class PrincipalInfo(BaseModel):
    """Principal information in authentication responses"""

    id: str
    email: str
    full_name: Optional[str] = None


class IdentityInfo(BaseModel):
    """Resolved role of a principal"""

    role: str
    client_id: Optional[str] = None

    @classmethod
    def from_identity(cls, identity: ResolvedIdentity) -> "IdentityInfo":
        return cls(
            role=identity.role.value,
            client_id=str(identity.client_id) if identity.client_id else None,
        )


# ============================================================================
# Response DTOs
# ============================================================================


class SignUpResponse(BaseModel):
    """Response for sign-up use case"""

    user_id: str
    email: str
    identity: IdentityInfo


class SignInResponse(BaseModel):
    """Response for sign-in, and for any flow that ends signed in"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    session_id: str
    user: PrincipalInfo
    identity: IdentityInfo
    redirect_to: str


class RefreshSessionResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    session_id: str


class SignOutResponse(BaseModel):
    status: str


class SessionInfo(BaseModel):
    """Current session: principal plus resolved role and client binding"""

    session_id: str
    user: PrincipalInfo
    identity: IdentityInfo
    home: str

    @classmethod
    def from_auth_session(cls, auth_session: AuthSession, home: str) -> "SessionInfo":
        principal = auth_session.principal
        return cls(
            session_id=str(auth_session.session_id),
            user=PrincipalInfo(
                id=str(principal.id),
                email=principal.email,
                full_name=principal.user_metadata.get("full_name"),
            ),
            identity=IdentityInfo.from_identity(auth_session.identity),
            home=home,
        )


class UpdatePrincipalResponse(BaseModel):
    user: PrincipalInfo
    password_changed: bool
    revoked_sessions: int = 0


class CreatePrincipalResponse(BaseModel):
    user_id: str
    email: str
    email_confirmed: bool
    identity: IdentityInfo


class AssignRoleResponse(BaseModel):
    user_id: str
    identity: IdentityInfo
