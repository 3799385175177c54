"""
Authentication Use Cases

Sign-up, sign-in, session lifecycle and principal management.
"""

from .assign_role_use_case import AssignRoleUseCase
from .create_principal_use_case import CreatePrincipalUseCase
from .dtos import (
    AssignRoleResponse,
    CreatePrincipalResponse,
    IdentityInfo,
    PrincipalInfo,
    RefreshSessionResponse,
    SessionInfo,
    SignInResponse,
    SignOutResponse,
    SignUpResponse,
    UpdatePrincipalResponse,
)
from .load_session_use_case import LoadSessionUseCase
from .refresh_session_use_case import RefreshSessionUseCase
from .sign_in_use_case import SignInUseCase
from .sign_out_use_case import SignOutUseCase
from .sign_up_use_case import SignUpUseCase
from .update_principal_use_case import UpdatePrincipalUseCase

__all__ = [
    "SignUpUseCase",
    "SignInUseCase",
    "SignOutUseCase",
    "RefreshSessionUseCase",
    "LoadSessionUseCase",
    "UpdatePrincipalUseCase",
    "CreatePrincipalUseCase",
    "AssignRoleUseCase",
    "SignUpResponse",
    "SignInResponse",
    "SignOutResponse",
    "RefreshSessionResponse",
    "SessionInfo",
    "UpdatePrincipalResponse",
    "CreatePrincipalResponse",
    "AssignRoleResponse",
    "IdentityInfo",
    "PrincipalInfo",
]
