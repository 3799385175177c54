"""
Route gating.

A view declares the roles it permits. The gate moves a request through
unauthenticated -> resolving -> {permitted, redirected}; content is only
rendered once the decision is `permitted`.
"""

import re
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Tuple
from urllib.parse import urlencode

from pydantic import BaseModel

from portal.domain.entities import Role
from portal.domain.identity import AuthSession

SIGN_IN_PATH = "/auth"

ROLE_HOME = {
    Role.admin: "/",
    Role.client: "/client/view",
    Role.none: SIGN_IN_PATH,
}


class GateState(str, Enum):
    unauthenticated = "unauthenticated"
    resolving = "resolving"
    permitted = "permitted"
    redirected = "redirected"


class GateDecision(BaseModel):
    state: GateState
    redirect_to: Optional[str] = None
    # Originally requested location, kept for the post sign-in redirect
    from_path: Optional[str] = None

    @property
    def render_content(self) -> bool:
        return self.state == GateState.permitted


def sign_in_location(requested_path: str) -> str:
    if not requested_path or requested_path == SIGN_IN_PATH:
        return SIGN_IN_PATH
    return f"{SIGN_IN_PATH}?{urlencode({'from': requested_path})}"


class RouteGate:
    def __init__(self, allowed_roles: Iterable[Role]):
        self.allowed_roles: FrozenSet[Role] = frozenset(allowed_roles)

    def permits(self, role: Role) -> bool:
        return role in self.allowed_roles

    def evaluate(
        self,
        requested_path: str,
        session: Optional[AuthSession],
        resolving: bool = False,
    ) -> GateDecision:
        if resolving:
            return GateDecision(state=GateState.resolving)
        if session is None:
            return GateDecision(
                state=GateState.unauthenticated,
                redirect_to=sign_in_location(requested_path),
                from_path=requested_path,
            )
        if self.permits(session.role):
            return GateDecision(state=GateState.permitted)
        return GateDecision(
            state=GateState.redirected,
            redirect_to=ROLE_HOME[session.role],
            from_path=requested_path,
        )


ADMIN_ONLY = RouteGate({Role.admin})
CLIENT_ONLY = RouteGate({Role.client})
ADMIN_OR_CLIENT = RouteGate({Role.admin, Role.client})

PUBLIC_PATHS = ("/auth", "/setup", "/recover")

# Ordered; first pattern that matches the path wins
VIEW_ACCESS: List[Tuple[re.Pattern, RouteGate]] = [
    (re.compile(r"^/client(/.*)?$"), CLIENT_ONLY),
    (re.compile(r"^/clients(/.*)?$"), ADMIN_ONLY),
    (re.compile(r"^/settings(/.*)?$"), ADMIN_ONLY),
    (re.compile(r"^/$"), ADMIN_ONLY),
]


def gate_for_path(path: str) -> Optional[RouteGate]:
    """Gate protecting a view path; None for public views."""
    path = path.split("?", 1)[0] or "/"
    if path != "/" and path.endswith("/"):
        path = path.rstrip("/")
    if any(path == public or path.startswith(public + "/") for public in PUBLIC_PATHS):
        return None
    for pattern, gate in VIEW_ACCESS:
        if pattern.match(path):
            return gate
    # Unknown views are admin-only until they are listed
    return ADMIN_ONLY


def post_sign_in_location(session: AuthSession, requested: Optional[str]) -> str:
    """The preserved location if the resolved role may view it, else the role home."""
    if requested and requested.startswith("/") and not requested.startswith("//"):
        gate = gate_for_path(requested)
        if gate is not None and gate.permits(session.role):
            return requested
    return ROLE_HOME[session.role]
