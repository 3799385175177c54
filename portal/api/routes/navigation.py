"""
Navigation API Routes

Lets the front end ask the route gate about a view before rendering it.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from portal.app.services.route_gate import GateDecision, GateState, gate_for_path
from portal.depends import get_optional_auth_session
from portal.domain.identity import AuthSession

router = APIRouter(prefix="/navigation", tags=["Navigation"])


class GateResponse(BaseModel):
    path: str
    state: GateState
    redirect_to: Optional[str] = None
    from_path: Optional[str] = None
    role: Optional[str] = None
    render_content: bool


@router.get("/gate", status_code=status.HTTP_200_OK, response_model=GateResponse)
async def evaluate_gate(
    path: str = Query(..., description="View path, e.g. /clients/123"),
    auth_session: Optional[AuthSession] = Depends(get_optional_auth_session),
):
    """
    Evaluate Route Gate

    Public views are always permitted. Without a bearer token, protected
    views redirect to sign-in with the path preserved in `from`; a role that
    may not see the view is sent to its home view.
    """
    gate = gate_for_path(path)
    if gate is None:
        decision = GateDecision(state=GateState.permitted)
    else:
        decision = gate.evaluate(path, auth_session)

    return GateResponse(
        **decision.model_dump(),
        path=path,
        role=auth_session.role.value if auth_session else None,
        render_content=decision.render_content,
    )
