from datetime import timedelta
from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlmodel import select

from portal.domain.base import utcnow
from portal.domain.entities import Invitation, User, UserRole
from tests.utils.http import bearer

CLIENT_PASSWORD = "ClientPass123!"


async def _invitation_for(db_session, client_id: str) -> Invitation:
    stmt = (
        select(Invitation)
        .where(Invitation.client_id == UUID(client_id))
        .order_by(Invitation.created_at.desc())
    )
    result = await db_session.exec(stmt)
    return result.first()


@pytest.mark.asyncio
async def test_setup_link_is_emailed_and_verifies(client: AsyncClient, acme, outbox, db_session):
    """Creating a client emails a setup link that verifies until it is used"""
    assert len(outbox.outbox) == 1
    email = outbox.outbox[0]
    assert email["to"] == "owner@acme.com"

    invitation = await _invitation_for(db_session, acme["id"])
    assert f"/setup?token={invitation.token}" in email["html"]

    response = await client.get("/invitations/verify", params={"token": invitation.token})

    assert response.status_code == 200
    data = response.json()
    assert data["is_valid"] is True
    assert data["client_id"] == acme["id"]
    assert data["email"] == "owner@acme.com"
    assert data["client_name"] == "Acme Corp"


@pytest.mark.asyncio
async def test_redeem_provisions_client_and_repeat_click_signs_in(
    client: AsyncClient, acme, db_session
):
    invitation = await _invitation_for(db_session, acme["id"])
    token = invitation.token

    response = await client.post(
        "/invitations/redeem", json={"token": token, "password": CLIENT_PASSWORD}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["account_created"] is True
    assert data["identity"] == {"role": "client", "client_id": acme["id"]}
    assert data["redirect_to"] == "/client/view"

    result = await db_session.exec(select(User).where(User.email == "owner@acme.com"))
    user = result.one()
    result = await db_session.exec(select(UserRole).where(UserRole.user_id == user.id))
    assert str(result.one().client_id) == acme["id"]

    # Same link, same password: signed in again, nothing provisioned
    response = await client.post(
        "/invitations/redeem", json={"token": token, "password": CLIENT_PASSWORD}
    )
    assert response.status_code == 200
    assert response.json()["account_created"] is False

    result = await db_session.exec(select(User).where(User.email == "owner@acme.com"))
    assert len(result.all()) == 1

    # The link no longer verifies
    response = await client.get("/invitations/verify", params={"token": token})
    assert response.json()["is_valid"] is False

    # And a different password on the used link gets the generic answer
    response = await client.post(
        "/invitations/redeem", json={"token": token, "password": "SomeoneElse123!"}
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_expired_link_is_invalid(client: AsyncClient, acme, db_session):
    invitation = await _invitation_for(db_session, acme["id"])
    token = invitation.token
    invitation.expires_at = utcnow() - timedelta(minutes=1)
    db_session.add(invitation)
    await db_session.commit()

    response = await client.get("/invitations/verify", params={"token": token})
    assert response.json() == {
        "is_valid": False,
        "client_id": None,
        "email": None,
        "client_name": None,
        "expires_at": None,
    }

    response = await client.post(
        "/invitations/redeem", json={"token": token, "password": CLIENT_PASSWORD}
    )
    assert response.status_code == 400
    assert response.json()["error"] == {
        "code": "INVALID_TOKEN",
        "message": "Invalid or expired invitation link",
    }


@pytest.mark.asyncio
async def test_unknown_token_and_missing_token(client: AsyncClient):
    response = await client.get("/invitations/verify", params={"token": "no-such-token"})
    assert response.status_code == 200
    assert response.json()["is_valid"] is False

    response = await client.get("/invitations/verify")
    assert response.status_code == 200
    assert response.json()["is_valid"] is False


@pytest.mark.asyncio
async def test_resend_expires_previous_link(
    client: AsyncClient, acme, admin_token, db_session, outbox
):
    first = await _invitation_for(db_session, acme["id"])
    first_token = first.token

    response = await client.post(
        f"/clients/{acme['id']}/invitations/resend", headers=bearer(admin_token)
    )

    assert response.status_code == 200
    assert response.json()["dispatch_status"] == "sent"
    assert len(outbox.outbox) == 2

    response = await client.get("/invitations/verify", params={"token": first_token})
    assert response.json()["is_valid"] is False


@pytest.mark.asyncio
async def test_bound_client_sees_only_its_own_views(client: AsyncClient, acme, db_session):
    invitation = await _invitation_for(db_session, acme["id"])
    response = await client.post(
        "/invitations/redeem", json={"token": invitation.token, "password": CLIENT_PASSWORD}
    )
    client_token = response.json()["access_token"]

    response = await client.get(f"/clients/{acme['id']}", headers=bearer(client_token))
    assert response.status_code == 200
    assert response.json()["client_name"] == "Acme Corp"

    response = await client.get("/clients", headers=bearer(client_token))
    assert response.status_code == 403
    assert response.json()["error"]["redirect_to"] == "/client/view"

    response = await client.get("/stats/overview", headers=bearer(client_token))
    assert response.status_code == 403

    response = await client.get("/auth/session", headers=bearer(client_token))
    assert response.status_code == 200
    assert response.json()["identity"]["role"] == "client"


@pytest.mark.asyncio
async def test_sign_up_with_client_email_gains_nothing(client: AsyncClient, acme, db_session):
    response = await client.post(
        "/auth/signup", json={"email": "owner@acme.com", "password": "Squatter123!"}
    )
    assert response.status_code == 201
    assert response.json()["identity"] == {"role": "none", "client_id": None}

    response = await client.post(
        "/auth/signin", json={"email": "owner@acme.com", "password": "Squatter123!"}
    )
    squatter = response.json()
    response = await client.get(f"/clients/{acme['id']}", headers=bearer(squatter["access_token"]))
    assert response.status_code == 403

    # The real owner's setup link still works and takes the address back
    invitation = await _invitation_for(db_session, acme["id"])
    response = await client.post(
        "/invitations/redeem", json={"token": invitation.token, "password": CLIENT_PASSWORD}
    )
    assert response.status_code == 200
    assert response.json()["identity"] == {"role": "client", "client_id": acme["id"]}

    response = await client.post(
        "/auth/signin", json={"email": "owner@acme.com", "password": "Squatter123!"}
    )
    assert response.status_code == 401

    response = await client.post(
        "/auth/refresh", json={"refresh_token": squatter["refresh_token"]}
    )
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "SESSION_REVOKED"
