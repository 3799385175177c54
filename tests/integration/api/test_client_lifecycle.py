from datetime import timedelta
from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlmodel import select

from portal.domain.base import utcnow
from portal.domain.entities import ClientActivity, RecoveryToken
from tests.utils.http import admin_headers, bearer


async def _recovery_token_for(db_session, client_id: str) -> RecoveryToken:
    stmt = select(RecoveryToken).where(RecoveryToken.client_id == UUID(client_id))
    result = await db_session.exec(stmt)
    return result.first()


@pytest.mark.asyncio
async def test_soft_delete_excludes_client_from_counts(
    client: AsyncClient, acme, admin_token, outbox
):
    response = await client.get("/stats/overview", headers=bearer(admin_token))
    assert response.json()["total_clients"] == 1

    response = await client.delete(f"/clients/{acme['id']}", headers=bearer(admin_token))

    assert response.status_code == 200
    data = response.json()
    assert data["recovery_status"] == "sent"
    assert data["deletion_scheduled_at"] is not None
    assert "/recover?token=" in outbox.outbox[-1]["html"]

    response = await client.get("/stats/overview", headers=bearer(admin_token))
    assert response.json()["total_clients"] == 0

    response = await client.get("/clients", headers=bearer(admin_token))
    assert response.json()["total"] == 0

    response = await client.get(
        "/clients", params={"include_deleted": True}, headers=bearer(admin_token)
    )
    assert response.json()["total"] == 1

    # Admins still open the record, e.g. to show the recovery deadline
    response = await client.get(f"/clients/{acme['id']}", headers=bearer(admin_token))
    assert response.status_code == 200
    assert response.json()["deletion_scheduled_at"] == data["deletion_scheduled_at"]
    assert response.json()["status"] == "inactive"

    response = await client.delete(f"/clients/{acme['id']}", headers=bearer(admin_token))
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_SCHEDULED"


@pytest.mark.asyncio
async def test_recovery_link_restores_client_once(
    client: AsyncClient, acme, admin_token, db_session
):
    await client.delete(f"/clients/{acme['id']}", headers=bearer(admin_token))
    recovery_token = await _recovery_token_for(db_session, acme["id"])
    token = recovery_token.token

    response = await client.post("/recovery/redeem", json={"token": token})

    assert response.status_code == 200
    assert response.json() == {
        "client_id": acme["id"],
        "client_name": "Acme Corp",
        "status": "active",
    }

    response = await client.get("/stats/overview", headers=bearer(admin_token))
    assert response.json()["total_clients"] == 1

    response = await client.post("/recovery/redeem", json={"token": token})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Invalid or expired recovery link"

    result = await db_session.exec(
        select(ClientActivity).where(ClientActivity.client_id == UUID(acme["id"]))
    )
    kinds = {activity.activity_type.value for activity in result.all()}
    assert {"client_created", "client_deleted", "client_recovered"} <= kinds


@pytest.mark.asyncio
async def test_expired_recovery_link_is_rejected(
    client: AsyncClient, acme, admin_token, db_session
):
    await client.delete(f"/clients/{acme['id']}", headers=bearer(admin_token))
    recovery_token = await _recovery_token_for(db_session, acme["id"])
    token = recovery_token.token
    recovery_token.expires_at = utcnow() - timedelta(seconds=1)
    db_session.add(recovery_token)
    await db_session.commit()

    response = await client.post("/recovery/redeem", json={"token": token})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"

    response = await client.get(
        "/clients", params={"include_deleted": True}, headers=bearer(admin_token)
    )
    assert response.json()["clients"][0]["deleted_at"] is not None


@pytest.mark.asyncio
async def test_purge_removes_clients_past_their_window(
    client: AsyncClient, acme, admin_token, db_session
):
    from portal.domain.entities import ClientAccount

    await client.delete(f"/clients/{acme['id']}", headers=bearer(admin_token))
    result = await db_session.exec(
        select(ClientAccount).where(ClientAccount.id == UUID(acme["id"]))
    )
    account = result.one()
    account.deletion_scheduled_at = utcnow() - timedelta(minutes=1)
    db_session.add(account)
    await db_session.commit()

    response = await client.post("/admin/clients/purge-due", headers=admin_headers())

    assert response.status_code == 200
    assert response.json()["count"] == 1

    response = await client.get(
        "/clients", params={"include_deleted": True}, headers=bearer(admin_token)
    )
    assert response.json()["total"] == 0


@pytest.mark.asyncio
async def test_create_client_rejects_duplicate_email(client: AsyncClient, acme, admin_token):
    response = await client.post(
        "/clients",
        json={"client_name": "Acme Again", "email": "OWNER@acme.com", "agent_name": "bot"},
        headers=bearer(admin_token),
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CLIENT_EMAIL_EXISTS"


@pytest.mark.asyncio
async def test_agent_name_is_sanitized(client: AsyncClient, acme):
    assert acme["agent_name"] == "acme_bot"
    assert acme["widget_settings"]["agent_name"] == "Acme Bot"
