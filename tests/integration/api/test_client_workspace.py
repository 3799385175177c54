from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlmodel import select

from portal.domain.entities import ErrorLog
from tests.utils.http import admin_headers, bearer

DRIVE_FILE = "https://drive.google.com/file/d/1AbCdEfGhIjKlMnOpQrStUvWxYz012345/view"


@pytest.mark.asyncio
async def test_widget_settings_round_trip(client: AsyncClient, acme, admin_token):
    url = f"/clients/{acme['id']}/widget-settings"

    response = await client.get(url, headers=bearer(admin_token))
    assert response.status_code == 200
    assert response.json()["settings"]["position"] == "right"

    response = await client.patch(
        url,
        json={"chat_color": "#123ABC", "welcome_text": "Hello from Acme"},
        headers=bearer(admin_token),
    )
    assert response.status_code == 200
    data = response.json()
    assert sorted(data["changed_fields"]) == ["chat_color", "welcome_text"]
    assert data["settings"]["chat_color"] == "#123abc"

    response = await client.patch(url, json={"text_color": "blue"}, headers=bearer(admin_token))
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_logo_upload(client: AsyncClient, acme, admin_token, tmp_path):
    url = f"/clients/{acme['id']}/logo"

    response = await client.post(
        url,
        files={"file": ("logo.png", b"\x89PNG\r\n\x1a\nfake", "image/png")},
        headers=bearer(admin_token),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["logo_url"].startswith("http://test/storage/widget-logos/")
    assert (tmp_path / "widget-logos" / data["storage_path"]).exists()

    response = await client.post(
        url,
        files={"file": ("notes.txt", b"plain text", "text/plain")},
        headers=bearer(admin_token),
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_FILE_TYPE"


@pytest.mark.asyncio
async def test_logo_file_name_never_picks_the_stored_format(
    client: AsyncClient, acme, admin_token
):
    response = await client.post(
        f"/clients/{acme['id']}/logo",
        files={"file": ("evil.svg", b"<svg onload='alert(1)'/>", "image/png")},
        headers=bearer(admin_token),
    )

    assert response.status_code == 201
    assert response.json()["storage_path"].endswith(".png")


@pytest.mark.asyncio
async def test_oversized_logo_is_rejected(client: AsyncClient, acme, admin_token, tmp_path):
    response = await client.post(
        f"/clients/{acme['id']}/logo",
        files={"file": ("big.png", b"0" * (2 * 1024 * 1024 + 1), "image/png")},
        headers=bearer(admin_token),
    )

    assert response.status_code == 413
    assert response.json()["error"]["code"] == "FILE_TOO_LARGE"
    assert not (tmp_path / "widget-logos").exists()


@pytest.mark.asyncio
async def test_content_sources(client: AsyncClient, acme, admin_token):
    base = f"/clients/{acme['id']}"

    response = await client.post(
        f"{base}/website-urls",
        json={"url": "https://acme.com/faq", "refresh_rate": 12},
        headers=bearer(admin_token),
    )
    assert response.status_code == 201
    url_id = response.json()["id"]

    response = await client.post(
        f"{base}/website-urls", json={"url": "acme.com"}, headers=bearer(admin_token)
    )
    assert response.status_code == 400

    response = await client.post(
        f"{base}/drive-links", json={"link": DRIVE_FILE}, headers=bearer(admin_token)
    )
    assert response.status_code == 201

    response = await client.post(
        f"{base}/drive-links",
        json={"link": "https://dropbox.com/s/abc"},
        headers=bearer(admin_token),
    )
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Please enter a valid Google Drive link"

    response = await client.get(f"{base}/sources", headers=bearer(admin_token))
    data = response.json()
    assert [u["url"] for u in data["website_urls"]] == ["https://acme.com/faq"]
    assert [d["link"] for d in data["drive_links"]] == [DRIVE_FILE]

    response = await client.delete(f"{base}/website-urls/{url_id}", headers=bearer(admin_token))
    assert response.status_code == 200
    response = await client.delete(f"{base}/website-urls/{url_id}", headers=bearer(admin_token))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_interactions_feed_dashboard_and_stats(client: AsyncClient, acme, admin_token):
    for query in ("Pricing?", "pricing?", "Opening hours"):
        response = await client.post(
            "/admin/interactions",
            json={"client_id": acme["id"], "query_text": query, "response_time_ms": 120},
            headers=admin_headers(),
        )
        assert response.status_code == 201

    response = await client.get(
        f"/clients/{acme['id']}/dashboard", headers=bearer(admin_token)
    )
    data = response.json()
    assert data["total_interactions"] == 3
    assert data["top_queries"][0] == {"query": "pricing?", "count": 2}
    assert data["average_response_time_ms"] == 120.0

    response = await client.get("/stats/overview", headers=bearer(admin_token))
    assert response.json()["active_clients"] == 1
    assert response.json()["active_clients_change"] == 100.0

    response = await client.get(
        f"/clients/{acme['id']}/activity", params={"limit": 10}, headers=bearer(admin_token)
    )
    assert response.status_code == 200
    types = [item["activity_type"] for item in response.json()["activities"]]
    assert types.count("chat_interaction") == 3
    assert "client_created" in types

    response = await client.get("/activity/recent", headers=bearer(admin_token))
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_interaction_for_unknown_client(client: AsyncClient):
    response = await client.post(
        "/admin/interactions",
        json={"client_id": "00000000-0000-0000-0000-000000000000", "query_text": "hi"},
        headers=admin_headers(),
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_private_drive_file_is_refused_and_logged(
    client: AsyncClient, acme, admin_token, drive_access, db_session
):
    drive_access.private_ids.add("1AbCdEfGhIjKlMnOpQrStUvWxYz012345")
    base = f"/clients/{acme['id']}"

    response = await client.post(
        f"{base}/drive-links", json={"link": DRIVE_FILE}, headers=bearer(admin_token)
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "DRIVE_LINK_NOT_ACCESSIBLE"

    response = await client.get(f"{base}/sources", headers=bearer(admin_token))
    assert response.json()["drive_links"] == []

    result = await db_session.exec(
        select(ErrorLog).where(ErrorLog.client_id == UUID(acme["id"]))
    )
    logs = result.all()
    assert [(log.error_type, log.message) for log in logs] == [
        ("drive_link_access", "Drive file is not publicly accessible")
    ]
