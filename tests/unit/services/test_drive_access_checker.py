import httpx
import pytest

from portal.adapter.services.drive_access import GoogleDriveAccessChecker

FILE_ID = "1AbCdEfGhIjKlMnOpQrStUvWxYz012345"


def _checker(handler, api_key: str = "") -> GoogleDriveAccessChecker:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleDriveAccessChecker(api_key=api_key, client=client)


@pytest.mark.asyncio
async def test_api_key_uses_drive_metadata_endpoint():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = request.url
        return httpx.Response(200, json={"capabilities": {"canDownload": True}})

    result = await _checker(handler, api_key="g-key").check(FILE_ID)

    assert result.is_ok()
    assert seen["method"] == "GET"
    assert seen["url"].path == f"/drive/v3/files/{FILE_ID}"
    assert seen["url"].params["key"] == "g-key"
    assert seen["url"].params["fields"] == "capabilities"


@pytest.mark.asyncio
async def test_private_file_redirects_to_sign_in():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "HEAD"
        return httpx.Response(
            302, headers={"Location": "https://accounts.google.com/ServiceLogin"}
        )

    result = await _checker(handler).check(FILE_ID)

    assert result.error.code == "DRIVE_LINK_NOT_ACCESSIBLE"
    assert result.error.message == "Drive file is not publicly accessible"


@pytest.mark.asyncio
async def test_shared_file_is_accessible_without_key():
    result = await _checker(lambda request: httpx.Response(200)).check(FILE_ID)

    assert result.is_ok()


@pytest.mark.asyncio
async def test_unreachable_drive_is_reported():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route", request=request)

    result = await _checker(handler).check(FILE_ID)

    assert result.error.code == "DRIVE_CHECK_FAILED"
