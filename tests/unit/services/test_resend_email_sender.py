import json

import httpx
import pytest

from portal.adapter.services.email_sender import ResendEmailSender


def _sender(handler) -> ResendEmailSender:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ResendEmailSender(api_key="re_test", sender="Portal <portal@portal-mail.com>", client=client)


@pytest.mark.asyncio
async def test_send_posts_message():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "msg_1"})

    result = await _sender(handler).send("a@example.com", "Hello", "<p>Hi</p>")

    assert result.is_ok()
    assert result.value == "msg_1"
    assert seen["auth"] == "Bearer re_test"
    assert seen["body"]["to"] == ["a@example.com"]
    assert seen["body"]["from"] == "Portal <portal@portal-mail.com>"


@pytest.mark.asyncio
async def test_provider_rejection():
    result = await _sender(lambda request: httpx.Response(422, text="bad sender")).send(
        "a@example.com", "Hello", "<p>Hi</p>"
    )

    assert result.is_err()
    assert result.error.code == "EMAIL_SEND_FAILED"


@pytest.mark.asyncio
async def test_timeout_is_reported():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    result = await _sender(handler).send("a@example.com", "Hello", "<p>Hi</p>")

    assert result.error.code == "EMAIL_TIMEOUT"
