import logging
from typing import Optional

import httpx

from portal.app.services.email_sender import EmailSender
from portal.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendEmailSender(EmailSender):
    """Sends email through the Resend HTTP API"""

    def __init__(
        self,
        api_key: str,
        sender: str,
        timeout: float = 20.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout
        self._client = client

    async def send(self, to: str, subject: str, html: str) -> Result[str]:
        payload = {"from": self.sender, "to": [to], "subject": subject, "html": html}
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            if self._client is not None:
                response = await self._client.post(
                    RESEND_API_URL, json=payload, headers=headers, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(RESEND_API_URL, json=payload, headers=headers)
        except httpx.TimeoutException:
            logger.warning(f"Email to {to} timed out after {self.timeout}s")
            return Return.err(Error("EMAIL_TIMEOUT", "Email provider did not respond in time"))
        except httpx.HTTPError as exc:
            logger.warning(f"Email to {to} failed: {exc}")
            return Return.err(
                Error("EMAIL_SEND_FAILED", "Failed to send email", reason=str(exc))
            )

        if response.status_code >= 400:
            logger.warning(f"Email provider rejected message to {to}: {response.status_code}")
            return Return.err(
                Error(
                    "EMAIL_SEND_FAILED",
                    "Email provider rejected the message",
                    reason=response.text[:500],
                )
            )

        message_id = response.json().get("id", "")
        logger.info(f"Sent email to {to} ({message_id})")
        return Return.ok(message_id)


class LoggingEmailSender(EmailSender):
    """Development sender: logs the message instead of delivering it"""

    def __init__(self):
        self.outbox = []

    async def send(self, to: str, subject: str, html: str) -> Result[str]:
        self.outbox.append({"to": to, "subject": subject, "html": html})
        logger.info(f"Email to {to} not delivered (no provider configured): {subject}")
        return Return.ok(f"logged-{len(self.outbox)}")
