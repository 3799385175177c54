import logging
from typing import Optional

import httpx

from portal.app.services.drive_access import DriveAccessChecker
from portal.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

DRIVE_API_URL = "https://www.googleapis.com/drive/v3/files/{file_id}"
DRIVE_VIEW_URL = "https://drive.google.com/file/d/{file_id}/view"

NOT_ACCESSIBLE = Error("DRIVE_LINK_NOT_ACCESSIBLE", "Drive file is not publicly accessible")


class GoogleDriveAccessChecker(DriveAccessChecker):
    """
    Asks Google whether a Drive file is readable anonymously.

    With an API key the Drive v3 metadata endpoint answers directly. Without
    one, a HEAD of the public view page is used: shared files answer 200,
    private ones redirect to the Google sign-in page.
    """

    def __init__(
        self,
        api_key: str = "",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    async def check(self, file_id: str) -> Result[None]:
        try:
            if self._client is not None:
                response = await self._request(self._client, file_id)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._request(client, file_id)
        except httpx.HTTPError as exc:
            logger.warning(f"Drive access check for {file_id} failed: {exc}")
            return Return.err(
                Error("DRIVE_CHECK_FAILED", "Could not reach Google Drive", reason=str(exc))
            )

        if response.status_code == 200:
            return Return.ok(None)

        logger.info(f"Drive file {file_id} is not public ({response.status_code})")
        return Return.err(NOT_ACCESSIBLE)

    async def _request(self, client: httpx.AsyncClient, file_id: str) -> httpx.Response:
        if self.api_key:
            return await client.get(
                DRIVE_API_URL.format(file_id=file_id),
                params={"fields": "capabilities", "key": self.api_key},
                timeout=self.timeout,
            )
        return await client.head(
            DRIVE_VIEW_URL.format(file_id=file_id),
            follow_redirects=False,
            timeout=self.timeout,
        )
