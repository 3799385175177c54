"""
Upload Logo Use Case

Stores a widget logo in object storage and points the widget settings at it.
"""

import logging
import time
from typing import Optional, Protocol
from uuid import UUID

from portal.app.services.activity_recorder import ActivityRecorder
from portal.app.services.client_access import load_accessible_client
from portal.app.services.object_storage import ObjectStorage
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import LogoUploaded
from portal.domain.base import utcnow
from portal.domain.identity import AuthSession
from portal.domain.widget_settings import parse_widget_settings
from portal.libs.result import Error, Result, Return

from .dtos import LogoUploadResponse

logger = logging.getLogger(__name__)

LOGO_BUCKET = "widget-logos"
MAX_LOGO_BYTES = 2 * 1024 * 1024
READ_CHUNK_BYTES = 64 * 1024

# The stored extension always comes from the validated content type
CONTENT_TYPE_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}


class UploadSource(Protocol):
    """Anything readable in chunks, e.g. fastapi.UploadFile"""

    async def read(self, size: int = -1) -> bytes: ...


async def read_limited(source: UploadSource, limit: int) -> Optional[bytes]:
    """Read source in chunks; None as soon as it grows past limit bytes."""
    chunks = []
    total = 0
    while True:
        chunk = await source.read(READ_CHUNK_BYTES)
        if not chunk:
            return b"".join(chunks)
        total += len(chunk)
        if total > limit:
            return None
        chunks.append(chunk)


class UploadLogoUseCase:
    """
    Use case for uploading a widget logo.

    Business Rules:
    - png, jpeg, gif, webp or svg by content type, at most 2 MB
    - The size limit is enforced while reading; larger uploads are never
      held in memory in full
    - Stored in the widget-logos bucket as {client_id}_{timestamp}.{ext},
      ext derived from the content type only
    - The public URL and storage path are written into the widget settings
    """

    def __init__(self, uow: UnitOfWork, storage: ObjectStorage):
        self.uow = uow
        self.storage = storage

    async def execute(
        self,
        auth_session: AuthSession,
        client_id: UUID,
        content_type: str,
        source: UploadSource,
    ) -> Result[LogoUploadResponse]:
        content_type = (content_type or "").split(";")[0].strip().lower()
        ext = CONTENT_TYPE_EXTENSIONS.get(content_type)
        if ext is None:
            return Return.err(
                Error("INVALID_FILE_TYPE", "Logo must be a PNG, JPEG, GIF, WebP or SVG image")
            )

        data = await read_limited(source, MAX_LOGO_BYTES)
        if data is None:
            return Return.err(Error("FILE_TOO_LARGE", "Logo must be 2 MB or smaller"))
        if not data:
            return Return.err(Error("VALIDATION_ERROR", "Logo file is empty"))

        async with self.uow:
            result = await load_accessible_client(self.uow, auth_session, client_id)
            if result.is_err():
                return Return.err(result.error)
            client = result.value

            path = f"{client_id}_{int(time.time() * 1000)}.{ext}"
            upload = await self.storage.upload(LOGO_BUCKET, path, data, content_type)
            if upload.is_err():
                logger.error(f"Logo upload for client {client_id} failed: {upload.error.code}")
                return Return.err(Error("UPLOAD_FAILED", "Failed to upload logo"))

            logo_url = self.storage.get_public_url(LOGO_BUCKET, path)
            settings = parse_widget_settings(client.widget_settings)
            client.widget_settings = settings.model_copy(
                update={"logo_url": logo_url, "logo_storage_path": path}
            ).model_dump()
            client.updated_at = utcnow()
            await self.uow.clients.update(client)
            self.uow.publish_change("clients", {"id": str(client_id), "event": "logo_uploaded"})
            await self.uow.commit()

            await ActivityRecorder(self.uow).record(client_id, LogoUploaded(storage_path=path))
            return Return.ok(
                LogoUploadResponse(client_id=str(client_id), logo_url=logo_url, storage_path=path)
            )
