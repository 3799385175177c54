import logging
import os

import anyio

from portal.app.services.object_storage import ObjectStorage
from portal.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class LocalObjectStorage(ObjectStorage):
    """Stores objects on the local filesystem under root/bucket/path"""

    def __init__(self, root: str, public_url: str):
        self.root = root
        self.public_url = public_url.rstrip("/")

    def _resolve(self, bucket: str, path: str) -> str:
        base = os.path.abspath(os.path.join(self.root, bucket))
        target = os.path.abspath(os.path.join(base, path))
        if os.path.commonpath([base, target]) != base:
            raise ValueError(f"Path escapes bucket: {path}")
        return target

    async def upload(
        self, bucket: str, path: str, data: bytes, content_type: str
    ) -> Result[str]:
        try:
            target = self._resolve(bucket, path)
        except ValueError as exc:
            return Return.err(Error("INVALID_PATH", "Invalid storage path", reason=str(exc)))

        try:
            await anyio.Path(os.path.dirname(target)).mkdir(parents=True, exist_ok=True)
            await anyio.Path(target).write_bytes(data)
        except OSError as exc:
            logger.error(f"Upload to {bucket}/{path} failed: {exc}")
            return Return.err(
                Error("STORAGE_ERROR", "Failed to store the file", reason=str(exc))
            )

        logger.info(f"Stored {len(data)} bytes ({content_type}) at {bucket}/{path}")
        return Return.ok(path)

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self.public_url}/{bucket}/{path}"
