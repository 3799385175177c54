from abc import ABC, abstractmethod

from portal.libs.result import Result


class ObjectStorage(ABC):
    """Object storage port for uploaded files"""

    @abstractmethod
    async def upload(
        self, bucket: str, path: str, data: bytes, content_type: str
    ) -> Result[str]:
        """Store bytes under bucket/path; returns the storage path, or an Error"""
        pass

    @abstractmethod
    def get_public_url(self, bucket: str, path: str) -> str:
        """Public URL for an uploaded object"""
        pass
