from abc import ABC, abstractmethod

from portal.libs.result import Result


class DriveAccessChecker(ABC):
    """Checks that a Google Drive file can be read without signing in"""

    @abstractmethod
    async def check(self, file_id: str) -> Result[None]:
        """
        Returns ok when the file is publicly readable.

        Errors: DRIVE_LINK_NOT_ACCESSIBLE when Drive refuses anonymous
        access, DRIVE_CHECK_FAILED when Drive could not be reached.
        """
        pass
