from typing import List, Set

from portal.app.services.drive_access import DriveAccessChecker
from portal.libs.result import Error, Result, Return


class FakeDriveAccessChecker(DriveAccessChecker):
    """Treats every Drive file as public unless listed in private_ids"""

    def __init__(self):
        self.private_ids: Set[str] = set()
        self.checked: List[str] = []

    async def check(self, file_id: str) -> Result[None]:
        self.checked.append(file_id)
        if file_id in self.private_ids:
            return Return.err(
                Error("DRIVE_LINK_NOT_ACCESSIBLE", "Drive file is not publicly accessible")
            )
        return Return.ok(None)
