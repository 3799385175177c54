from uuid import UUID

from portal.app.services.unit_of_work import UnitOfWork
from portal.libs.result import Error, Result, Return

from .dtos import SignOutResponse


class SignOutUseCase:
    """Revokes the current session."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, session_id: UUID) -> Result[SignOutResponse]:
        async with self.uow:
            revoked = await self.uow.sessions.revoke_by_id(session_id)
            if not revoked:
                return Return.err(
                    Error("SESSION_NOT_FOUND", "Session not found or already revoked")
                )
            self.uow.publish_change(
                "sessions",
                {"id": str(session_id), "user_id": str(user_id), "event": "signed_out"},
            )
            await self.uow.commit()
            return Return.ok(SignOutResponse(status="signed_out"))
