from typing import List
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from portal.app.repositories.error_log_repository import IErrorLogRepository
from portal.domain.entities import ErrorLog


class ErrorLogRepository(IErrorLogRepository):
    """Error log repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, error_log: ErrorLog) -> ErrorLog:
        self.session.add(error_log)
        await self.session.flush()
        await self.session.refresh(error_log)
        return error_log

    async def list_by_client_id(self, client_id: UUID, limit: int = 50) -> List[ErrorLog]:
        stmt = (
            select(ErrorLog)
            .where(ErrorLog.client_id == client_id)
            .order_by(ErrorLog.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_client_id(self, client_id: UUID) -> int:
        stmt = delete(ErrorLog).where(ErrorLog.client_id == client_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
