"""
Admin Stats Use Case

Client totals and 48-hour activity for the admin dashboard.
"""

from datetime import timedelta

from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.base import utcnow
from portal.libs.result import Result, Return

from .dtos import AdminStatsResponse

ACTIVE_WINDOW = timedelta(hours=48)


def change_percentage(current: int, previous: int) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round((current - previous) / previous * 100, 1)


class AdminStatsUseCase:
    """
    Use case for admin dashboard stats.

    Business Rules:
    - Total clients excludes soft-deleted clients
    - Active clients: distinct clients with a chat interaction in the last
      48 hours, compared with the 48 hours before that
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[AdminStatsResponse]:
        async with self.uow:
            now = utcnow()
            window_start = now - ACTIVE_WINDOW
            total = await self.uow.clients.count_active()
            current = await self.uow.interactions.count_active_clients(
                window_start, now + timedelta(seconds=1)
            )
            previous = await self.uow.interactions.count_active_clients(
                window_start - ACTIVE_WINDOW, window_start
            )
            return Return.ok(
                AdminStatsResponse(
                    total_clients=total,
                    active_clients=current,
                    previous_active_clients=previous,
                    active_clients_change=change_percentage(current, previous),
                )
            )
