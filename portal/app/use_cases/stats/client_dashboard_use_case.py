"""
Client Dashboard Use Case

Interaction statistics for one client.
"""

from collections import Counter
from uuid import UUID

from portal.app.services.client_access import load_accessible_client
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.identity import AuthSession
from portal.libs.result import Result, Return

from .dtos import ClientDashboardResponse, QueryCount

TOP_QUERIES = 10


class ClientDashboardUseCase:
    """
    Use case for the client dashboard.

    Business Rules:
    - Admin or the bound client
    - Queries are grouped case-insensitively, ignoring surrounding spaces
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, auth_session: AuthSession, client_id: UUID
    ) -> Result[ClientDashboardResponse]:
        async with self.uow:
            result = await load_accessible_client(self.uow, auth_session, client_id)
            if result.is_err():
                return Return.err(result.error)
            client = result.value

            interactions = await self.uow.interactions.list_by_client_id(client_id)

            total = len(interactions)
            active_days = len({i.created_at.date() for i in interactions})
            response_times = [
                i.response_time_ms for i in interactions if i.response_time_ms is not None
            ]
            queries = Counter(
                i.query_text.strip().lower() for i in interactions if i.query_text.strip()
            )

            return Return.ok(
                ClientDashboardResponse(
                    client_id=str(client_id),
                    agent_name=client.agent_name,
                    total_interactions=total,
                    active_days=active_days,
                    average_per_day=round(total / active_days, 1) if active_days else 0.0,
                    average_response_time_ms=(
                        round(sum(response_times) / len(response_times), 1)
                        if response_times
                        else None
                    ),
                    top_queries=[
                        QueryCount(query=query, count=count)
                        for query, count in queries.most_common(TOP_QUERIES)
                    ],
                )
            )
