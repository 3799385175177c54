from typing import List, Optional

from pydantic import BaseModel


class AdminStatsResponse(BaseModel):
    total_clients: int
    active_clients: int
    previous_active_clients: int
    active_clients_change: float


class QueryCount(BaseModel):
    query: str
    count: int


class ClientDashboardResponse(BaseModel):
    client_id: str
    agent_name: str
    total_interactions: int
    active_days: int
    average_per_day: float
    average_response_time_ms: Optional[float] = None
    top_queries: List[QueryCount]
