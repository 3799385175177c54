"""
Statistics Use Cases
"""

from .admin_stats_use_case import AdminStatsUseCase, change_percentage
from .client_dashboard_use_case import ClientDashboardUseCase
from .dtos import AdminStatsResponse, ClientDashboardResponse, QueryCount

__all__ = [
    "AdminStatsUseCase",
    "ClientDashboardUseCase",
    "AdminStatsResponse",
    "ClientDashboardResponse",
    "QueryCount",
    "change_percentage",
]
