"""
Activity Use Cases
"""

from .dtos import ActivityFeedResponse, ActivityInfo
from .list_client_activity_use_case import (
    ListClientActivityUseCase,
    ListRecentActivityUseCase,
)

__all__ = [
    "ListClientActivityUseCase",
    "ListRecentActivityUseCase",
    "ActivityFeedResponse",
    "ActivityInfo",
]
