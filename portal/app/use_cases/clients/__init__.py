"""
Client Account Use Cases

Client onboarding, editing, soft deletion, recovery and purge.
"""

from .create_client_use_case import CreateClientUseCase
from .dtos import (
    ClientInfo,
    CreateClientResponse,
    ListClientsResponse,
    PurgeClientsResponse,
    RecoverClientResponse,
    ScheduleDeletionResponse,
    UpdateClientResponse,
)
from .get_client_use_case import GetClientUseCase
from .list_clients_use_case import ListClientsUseCase
from .purge_due_clients_use_case import PurgeDueClientsUseCase
from .recover_client_use_case import RecoverClientUseCase
from .schedule_deletion_use_case import ScheduleClientDeletionUseCase
from .update_client_use_case import UpdateClientUseCase

__all__ = [
    "CreateClientUseCase",
    "GetClientUseCase",
    "ListClientsUseCase",
    "UpdateClientUseCase",
    "ScheduleClientDeletionUseCase",
    "RecoverClientUseCase",
    "PurgeDueClientsUseCase",
    "ClientInfo",
    "CreateClientResponse",
    "ListClientsResponse",
    "UpdateClientResponse",
    "ScheduleDeletionResponse",
    "RecoverClientResponse",
    "PurgeClientsResponse",
]
