"""
Client Account Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from portal.domain.entities import ClientAccount
from portal.domain.widget_settings import WidgetSettings, parse_widget_settings


class ClientInfo(BaseModel):
    """Client account as returned by the API"""

    id: str
    client_name: str
    email: str
    agent_name: str
    company: Optional[str] = None
    description: Optional[str] = None
    status: str
    widget_settings: WidgetSettings
    last_active: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None
    deletion_scheduled_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, client: ClientAccount) -> "ClientInfo":
        return cls(
            id=str(client.id),
            client_name=client.client_name,
            email=client.email,
            agent_name=client.agent_name,
            company=client.company,
            description=client.description,
            status=client.status.value,
            widget_settings=parse_widget_settings(client.widget_settings),
            last_active=client.last_active,
            created_at=client.created_at,
            updated_at=client.updated_at,
            deleted_at=client.deleted_at,
            deletion_scheduled_at=client.deletion_scheduled_at,
        )


class CreateClientResponse(BaseModel):
    client: ClientInfo
    invitation_status: str
    invitation_expires_at: datetime
    warnings: List[str] = []


class ListClientsResponse(BaseModel):
    clients: List[ClientInfo]
    total: int


class UpdateClientResponse(BaseModel):
    client: ClientInfo
    changed_fields: List[str]


class ScheduleDeletionResponse(BaseModel):
    client_id: str
    deleted_at: datetime
    deletion_scheduled_at: datetime
    recovery_status: str
    warnings: List[str] = []


class RecoverClientResponse(BaseModel):
    client_id: str
    client_name: str
    status: str


class PurgeClientsResponse(BaseModel):
    purged: List[str]
    count: int
