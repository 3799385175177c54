"""
Content Source Entities

Website URLs and Google Drive links the chatbot is trained on.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow


class WebsiteUrl(SQLModel, table=True):
    __tablename__ = "website_urls"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    client_id: UUID = Field(foreign_key="clients.id", nullable=False, index=True)
    url: str = Field(max_length=2048)
    refresh_rate: int = Field(default=24)  # hours

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))


class DriveLink(SQLModel, table=True):
    __tablename__ = "google_drive_links"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    client_id: UUID = Field(foreign_key="clients.id", nullable=False, index=True)
    link: str = Field(max_length=2048)
    refresh_rate: int = Field(default=24)  # hours

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
