"""
Typed activity events.

Each activity kind is its own model tagged by activity_type. Events are
rendered to (description, metadata) for storage and parsed back through
ACTIVITY_EVENT_ADAPTER when read.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter


class ActivityEventBase(BaseModel):
    def describe(self) -> str:
        raise NotImplementedError

    def to_metadata(self) -> dict:
        return self.model_dump(mode="json", exclude={"activity_type"})


class ClientCreated(ActivityEventBase):
    activity_type: Literal["client_created"] = "client_created"
    client_name: str
    created_by: Optional[str] = None

    def describe(self) -> str:
        return f"was created as a new client ({self.client_name})"


class ClientUpdated(ActivityEventBase):
    activity_type: Literal["client_updated"] = "client_updated"
    changed_fields: list[str] = Field(default_factory=list)
    updated_by_role: str

    def describe(self) -> str:
        if self.updated_by_role == "client":
            return "updated their account information"
        return "had their account information updated"


class ClientDeleted(ActivityEventBase):
    activity_type: Literal["client_deleted"] = "client_deleted"
    purge_scheduled_at: str

    def describe(self) -> str:
        return "was scheduled for deletion"


class ClientRecovered(ActivityEventBase):
    activity_type: Literal["client_recovered"] = "client_recovered"

    def describe(self) -> str:
        return "was recovered from scheduled deletion"


class InvitationSent(ActivityEventBase):
    activity_type: Literal["invitation_sent"] = "invitation_sent"
    email: str
    delivered: bool

    def describe(self) -> str:
        if self.delivered:
            return f"was sent a setup invitation at {self.email}"
        return f"has a setup invitation for {self.email} waiting to be resent"


class InvitationAccepted(ActivityEventBase):
    activity_type: Literal["invitation_accepted"] = "invitation_accepted"
    email: str

    def describe(self) -> str:
        return "completed their account setup"


class WidgetSettingsUpdated(ActivityEventBase):
    activity_type: Literal["widget_settings_updated"] = "widget_settings_updated"
    changed_fields: list[str] = Field(default_factory=list)

    def describe(self) -> str:
        return "updated their widget settings"


class LogoUploaded(ActivityEventBase):
    activity_type: Literal["logo_uploaded"] = "logo_uploaded"
    storage_path: str

    def describe(self) -> str:
        return "uploaded a new widget logo"


class WebsiteUrlAdded(ActivityEventBase):
    activity_type: Literal["website_url_added"] = "website_url_added"
    url: str

    def describe(self) -> str:
        return f"added website URL {self.url}"


class WebsiteUrlDeleted(ActivityEventBase):
    activity_type: Literal["url_deleted"] = "url_deleted"
    url: str

    def describe(self) -> str:
        return f"removed website URL {self.url}"


class DriveLinkAdded(ActivityEventBase):
    activity_type: Literal["drive_link_added"] = "drive_link_added"
    link: str

    def describe(self) -> str:
        return "added a Google Drive link"


class DriveLinkDeleted(ActivityEventBase):
    activity_type: Literal["drive_link_deleted"] = "drive_link_deleted"
    link: str

    def describe(self) -> str:
        return "removed a Google Drive link"


class ChatInteraction(ActivityEventBase):
    activity_type: Literal["chat_interaction"] = "chat_interaction"
    interaction_id: str

    def describe(self) -> str:
        return "had a chat interaction"


ActivityEvent = Annotated[
    Union[
        ClientCreated,
        ClientUpdated,
        ClientDeleted,
        ClientRecovered,
        InvitationSent,
        InvitationAccepted,
        WidgetSettingsUpdated,
        LogoUploaded,
        WebsiteUrlAdded,
        WebsiteUrlDeleted,
        DriveLinkAdded,
        DriveLinkDeleted,
        ChatInteraction,
    ],
    Field(discriminator="activity_type"),
]

ACTIVITY_EVENT_ADAPTER: TypeAdapter = TypeAdapter(ActivityEvent)


def parse_activity_event(activity_type, metadata: dict) -> ActivityEvent:
    tag = getattr(activity_type, "value", activity_type)
    return ACTIVITY_EVENT_ADAPTER.validate_python({**(metadata or {}), "activity_type": tag})
