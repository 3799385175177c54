"""
Widget configuration record.

The clients.widget_settings column is only ever written from this model and
read back through parse_widget_settings, so the blob has a fixed shape.
"""

import logging
import re
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


class WidgetSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    agent_name: str = Field(default="", max_length=255)
    logo_url: str = ""
    logo_storage_path: str = ""
    webhook_url: str = ""
    chat_color: str = "#854fff"
    background_color: str = "#ffffff"
    text_color: str = "#333333"
    secondary_color: str = "#6b3fd4"
    position: Literal["left", "right"] = "right"
    welcome_text: str = Field(default="Hi there, how can I help you today?", max_length=500)
    response_time_text: str = Field(default="I typically respond right away", max_length=255)

    @field_validator("chat_color", "background_color", "text_color", "secondary_color")
    @classmethod
    def validate_color(cls, value: str) -> str:
        if not HEX_COLOR.match(value):
            raise ValueError(f"Invalid hex colour: {value}")
        return value.lower()

    @field_validator("webhook_url", "logo_url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        if value and not value.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return value


class WidgetSettingsPatch(BaseModel):
    """Partial update; unset fields keep their stored value."""

    agent_name: Optional[str] = None
    webhook_url: Optional[str] = None
    chat_color: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    secondary_color: Optional[str] = None
    position: Optional[Literal["left", "right"]] = None
    welcome_text: Optional[str] = None
    response_time_text: Optional[str] = None


def parse_widget_settings(raw: Optional[dict[str, Any]]) -> WidgetSettings:
    """Read a stored blob, dropping values that no longer validate."""
    if not raw:
        return WidgetSettings()
    try:
        return WidgetSettings.model_validate(raw)
    except ValidationError as exc:
        invalid = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
        logger.warning(f"Discarding invalid widget settings fields: {sorted(invalid)}")
        cleaned = {k: v for k, v in raw.items() if k not in invalid}
        return WidgetSettings.model_validate(cleaned)
