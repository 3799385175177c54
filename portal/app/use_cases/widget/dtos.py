from typing import List

from pydantic import BaseModel

from portal.domain.widget_settings import WidgetSettings


class WidgetSettingsResponse(BaseModel):
    client_id: str
    settings: WidgetSettings
    changed_fields: List[str] = []


class LogoUploadResponse(BaseModel):
    client_id: str
    logo_url: str
    storage_path: str
