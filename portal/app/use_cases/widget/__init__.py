"""
Widget Use Cases

Widget configuration and logo upload.
"""

from .dtos import LogoUploadResponse, WidgetSettingsResponse
from .get_widget_settings_use_case import GetWidgetSettingsUseCase
from .update_widget_settings_use_case import UpdateWidgetSettingsUseCase
from .upload_logo_use_case import (
    LOGO_BUCKET,
    MAX_LOGO_BYTES,
    UploadLogoUseCase,
)

__all__ = [
    "GetWidgetSettingsUseCase",
    "UpdateWidgetSettingsUseCase",
    "UploadLogoUseCase",
    "WidgetSettingsResponse",
    "LogoUploadResponse",
    "LOGO_BUCKET",
    "MAX_LOGO_BYTES",
]
