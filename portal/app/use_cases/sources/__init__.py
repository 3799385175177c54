"""
Content Source Use Cases

Website URLs and Google Drive links per client.
"""

from .add_drive_link_use_case import AddDriveLinkUseCase
from .add_website_url_use_case import AddWebsiteUrlUseCase
from .delete_drive_link_use_case import DeleteDriveLinkUseCase
from .delete_website_url_use_case import DeleteWebsiteUrlUseCase
from .dtos import (
    DeleteSourceResponse,
    DriveLinkInfo,
    ListSourcesResponse,
    WebsiteUrlInfo,
)
from .list_sources_use_case import ListSourcesUseCase

__all__ = [
    "ListSourcesUseCase",
    "AddWebsiteUrlUseCase",
    "DeleteWebsiteUrlUseCase",
    "AddDriveLinkUseCase",
    "DeleteDriveLinkUseCase",
    "ListSourcesResponse",
    "WebsiteUrlInfo",
    "DriveLinkInfo",
    "DeleteSourceResponse",
]
