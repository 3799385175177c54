import re
from typing import Optional
from urllib.parse import urlparse

# Google Drive file and folder ids
DRIVE_FILE_ID = re.compile(r"[-\w]{25,}")
DRIVE_HOSTS = ("drive.google.com", "docs.google.com")


def validate_website_url(url: str) -> Optional[str]:
    """Returns an error message, or None when the URL is acceptable."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return "URL must start with http:// or https:// and include a host"
    return None


def validate_drive_link(link: str) -> Optional[str]:
    parsed = urlparse(link)
    if parsed.scheme not in ("http", "https") or parsed.hostname not in DRIVE_HOSTS:
        return "Please enter a valid Google Drive link"
    if not DRIVE_FILE_ID.search(parsed.path + "?" + parsed.query):
        return "Invalid Google Drive link format"
    return None


def drive_file_id(link: str) -> Optional[str]:
    parsed = urlparse(link)
    match = DRIVE_FILE_ID.search(parsed.path + "?" + parsed.query)
    return match.group(0) if match else None


def validate_refresh_rate(refresh_rate: int) -> Optional[str]:
    if refresh_rate < 1:
        return "Refresh rate must be at least 1"
    return None
