import io
from unittest.mock import AsyncMock, MagicMock

import pytest

from portal.app.use_cases.widget import (
    MAX_LOGO_BYTES,
    UpdateWidgetSettingsUseCase,
    UploadLogoUseCase,
)
from portal.domain.entities import Role
from portal.domain.widget_settings import WidgetSettingsPatch
from portal.libs.result import Error, Return
from tests.utils.factories import make_auth_session, make_client


@pytest.mark.asyncio
async def test_client_updates_own_widget(mock_uow):
    client = make_client(widget_settings={"chat_color": "#000000"})
    mock_uow.clients.get_by_id.return_value = client
    session = make_auth_session(Role.client, client_id=client.id)

    result = await UpdateWidgetSettingsUseCase(mock_uow).execute(
        session, client.id, WidgetSettingsPatch(chat_color="#FF0000", position="left")
    )

    assert result.is_ok()
    assert sorted(result.value.changed_fields) == ["chat_color", "position"]
    assert client.widget_settings["chat_color"] == "#ff0000"
    assert client.widget_settings["position"] == "left"
    mock_uow.clients.update.assert_awaited_once()


@pytest.mark.asyncio
async def test_invalid_colour_is_rejected(mock_uow):
    client = make_client()
    mock_uow.clients.get_by_id.return_value = client

    result = await UpdateWidgetSettingsUseCase(mock_uow).execute(
        make_auth_session(Role.admin), client.id, WidgetSettingsPatch(chat_color="red")
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.clients.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_other_clients_widget_is_forbidden(mock_uow):
    client = make_client()
    session = make_auth_session(Role.client, client_id=make_client().id)

    result = await UpdateWidgetSettingsUseCase(mock_uow).execute(
        session, client.id, WidgetSettingsPatch(welcome_text="hi")
    )

    assert result.error.code == "FORBIDDEN"
    mock_uow.clients.get_by_id.assert_not_awaited()


class _Upload:
    """In-memory stand-in for an UploadFile"""

    def __init__(self, data: bytes):
        self._buffer = io.BytesIO(data)

    async def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)

    @property
    def remaining(self) -> int:
        return len(self._buffer.getbuffer()) - self._buffer.tell()


@pytest.fixture
def storage():
    storage = MagicMock()
    storage.upload = AsyncMock(return_value=Return.ok("widget-logos/logo.png"))
    storage.get_public_url.return_value = "http://cdn.test/widget-logos/logo.png"
    return storage


@pytest.mark.asyncio
async def test_logo_upload_rejects_non_images(mock_uow, storage):
    client = make_client()
    mock_uow.clients.get_by_id.return_value = client

    result = await UploadLogoUseCase(mock_uow, storage).execute(
        make_auth_session(Role.admin), client.id, "text/plain", _Upload(b"hello")
    )

    assert result.error.code == "INVALID_FILE_TYPE"
    storage.upload.assert_not_awaited()


@pytest.mark.asyncio
async def test_logo_upload_stops_reading_past_the_limit(mock_uow, storage):
    upload = _Upload(b"0" * (MAX_LOGO_BYTES * 3))

    result = await UploadLogoUseCase(mock_uow, storage).execute(
        make_auth_session(Role.admin), make_client().id, "image/png", upload
    )

    assert result.error.code == "FILE_TOO_LARGE"
    assert upload.remaining > MAX_LOGO_BYTES
    storage.upload.assert_not_awaited()


@pytest.mark.asyncio
async def test_logo_of_exactly_the_limit_is_accepted(mock_uow, storage):
    client = make_client()
    mock_uow.clients.get_by_id.return_value = client

    result = await UploadLogoUseCase(mock_uow, storage).execute(
        make_auth_session(Role.admin), client.id, "image/png", _Upload(b"0" * MAX_LOGO_BYTES)
    )

    assert result.is_ok()
    assert len(storage.upload.call_args[0][2]) == MAX_LOGO_BYTES


@pytest.mark.asyncio
async def test_logo_upload_points_widget_at_public_url(mock_uow, storage):
    client = make_client()
    mock_uow.clients.get_by_id.return_value = client

    result = await UploadLogoUseCase(mock_uow, storage).execute(
        make_auth_session(Role.admin), client.id, "image/png", _Upload(b"\x89PNG...")
    )

    assert result.is_ok()
    assert result.value.logo_url == "http://cdn.test/widget-logos/logo.png"
    assert result.value.storage_path.startswith(f"{client.id}_")
    assert result.value.storage_path.endswith(".png")
    assert client.widget_settings["logo_url"] == "http://cdn.test/widget-logos/logo.png"
    bucket = storage.upload.call_args[0][0]
    assert bucket == "widget-logos"


@pytest.mark.asyncio
async def test_stored_extension_follows_content_type(mock_uow, storage):
    client = make_client()
    mock_uow.clients.get_by_id.return_value = client

    result = await UploadLogoUseCase(mock_uow, storage).execute(
        make_auth_session(Role.admin), client.id, "image/jpeg; charset=binary", _Upload(b"jpeg")
    )

    assert result.value.storage_path.endswith(".jpg")
    bucket, path, _, content_type = storage.upload.call_args[0]
    assert path.endswith(".jpg")
    assert content_type == "image/jpeg"


@pytest.mark.asyncio
async def test_failed_upload_leaves_settings_untouched(mock_uow, storage):
    storage.upload.return_value = Return.err(Error("STORAGE_ERROR", "disk full"))
    client = make_client()
    mock_uow.clients.get_by_id.return_value = client

    result = await UploadLogoUseCase(mock_uow, storage).execute(
        make_auth_session(Role.admin), client.id, "image/png", _Upload(b"\x89PNG...")
    )

    assert result.error.code == "UPLOAD_FAILED"
    assert client.widget_settings == {}
    mock_uow.commit.assert_not_awaited()
