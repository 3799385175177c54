from datetime import timedelta

import pytest

from portal.app.use_cases.invitations import VerifyInvitationUseCase
from portal.domain.base import utcnow
from portal.domain.entities import InvitationStatus
from tests.utils.factories import make_client, make_invitation


@pytest.mark.asyncio
async def test_valid_token_reports_client(mock_uow):
    client = make_client(client_name="")
    invitation = make_invitation(client)
    mock_uow.invitations.get_by_token.return_value = invitation
    mock_uow.clients.get_by_id.return_value = client

    result = await VerifyInvitationUseCase(mock_uow).execute(invitation.token)

    assert result.is_ok()
    verification = result.value
    assert verification.is_valid is True
    assert verification.client_id == str(client.id)
    assert verification.email == invitation.email
    assert verification.client_name == "Your Company"
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"status": InvitationStatus.accepted},
        {"status": InvitationStatus.expired},
        {"expires_at": utcnow() - timedelta(minutes=1)},
    ],
)
async def test_unusable_tokens_are_invalid(mock_uow, overrides):
    client = make_client()
    mock_uow.invitations.get_by_token.return_value = make_invitation(client, **overrides)
    mock_uow.clients.get_by_id.return_value = client

    result = await VerifyInvitationUseCase(mock_uow).execute("setup-token")

    assert result.is_ok()
    assert result.value.is_valid is False
    assert result.value.client_id is None


@pytest.mark.asyncio
async def test_empty_token_is_invalid_without_lookup(mock_uow):
    result = await VerifyInvitationUseCase(mock_uow).execute("")

    assert result.value.is_valid is False
    mock_uow.invitations.get_by_token.assert_not_awaited()
