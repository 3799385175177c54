from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from portal.app.services.credentials import verify_password
from portal.app.use_cases.invitations import RedeemInvitationUseCase
from portal.domain.base import utcnow
from portal.domain.entities import (
    InvitationStatus,
    MfaFactor,
    MfaFactorStatus,
    Role,
    User,
    UserRole,
)
from tests.utils.factories import make_client, make_invitation, make_user

PASSWORD = "CorrectHorse1"


@pytest.fixture
def client():
    return make_client()


@pytest.fixture
def invitation(client):
    return make_invitation(client)


def _client_user(client, password=PASSWORD, **overrides):
    profile = {"role": "client", "client_id": str(client.id)}
    return make_user(client.email, password, user_metadata=profile, **overrides)


@pytest.fixture
def redeem_uow(mock_uow, client, invitation):
    mock_uow.invitations.get_by_token.return_value = invitation
    mock_uow.invitations.claim_pending.return_value = True
    mock_uow.clients.get_by_id.return_value = client
    mock_uow.users.get_by_email.return_value = None
    # Resolution after provisioning reads the profile data only
    mock_uow.user_roles.get_by_user_id.return_value = None
    mock_uow.clients.get_by_email.return_value = None
    mock_uow.mfa_factors.list_by_user_id.return_value = []
    return mock_uow


@pytest.mark.asyncio
async def test_first_redeem_provisions_client_principal(redeem_uow, client, invitation):
    result = await RedeemInvitationUseCase(redeem_uow).execute(invitation.token, PASSWORD)

    assert result.is_ok()
    response = result.value
    assert response.account_created is True
    assert response.client_id == str(client.id)
    assert response.identity.role == Role.client.value
    assert response.redirect_to == "/client/view"
    assert response.access_token
    assert response.refresh_token

    redeem_uow.invitations.claim_pending.assert_awaited_once()
    created_user = redeem_uow.users.create.call_args[0][0]
    assert isinstance(created_user, User)
    assert created_user.email == invitation.email
    assert created_user.user_metadata["client_id"] == str(client.id)
    assert created_user.user_metadata["role"] == "client"

    role_record = redeem_uow.user_roles.create.call_args[0][0]
    assert isinstance(role_record, UserRole)
    assert role_record.client_id == client.id


@pytest.mark.asyncio
async def test_losing_the_claim_never_provisions(redeem_uow, invitation):
    redeem_uow.invitations.claim_pending.return_value = False

    result = await RedeemInvitationUseCase(redeem_uow).execute(invitation.token, PASSWORD)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    redeem_uow.users.create.assert_not_awaited()
    redeem_uow.user_roles.create.assert_not_awaited()
    redeem_uow.rollback.assert_awaited()


@pytest.mark.asyncio
async def test_losing_the_claim_to_the_same_user_signs_in(redeem_uow, client, invitation):
    winner = _client_user(client)
    redeem_uow.invitations.claim_pending.return_value = False
    # Nobody before the claim; the concurrent winner after the rollback
    redeem_uow.users.get_by_email = AsyncMock(side_effect=[None, winner])

    result = await RedeemInvitationUseCase(redeem_uow).execute(invitation.token, PASSWORD)

    assert result.is_ok()
    assert result.value.account_created is False
    redeem_uow.users.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_repeat_click_with_correct_password_signs_in(redeem_uow, client, invitation):
    invitation.status = InvitationStatus.accepted
    redeem_uow.users.get_by_email.return_value = _client_user(client)

    result = await RedeemInvitationUseCase(redeem_uow).execute(invitation.token, PASSWORD)

    assert result.is_ok()
    assert result.value.account_created is False
    redeem_uow.invitations.claim_pending.assert_not_awaited()
    redeem_uow.users.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_existing_account_with_other_password_on_pending_invitation(
    redeem_uow, client, invitation
):
    redeem_uow.users.get_by_email.return_value = _client_user(client, "SomethingElse9")

    result = await RedeemInvitationUseCase(redeem_uow).execute(invitation.token, PASSWORD)

    assert result.is_err()
    assert result.error.code == "ACCOUNT_EXISTS"


@pytest.mark.asyncio
async def test_accepted_invitation_with_wrong_password_is_invalid(
    redeem_uow, client, invitation
):
    invitation.status = InvitationStatus.accepted
    redeem_uow.users.get_by_email.return_value = _client_user(client, "SomethingElse9")

    result = await RedeemInvitationUseCase(redeem_uow).execute(invitation.token, PASSWORD)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_expired_invitation_is_invalid(redeem_uow, invitation):
    invitation.expires_at = utcnow() - timedelta(seconds=1)

    result = await RedeemInvitationUseCase(redeem_uow).execute(invitation.token, PASSWORD)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    assert result.error.message == "Invalid or expired invitation link"
    redeem_uow.invitations.claim_pending.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_token_is_invalid(redeem_uow):
    redeem_uow.invitations.get_by_token.return_value = None

    result = await RedeemInvitationUseCase(redeem_uow).execute("nope", PASSWORD)

    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_deleted_client_makes_token_invalid(redeem_uow, client, invitation):
    client.deleted_at = utcnow()

    result = await RedeemInvitationUseCase(redeem_uow).execute(invitation.token, PASSWORD)

    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_short_password_is_rejected_before_lookup(redeem_uow, invitation):
    result = await RedeemInvitationUseCase(redeem_uow).execute(invitation.token, "short")

    assert result.error.code == "INVALID_PASSWORD"
    redeem_uow.invitations.get_by_token.assert_not_awaited()


@pytest.mark.asyncio
async def test_confirmed_unbound_account_is_never_signed_in(redeem_uow, invitation):
    # Knows the password, but the account was never bound to this client
    redeem_uow.users.get_by_email.return_value = make_user(invitation.email, PASSWORD)

    result = await RedeemInvitationUseCase(redeem_uow).execute(invitation.token, PASSWORD)

    assert result.error.code == "ACCOUNT_EXISTS"
    redeem_uow.invitations.claim_pending.assert_not_awaited()
    redeem_uow.sessions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_account_of_another_client_is_never_signed_in(redeem_uow, invitation):
    other = make_client(client_name="Globex")
    redeem_uow.users.get_by_email.return_value = _client_user(other)

    result = await RedeemInvitationUseCase(redeem_uow).execute(invitation.token, PASSWORD)

    assert result.error.code == "ACCOUNT_EXISTS"
    redeem_uow.invitations.claim_pending.assert_not_awaited()
    redeem_uow.sessions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_unconfirmed_self_sign_up_is_taken_over(redeem_uow, client, invitation):
    squatter = make_user(invitation.email, "Squatter123", email_confirmed=False)
    redeem_uow.users.get_by_email.return_value = squatter
    redeem_uow.sessions.revoke_all_for_user.return_value = 1

    result = await RedeemInvitationUseCase(redeem_uow).execute(invitation.token, PASSWORD)

    assert result.is_ok()
    assert result.value.identity.role == Role.client.value
    assert result.value.client_id == str(client.id)
    redeem_uow.invitations.claim_pending.assert_awaited_once()
    redeem_uow.users.create.assert_not_awaited()
    redeem_uow.sessions.revoke_all_for_user.assert_awaited_once_with(squatter.id)
    redeem_uow.mfa_factors.delete_all_for_user.assert_awaited_once_with(squatter.id)

    assert squatter.email_confirmed is True
    assert squatter.user_metadata["client_id"] == str(client.id)
    assert verify_password(PASSWORD, squatter.password_hash)
    assert not verify_password("Squatter123", squatter.password_hash)


@pytest.mark.asyncio
async def test_unconfirmed_account_on_accepted_invitation_is_invalid(redeem_uow, invitation):
    invitation.status = InvitationStatus.accepted
    redeem_uow.users.get_by_email.return_value = make_user(
        invitation.email, PASSWORD, email_confirmed=False
    )

    result = await RedeemInvitationUseCase(redeem_uow).execute(invitation.token, PASSWORD)

    assert result.error.code == "INVALID_TOKEN"
    redeem_uow.users.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_repeat_click_never_skips_the_second_factor(redeem_uow, client, invitation):
    user = _client_user(client)
    redeem_uow.users.get_by_email.return_value = user
    redeem_uow.mfa_factors.list_by_user_id.return_value = [
        MfaFactor(
            user_id=user.id,
            friendly_name="phone",
            secret="JBSWY3DPEHPK3PXP",
            status=MfaFactorStatus.verified,
        )
    ]

    result = await RedeemInvitationUseCase(redeem_uow).execute(invitation.token, PASSWORD)

    assert result.error.code == "ACCOUNT_EXISTS"
    redeem_uow.sessions.create.assert_not_awaited()
