from uuid import uuid4

import pyotp
import pytest

from portal.app.use_cases.auth import SignInUseCase
from portal.app.use_cases.mfa import (
    EnrollFactorUseCase,
    UnenrollFactorUseCase,
    VerifyFactorUseCase,
)
from portal.domain.entities import MfaFactor, MfaFactorStatus, Role
from tests.utils.factories import make_auth_session, make_user


def _factor(user_id, status=MfaFactorStatus.unverified) -> MfaFactor:
    return MfaFactor(
        id=uuid4(),
        user_id=user_id,
        friendly_name="phone",
        secret=pyotp.random_base32(),
        status=status,
    )


def _wrong_code(secret: str) -> str:
    current = pyotp.TOTP(secret).now()
    return "000000" if current != "000000" else "111111"


@pytest.mark.asyncio
async def test_enroll_replaces_unfinished_enrollment(mock_uow):
    auth_session = make_auth_session(Role.client, email="owner@acme.com")

    result = await EnrollFactorUseCase(mock_uow).execute(auth_session)

    assert result.is_ok()
    mock_uow.mfa_factors.delete_unverified_for_user.assert_awaited_once_with(
        auth_session.principal.id
    )
    factor = mock_uow.mfa_factors.create.call_args[0][0]
    assert factor.status == MfaFactorStatus.unverified
    assert factor.friendly_name.startswith("TOTP-")
    assert result.value.secret == factor.secret
    assert result.value.otpauth_uri.startswith("otpauth://totp/")
    assert "owner%40acme.com" in result.value.otpauth_uri
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_verify_marks_factor_verified(mock_uow):
    auth_session = make_auth_session(Role.admin)
    factor = _factor(auth_session.principal.id)
    mock_uow.mfa_factors.get_by_id.return_value = factor

    result = await VerifyFactorUseCase(mock_uow).execute(
        auth_session, factor.id, pyotp.TOTP(factor.secret).now()
    )

    assert result.is_ok()
    assert result.value.status == "verified"
    assert factor.verified_at is not None
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_wrong_code_leaves_factor_unverified(mock_uow):
    auth_session = make_auth_session(Role.admin)
    factor = _factor(auth_session.principal.id)
    mock_uow.mfa_factors.get_by_id.return_value = factor

    result = await VerifyFactorUseCase(mock_uow).execute(
        auth_session, factor.id, _wrong_code(factor.secret)
    )

    assert result.error.code == "INVALID_MFA_CODE"
    assert factor.status == MfaFactorStatus.unverified
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_factor_of_another_principal_is_not_found(mock_uow):
    factor = _factor(uuid4())
    mock_uow.mfa_factors.get_by_id.return_value = factor

    result = await VerifyFactorUseCase(mock_uow).execute(
        make_auth_session(Role.admin), factor.id, pyotp.TOTP(factor.secret).now()
    )

    assert result.error.code == "MFA_FACTOR_NOT_FOUND"


@pytest.mark.asyncio
async def test_unenroll_verified_factor_needs_a_code(mock_uow):
    auth_session = make_auth_session(Role.client)
    factor = _factor(auth_session.principal.id, MfaFactorStatus.verified)
    mock_uow.mfa_factors.get_by_id.return_value = factor
    mock_uow.mfa_factors.list_by_user_id.return_value = []

    result = await UnenrollFactorUseCase(mock_uow).execute(auth_session, factor.id)
    assert result.error.code == "INVALID_MFA_CODE"
    mock_uow.mfa_factors.delete.assert_not_awaited()

    result = await UnenrollFactorUseCase(mock_uow).execute(
        auth_session, factor.id, pyotp.TOTP(factor.secret).now()
    )
    assert result.is_ok()
    assert result.value.enabled is False
    mock_uow.mfa_factors.delete.assert_awaited_once_with(factor.id)


@pytest.mark.asyncio
async def test_unverified_factor_is_dropped_without_code(mock_uow):
    auth_session = make_auth_session(Role.client)
    factor = _factor(auth_session.principal.id)
    mock_uow.mfa_factors.get_by_id.return_value = factor
    mock_uow.mfa_factors.list_by_user_id.return_value = []

    result = await UnenrollFactorUseCase(mock_uow).execute(auth_session, factor.id)

    assert result.is_ok()


@pytest.mark.asyncio
async def test_sign_in_asks_for_second_factor(mock_uow):
    user = make_user("admin@example.com", "CorrectHorse1")
    factor = _factor(user.id, MfaFactorStatus.verified)
    mock_uow.users.get_by_email.return_value = user
    mock_uow.mfa_factors.list_by_user_id.return_value = [factor]

    result = await SignInUseCase(mock_uow).execute("admin@example.com", "CorrectHorse1")
    assert result.error.code == "MFA_REQUIRED"

    result = await SignInUseCase(mock_uow).execute(
        "admin@example.com", "CorrectHorse1", mfa_code=_wrong_code(factor.secret)
    )
    assert result.error.code == "INVALID_MFA_CODE"

    mock_uow.sessions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_unverified_factor_does_not_gate_sign_in(mock_uow):
    user = make_user("admin@example.com", "CorrectHorse1")
    mock_uow.users.get_by_email.return_value = user
    mock_uow.mfa_factors.list_by_user_id.return_value = [_factor(user.id)]
    mock_uow.user_roles.get_by_user_id.return_value = None
    mock_uow.clients.get_by_email.return_value = None

    result = await SignInUseCase(mock_uow).execute("admin@example.com", "CorrectHorse1")

    assert result.is_ok()
    mock_uow.sessions.create.assert_awaited_once()
