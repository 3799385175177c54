from datetime import datetime, timedelta, timezone
from uuid import uuid4

from portal.api.utils.jwt import create_access_token, verify_jwt
from portal.domain.base import utcnow


def test_utcnow_is_naive_utc():
    now = utcnow()

    assert now.tzinfo is None
    aware = datetime.now(timezone.utc).replace(tzinfo=None)
    assert abs(aware - now) < timedelta(seconds=5)


def test_access_token_expiry_is_measured_in_utc():
    token = create_access_token(uuid4(), "a@example.com", uuid4(), timedelta(minutes=5))

    payload = verify_jwt(token)

    issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
    assert abs(datetime.now(timezone.utc) - issued_at) < timedelta(seconds=5)
    assert payload["exp"] - payload["iat"] == 300


def test_expired_token_is_rejected():
    token = create_access_token(uuid4(), "a@example.com", uuid4(), timedelta(seconds=-1))

    assert verify_jwt(token) is None
