"""TOTP second factor helpers (RFC 6238, 30 second steps, 6 digits)."""

from typing import Iterable

import pyotp

from config import ApplicationConfig
from portal.domain.entities import MfaFactor, MfaFactorStatus

# Accept the previous and next step too, for clock drift
VALID_WINDOW = 1


def new_secret() -> str:
    return pyotp.random_base32()


def provisioning_uri(secret: str, email: str) -> str:
    return pyotp.TOTP(secret).provisioning_uri(
        name=email, issuer_name=ApplicationConfig.MFA_ISSUER
    )


def verify_code(secret: str, code: str) -> bool:
    code = (code or "").replace(" ", "")
    if not code.isdigit():
        return False
    return pyotp.TOTP(secret).verify(code, valid_window=VALID_WINDOW)


def verified_factors(factors: Iterable[MfaFactor]) -> list:
    return [factor for factor in factors if factor.status == MfaFactorStatus.verified]


def matches_any(factors: Iterable[MfaFactor], code: str) -> bool:
    """True when the code is valid for one of the verified factors."""
    return any(verify_code(factor.secret, code) for factor in verified_factors(factors))
