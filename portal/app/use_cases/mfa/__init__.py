"""
MFA Use Cases

TOTP enrollment, verification and removal for the signed-in principal.
"""

from .dtos import EnrollFactorResponse, FactorInfo, MfaStatusResponse, UnenrollFactorResponse
from .enroll_factor_use_case import EnrollFactorUseCase
from .list_factors_use_case import ListFactorsUseCase
from .unenroll_factor_use_case import UnenrollFactorUseCase
from .verify_factor_use_case import VerifyFactorUseCase

__all__ = [
    "EnrollFactorUseCase",
    "ListFactorsUseCase",
    "UnenrollFactorUseCase",
    "VerifyFactorUseCase",
    "EnrollFactorResponse",
    "FactorInfo",
    "MfaStatusResponse",
    "UnenrollFactorResponse",
]
