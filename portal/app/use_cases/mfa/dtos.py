from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from portal.domain.entities import MfaFactor


class FactorInfo(BaseModel):
    id: str
    friendly_name: str
    factor_type: str = "totp"
    status: str
    created_at: datetime
    verified_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, factor: MfaFactor) -> "FactorInfo":
        return cls(
            id=str(factor.id),
            friendly_name=factor.friendly_name,
            status=factor.status.value,
            created_at=factor.created_at,
            verified_at=factor.verified_at,
        )


class MfaStatusResponse(BaseModel):
    """enabled is true once any factor is verified"""

    enabled: bool
    factors: List[FactorInfo]


class EnrollFactorResponse(BaseModel):
    """The secret is shown once; render otpauth_uri as a QR code"""

    factor: FactorInfo
    secret: str
    otpauth_uri: str


class UnenrollFactorResponse(BaseModel):
    factor_id: str
    enabled: bool
