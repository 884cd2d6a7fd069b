from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.service.gifting.domain.entity.otp_verification_entity import OtpVerification
from src.service.gifting.domain.enum.otp_enum import OtpType


class OtpGenerateRequest(BaseModel):
    otp_type: OtpType = OtpType.PHONE
    phone_number: Optional[str] = None
    cnic_number: Optional[str] = None
    email: Optional[str] = None

    model_config = {
        'json_schema_extra': {
            'example': {'otp_type': 'phone', 'phone_number': '03001234567', 'email': 'rider@example.com'}
        }
    }


class OtpVerifyRequest(BaseModel):
    code: str


class OtpResponse(BaseModel):
    """Never carries the code itself."""

    id: UUID
    otp_type: str
    status: str
    phone_number: Optional[str] = None
    email: Optional[str] = None
    attempts: int
    max_attempts: int
    expires_at: datetime
    verified_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, otp: OtpVerification) -> 'OtpResponse':
        return cls(
            id=otp.id,
            otp_type=otp.otp_type.value,
            status=otp.status.value,
            phone_number=otp.phone_number,
            email=otp.email,
            attempts=otp.attempts,
            max_attempts=otp.max_attempts,
            expires_at=otp.expires_at,
            verified_at=otp.verified_at,
        )
