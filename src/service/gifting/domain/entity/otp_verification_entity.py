from datetime import datetime, timedelta, timezone
import hmac
import secrets
from typing import Optional
from uuid import UUID

import attrs

from src.platform.exception.exceptions import ValidationFailedError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.domain.enum.otp_enum import OtpStatus, OtpType
from src.service.gifting.domain.validation.data_validator import (
    digits_only,
    normalize_phone_number,
    require_valid,
    validate_cnic,
    validate_email,
    validate_phone_number,
)


def generate_otp_code(length: int) -> str:
    return ''.join(secrets.choice('0123456789') for _ in range(length))


@attrs.frozen
class ContactBundle:
    """Channels an OTP is bound to; phone and email may travel together for one sign-up."""

    phone_number: Optional[str] = None
    cnic_number: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def normalized(
        cls,
        *,
        phone_number: Optional[str] = None,
        cnic_number: Optional[str] = None,
        email: Optional[str] = None,
    ) -> 'ContactBundle':
        if not (phone_number or cnic_number or email):
            raise ValidationFailedError('contact', 'At least one contact channel is required')
        if phone_number:
            require_valid(validate_phone_number(phone_number), 'phone_number')
        if cnic_number:
            require_valid(validate_cnic(cnic_number), 'cnic_number')
        if email:
            require_valid(validate_email(email), 'email')

        return cls(
            phone_number=normalize_phone_number(phone_number) if phone_number else None,
            cnic_number=digits_only(cnic_number) if cnic_number else None,
            email=email.strip().lower() if email else None,
        )


@attrs.define
class OtpVerification:
    id: UUID
    otp_type: OtpType
    otp_code: str = attrs.field(repr=False)
    expires_at: datetime
    user_id: Optional[int] = None
    phone_number: Optional[str] = None
    cnic_number: Optional[str] = None
    email: Optional[str] = None
    status: OtpStatus = OtpStatus.PENDING
    attempts: int = 0
    max_attempts: int = 3
    created_at: Optional[datetime] = None
    verified_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        bundle: ContactBundle,
        otp_type: OtpType,
        code_length: int,
        ttl_minutes: int,
        max_attempts: int,
        user_id: Optional[int] = None,
    ) -> 'OtpVerification':
        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            user_id=user_id,
            phone_number=bundle.phone_number,
            cnic_number=bundle.cnic_number,
            email=bundle.email,
            otp_type=otp_type,
            otp_code=generate_otp_code(code_length),
            status=OtpStatus.PENDING,
            attempts=0,
            max_attempts=max_attempts,
            expires_at=now + timedelta(minutes=ttl_minutes),
            created_at=now,
        )

    @property
    def bundle(self) -> ContactBundle:
        return ContactBundle(
            phone_number=self.phone_number, cnic_number=self.cnic_number, email=self.email
        )

    @property
    def remaining_attempts(self) -> int:
        return max(self.max_attempts - self.attempts, 0)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.now(timezone.utc)) > self.expires_at

    def is_exhausted(self) -> bool:
        return self.attempts >= self.max_attempts

    def matches_code(self, code: str) -> bool:
        return hmac.compare_digest(self.otp_code.encode(), (code or '').strip().encode())

    def mark_verified(self) -> 'OtpVerification':
        return attrs.evolve(
            self, status=OtpStatus.VERIFIED, verified_at=datetime.now(timezone.utc)
        )

    def mark_expired(self) -> 'OtpVerification':
        return attrs.evolve(self, status=OtpStatus.EXPIRED)

    def mark_failed(self) -> 'OtpVerification':
        return attrs.evolve(self, status=OtpStatus.FAILED)

    def register_failed_attempt(self) -> 'OtpVerification':
        attempts = min(self.attempts + 1, self.max_attempts)
        return attrs.evolve(
            self,
            attempts=attempts,
            status=OtpStatus.FAILED if attempts >= self.max_attempts else self.status,
        )

    def proves_contact(self, *, phone_number: str, email: str, cnic_number: str) -> bool:
        """True when this verified OTP was bound to exactly this phone, email and CNIC."""
        if self.status != OtpStatus.VERIFIED:
            return False
        if not (self.phone_number and self.email and self.cnic_number):
            return False
        return (
            self.phone_number == normalize_phone_number(phone_number)
            and self.email == (email or '').strip().lower()
            and self.cnic_number == digits_only(cnic_number)
        )

    def message_text(self, *, ttl_minutes: int) -> str:
        return (
            f"Gift Wave OTP: {self.otp_code}. Valid for {ttl_minutes} minutes. "
            "Don't share this code."
        )
