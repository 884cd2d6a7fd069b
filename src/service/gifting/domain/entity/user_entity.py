from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import (
    DomainError,
    InvalidStateError,
    NotEligibleError,
    ValidationFailedError,
)
from src.platform.logging.loguru_io import Logger
from src.service.gifting.domain.enum.user_enum import ReviewDecision, RiderStatus, UserType
from src.service.gifting.domain.validation.data_validator import (
    digits_only,
    normalize_phone_number,
    require_valid,
    validate_cnic,
    validate_email,
    validate_name,
    validate_phone_number,
)


TOO_MANY_LOGIN_ATTEMPTS_REASON = 'Too many failed login attempts'
MIN_PASSWORD_LENGTH = 6


def validate_password(plain_password: str) -> None:
    if len(plain_password or '') < MIN_PASSWORD_LENGTH:
        raise ValidationFailedError(
            'password', f'Password must be at least {MIN_PASSWORD_LENGTH} characters long'
        )


@attrs.define
class UserEntity:
    email: str = ''
    phone_number: str = ''
    full_name: str = ''
    user_type: UserType = UserType.SENDER
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    id: Optional[int] = None
    cnic: Optional[str] = None
    city: Optional[str] = None
    rider_status: Optional[RiderStatus] = None
    status_reason: Optional[str] = None
    profile_image_url: Optional[str] = None
    average_rating: Decimal = Decimal('0')
    total_deliveries: int = 0
    is_email_verified: bool = False
    is_phone_verified: bool = False
    login_attempts: int = 0
    is_blocked: bool = False
    blocked_reason: Optional[str] = None
    last_login_at: Optional[datetime] = None
    is_admin: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create_sender(
        cls, *, email: str, full_name: str, phone_number: str, hashed_password: str
    ) -> 'UserEntity':
        require_valid(validate_email(email), 'email')
        require_valid(validate_name(full_name), 'full_name')
        require_valid(validate_phone_number(phone_number), 'phone_number')

        now = datetime.now(timezone.utc)
        return cls(
            email=email.strip().lower(),
            full_name=full_name.strip(),
            phone_number=normalize_phone_number(phone_number),
            user_type=UserType.SENDER,
            hashed_password=hashed_password,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    @Logger.io
    def create_rider(
        cls,
        *,
        email: str,
        full_name: str,
        phone_number: str,
        hashed_password: str,
        cnic: str,
        city: str,
        profile_image_url: Optional[str] = None,
    ) -> 'UserEntity':
        require_valid(validate_email(email), 'email')
        require_valid(validate_name(full_name), 'full_name')
        require_valid(validate_phone_number(phone_number), 'phone_number')
        require_valid(validate_cnic(cnic), 'cnic')
        if not (city or '').strip():
            raise ValidationFailedError('city', 'City is required')

        now = datetime.now(timezone.utc)
        return cls(
            email=email.strip().lower(),
            full_name=full_name.strip(),
            phone_number=normalize_phone_number(phone_number),
            user_type=UserType.RIDER,
            hashed_password=hashed_password,
            cnic=digits_only(cnic),
            city=city.strip(),
            rider_status=RiderStatus.PENDING,
            profile_image_url=profile_image_url,
            average_rating=Decimal('0'),
            total_deliveries=0,
            is_phone_verified=True,
            is_email_verified=True,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_rider(self) -> bool:
        return self.user_type == UserType.RIDER

    @property
    def is_sender(self) -> bool:
        return self.user_type == UserType.SENDER

    def can_claim_orders(self) -> bool:
        return self.is_rider and self.rider_status == RiderStatus.APPROVED and not self.is_blocked

    def ensure_can_claim_orders(self) -> None:
        if not self.can_claim_orders():
            raise NotEligibleError('Only approved riders can accept orders')

    def ensure_can_sign_in(self) -> None:
        """Raise `NotEligibleError` for blocked accounts and riders that are not approved."""
        if self.is_blocked:
            raise NotEligibleError(self.blocked_reason or 'Account is blocked')
        if not self.is_rider:
            return
        if self.rider_status == RiderStatus.PENDING:
            raise NotEligibleError('Your rider account is awaiting review')
        if self.rider_status == RiderStatus.REJECTED:
            raise NotEligibleError(self.status_reason or 'Your rider application was rejected')
        if self.rider_status == RiderStatus.BANNED:
            raise NotEligibleError(self.status_reason or 'Your rider account has been banned')

    @Logger.io
    def review(self, *, decision: ReviewDecision, reason: Optional[str] = None) -> 'UserEntity':
        if not self.is_rider:
            raise DomainError('Only rider accounts can be reviewed')
        reason = (reason or '').strip() or None
        if decision in (ReviewDecision.REJECT, ReviewDecision.BAN) and not reason:
            raise ValidationFailedError('reason', f'A reason is required to {decision} a rider')
        if self.rider_status == RiderStatus.BANNED:
            raise InvalidStateError(RiderStatus.BANNED, decision)

        new_status = {
            ReviewDecision.APPROVE: RiderStatus.APPROVED,
            ReviewDecision.REJECT: RiderStatus.REJECTED,
            ReviewDecision.BAN: RiderStatus.BANNED,
        }[decision]
        if new_status == RiderStatus.REJECTED and self.rider_status != RiderStatus.PENDING:
            raise InvalidStateError(self.rider_status or 'unknown', decision)
        if new_status == RiderStatus.APPROVED and self.rider_status == RiderStatus.APPROVED:
            raise InvalidStateError(self.rider_status, decision)

        return attrs.evolve(
            self,
            rider_status=new_status,
            status_reason=reason if new_status != RiderStatus.APPROVED else None,
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def block(self, *, reason: str) -> 'UserEntity':
        reason = (reason or '').strip()
        if not reason:
            raise ValidationFailedError('reason', 'A reason is required to block an account')
        return attrs.evolve(
            self, is_blocked=True, blocked_reason=reason, updated_at=datetime.now(timezone.utc)
        )

    @Logger.io
    def unblock(self) -> 'UserEntity':
        return attrs.evolve(
            self,
            is_blocked=False,
            blocked_reason=None,
            login_attempts=0,
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def update_profile(
        self, *, full_name: str, phone_number: str, city: Optional[str] = None
    ) -> 'UserEntity':
        """A new phone number has not been verified yet, so the verified flag is cleared."""
        require_valid(validate_name(full_name), 'full_name')
        require_valid(validate_phone_number(phone_number), 'phone_number')
        city = (city or '').strip() or None
        if self.is_rider and not city:
            raise ValidationFailedError('city', 'City is required')

        phone_number = normalize_phone_number(phone_number)
        return attrs.evolve(
            self,
            full_name=full_name.strip(),
            phone_number=phone_number,
            city=city,
            is_phone_verified=self.is_phone_verified and phone_number == self.phone_number,
            updated_at=datetime.now(timezone.utc),
        )

    def record_successful_login(self) -> 'UserEntity':
        now = datetime.now(timezone.utc)
        return attrs.evolve(self, login_attempts=0, last_login_at=now, updated_at=now)


def compute_reputation(ratings: list[int]) -> tuple[Decimal, int]:
    """Mean rating rounded half-up to two places, and the number of rated deliveries."""
    if not ratings:
        return Decimal('0.00'), 0
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return mean.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP), len(ratings)
