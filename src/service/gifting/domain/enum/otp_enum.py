from enum import StrEnum


class OtpType(StrEnum):
    PHONE = 'phone'
    CNIC = 'cnic'
    EMAIL = 'email'


class OtpStatus(StrEnum):
    PENDING = 'pending'
    VERIFIED = 'verified'
    EXPIRED = 'expired'
    FAILED = 'failed'
