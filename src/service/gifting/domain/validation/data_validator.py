"""
Input validators for sign-up, rider registration and order creation.

Every validator is pure and returns a `ValidationResult`; malformed input is
reported through `is_valid=False`, never raised. Use `require_valid` where a
use case must stop at the first invalid field.
"""

import re
from urllib.parse import urlparse

import attrs

from src.platform.exception.exceptions import ValidationFailedError


CNIC_LENGTH = 13
PHONE_LENGTH = 10

_CNIC_SEPARATORS = re.compile(r'[\s\-_]')
_PHONE_SEPARATORS = re.compile(r'[\s\-+]')
_EMAIL_PATTERN = re.compile(r'[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}')
_NAME_PATTERN = re.compile(r"[A-Za-z\s\-']+")
_ASCII_DIGITS = re.compile(r'[0-9]+')


@attrs.frozen
class ValidationResult:
    is_valid: bool
    message: str


def digits_only(raw: str | None) -> str:
    """Keep only ASCII 0-9; other Unicode digits are dropped."""
    return ''.join(ch for ch in (raw or '') if '0' <= ch <= '9')


def require_valid(result: ValidationResult, field: str) -> None:
    if not result.is_valid:
        raise ValidationFailedError(field, result.message)


def validate_cnic(cnic: str) -> ValidationResult:
    """
    Validate a 13-digit national identity number (XXXXX-XXXXXXX-X).

    The first two digits are the province code (1-99). The trailing check digit
    is only range-checked; no checksum algorithm is applied.
    """
    clean = _CNIC_SEPARATORS.sub('', cnic or '')

    if len(clean) != CNIC_LENGTH:
        return ValidationResult(False, 'CNIC must be exactly 13 digits')
    if not _ASCII_DIGITS.fullmatch(clean):
        return ValidationResult(False, 'CNIC must contain only numbers')

    province_code = int(clean[:2])
    if not 1 <= province_code <= 99:
        return ValidationResult(False, f'Invalid province code ({province_code}) in CNIC')

    check_digit = int(clean[-1])
    if not 0 <= check_digit <= 9:
        return ValidationResult(False, f'Invalid check digit ({check_digit}) in CNIC')

    return ValidationResult(True, 'CNIC is valid')


def format_cnic(raw: str) -> str:
    """Progressively format digits as XXXXX-XXXXXXX-X while the user types."""
    digits = digits_only(raw)[:CNIC_LENGTH]
    if len(digits) <= 5:
        return digits
    if len(digits) <= 12:
        return f'{digits[:5]}-{digits[5:]}'
    return f'{digits[:5]}-{digits[5:12]}-{digits[12:]}'


def normalize_phone_number(phone: str) -> str:
    """Strip separators and the country/trunk prefix, leaving the 10-digit subscriber number."""
    clean = _PHONE_SEPARATORS.sub('', phone or '')
    if clean.startswith('92'):
        clean = clean[2:]
    elif clean.startswith('0'):
        clean = clean[1:]
    return clean


def validate_phone_number(phone: str) -> ValidationResult:
    clean = normalize_phone_number(phone)

    if len(clean) != PHONE_LENGTH:
        return ValidationResult(False, 'Phone number must be 10 digits (excluding country code)')
    if not _ASCII_DIGITS.fullmatch(clean):
        return ValidationResult(False, 'Phone number must contain only numbers')
    if clean[0] not in '3456789':
        return ValidationResult(False, 'Invalid mobile number prefix')

    return ValidationResult(True, 'Phone number is valid')


def validate_email(email: str) -> ValidationResult:
    if _EMAIL_PATTERN.fullmatch((email or '').strip()):
        return ValidationResult(True, 'Email is valid')
    return ValidationResult(False, 'Please enter a valid email address')


def validate_name(name: str) -> ValidationResult:
    trimmed = (name or '').strip()

    if len(trimmed) < 2:
        return ValidationResult(False, 'Name must be at least 2 characters long')
    if len(trimmed) > 50:
        return ValidationResult(False, 'Name must be less than 50 characters')
    if not _NAME_PATTERN.fullmatch(trimmed):
        return ValidationResult(
            False, 'Name can only contain letters, spaces, hyphens, and apostrophes'
        )

    return ValidationResult(True, 'Name is valid')


def validate_address(address: str) -> ValidationResult:
    trimmed = (address or '').strip()

    if len(trimmed) < 10:
        return ValidationResult(False, 'Address must be at least 10 characters long')
    if len(trimmed) > 200:
        return ValidationResult(False, 'Address must be less than 200 characters')

    return ValidationResult(True, 'Address is valid')


def validate_gift_name(gift_name: str) -> ValidationResult:
    trimmed = (gift_name or '').strip()

    if len(trimmed) < 3:
        return ValidationResult(False, 'Gift name must be at least 3 characters long')
    if len(trimmed) > 100:
        return ValidationResult(False, 'Gift name must be less than 100 characters')

    return ValidationResult(True, 'Gift name is valid')


def validate_url(url: str | None) -> ValidationResult:
    trimmed = (url or '').strip()
    if not trimmed:
        return ValidationResult(True, 'URL is optional')

    try:
        parsed = urlparse(trimmed)
    except ValueError:
        return ValidationResult(False, 'Please enter a valid URL')

    if parsed.scheme not in ('http', 'https'):
        return ValidationResult(False, 'URL must start with http:// or https://')
    if not parsed.netloc:
        return ValidationResult(False, 'Please enter a valid URL')

    return ValidationResult(True, 'URL is valid')
