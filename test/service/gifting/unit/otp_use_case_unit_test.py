"""
Unit tests for OTP generation and verification

Test Focus:
1. Attempt cap: the third wrong code fails the record; nothing verifies after that
2. Expiry: a late verify expires the record whatever code is sent
3. Generation replaces pending codes for the same channels and survives send failures
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock

import pytest
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import NotFoundError, ValidationFailedError
from src.service.gifting.app.command.generate_otp_use_case import (
    OTP_EMAIL_SUBJECT,
    GenerateOtpUseCase,
)
from src.service.gifting.app.command.resend_otp_use_case import ResendOtpUseCase
from src.service.gifting.app.command.verify_otp_use_case import VerifyOtpUseCase
from src.service.gifting.domain.entity.otp_verification_entity import (
    ContactBundle,
    OtpVerification,
)
from src.service.gifting.domain.enum.otp_enum import OtpStatus, OtpType
from test.service.gifting.in_memory_repo import InMemoryOtpRepo


async def _seed_otp(
    repo: InMemoryOtpRepo, *, code: str = '123456', expires_in: timedelta = timedelta(minutes=5)
) -> OtpVerification:
    now = datetime.now(timezone.utc)
    otp = OtpVerification(
        id=uuid7(),
        otp_type=OtpType.PHONE,
        otp_code=code,
        phone_number='3001234567',
        expires_at=now + expires_in,
        created_at=now,
    )
    return await repo.create(otp=otp)


@pytest.fixture
def verify_use_case(otp_repo: InMemoryOtpRepo) -> VerifyOtpUseCase:
    return VerifyOtpUseCase(otp_verification_repo=otp_repo)


@pytest.fixture
def generate_use_case(otp_repo: InMemoryOtpRepo, mock_notification_sender: Mock) -> GenerateOtpUseCase:
    return GenerateOtpUseCase(
        otp_verification_repo=otp_repo,
        notification_sender=mock_notification_sender,
        code_length=6,
        ttl_minutes=5,
        max_attempts=3,
    )


@pytest.mark.unit
class TestVerifyOtp:
    @pytest.mark.asyncio
    async def test_correct_code_verifies_once(
        self, verify_use_case: VerifyOtpUseCase, otp_repo: InMemoryOtpRepo
    ) -> None:
        otp = await _seed_otp(otp_repo)

        assert await verify_use_case.verify(otp_id=otp.id, code='123456') is True
        assert await verify_use_case.verify(otp_id=otp.id, code='123456') is False

        stored = await otp_repo.get_by_id(otp_id=otp.id)
        assert stored is not None
        assert stored.status == OtpStatus.VERIFIED
        assert stored.verified_at is not None

    @pytest.mark.asyncio
    async def test_three_wrong_codes_lock_the_record(
        self, verify_use_case: VerifyOtpUseCase, otp_repo: InMemoryOtpRepo
    ) -> None:
        """
        OTP lockout

        Given: a fresh OTP with code 123456
        When: 000000 is submitted three times, then the right code
        Then: every call returns False; the third moves the record to failed
        """
        otp = await _seed_otp(otp_repo)

        statuses = []
        for _ in range(3):
            check = await verify_use_case.execute(otp_id=otp.id, code='000000')
            assert check is not None and check.verified is False
            statuses.append((check.otp.attempts, check.otp.status))

        assert statuses == [
            (1, OtpStatus.PENDING),
            (2, OtpStatus.PENDING),
            (3, OtpStatus.FAILED),
        ]
        assert await verify_use_case.verify(otp_id=otp.id, code='123456') is False

        stored = await otp_repo.get_by_id(otp_id=otp.id)
        assert stored is not None
        assert stored.status == OtpStatus.FAILED
        assert stored.attempts == 3

    @pytest.mark.parametrize('code', ['123456', '999999'])
    @pytest.mark.asyncio
    async def test_late_verify_expires_record(
        self, code: str, verify_use_case: VerifyOtpUseCase, otp_repo: InMemoryOtpRepo
    ) -> None:
        otp = await _seed_otp(otp_repo, expires_in=timedelta(seconds=-1))

        check = await verify_use_case.execute(otp_id=otp.id, code=code)

        assert check is not None
        assert check.verified is False
        assert check.otp.status == OtpStatus.EXPIRED
        assert check.otp.attempts == 0

    @pytest.mark.asyncio
    async def test_unknown_otp(self, verify_use_case: VerifyOtpUseCase) -> None:
        assert await verify_use_case.execute(otp_id=uuid7(), code='123456') is None
        assert await verify_use_case.verify(otp_id=uuid7(), code='123456') is False

    @pytest.mark.asyncio
    async def test_verify_runs_checks_against_store_not_caller_copy(
        self, otp_repo: InMemoryOtpRepo
    ) -> None:
        """A record settled between read and write is reported as it is now."""
        otp = await _seed_otp(otp_repo)
        settled = await otp_repo.transition_status(otp=otp, status=OtpStatus.VERIFIED)
        assert settled is not None

        racing_repo = AsyncMock(wraps=otp_repo)
        racing_repo.get_by_id = AsyncMock(side_effect=[otp, settled])
        use_case = VerifyOtpUseCase(otp_verification_repo=racing_repo)

        check = await use_case.execute(otp_id=otp.id, code='123456')

        assert check is not None
        assert check.verified is False
        assert check.otp.status == OtpStatus.VERIFIED


@pytest.mark.unit
class TestGenerateOtp:
    @pytest.mark.asyncio
    async def test_sends_sms_and_email(
        self, generate_use_case: GenerateOtpUseCase, mock_notification_sender: Mock
    ) -> None:
        otp = await generate_use_case.execute(
            otp_type=OtpType.PHONE, phone_number='0300-1234567', email='Rider@Test.com'
        )

        assert otp.status == OtpStatus.PENDING
        assert otp.phone_number == '3001234567'
        assert otp.email == 'rider@test.com'
        assert len(otp.otp_code) == 6 and otp.otp_code.isdigit()
        assert otp.max_attempts == 3

        sms = mock_notification_sender.send_sms.call_args.kwargs
        assert sms['phone_number'] == '+923001234567'
        assert otp.otp_code in sms['message']
        assert 'Valid for 5 minutes' in sms['message']
        email = mock_notification_sender.send_email.call_args.kwargs
        assert email['subject'] == OTP_EMAIL_SUBJECT

    @pytest.mark.asyncio
    async def test_new_code_replaces_pending_one(
        self, generate_use_case: GenerateOtpUseCase, otp_repo: InMemoryOtpRepo
    ) -> None:
        first = await generate_use_case.execute(otp_type=OtpType.PHONE, phone_number='03001234567')
        second = await generate_use_case.execute(otp_type=OtpType.PHONE, phone_number='03001234567')

        assert await otp_repo.get_by_id(otp_id=first.id) is None
        assert await otp_repo.get_by_id(otp_id=second.id) is not None

    @pytest.mark.asyncio
    async def test_send_failure_still_returns_record(
        self, generate_use_case: GenerateOtpUseCase, mock_notification_sender: Mock
    ) -> None:
        mock_notification_sender.send_sms.side_effect = ConnectionError('gateway down')

        otp = await generate_use_case.execute(otp_type=OtpType.PHONE, phone_number='03001234567')

        assert otp.status == OtpStatus.PENDING

    @pytest.mark.asyncio
    async def test_requires_a_channel(self, generate_use_case: GenerateOtpUseCase) -> None:
        with pytest.raises(ValidationFailedError):
            await generate_use_case.execute(otp_type=OtpType.PHONE)

    @pytest.mark.asyncio
    async def test_resend_issues_fresh_record(
        self, generate_use_case: GenerateOtpUseCase, otp_repo: InMemoryOtpRepo
    ) -> None:
        first = await generate_use_case.execute(otp_type=OtpType.PHONE, phone_number='03001234567')
        use_case = ResendOtpUseCase(otp_verification_repo=otp_repo, generate_otp=generate_use_case)

        second = await use_case.execute(otp_id=first.id)

        assert second.id != first.id
        assert second.bundle == ContactBundle(phone_number='3001234567')
        assert await otp_repo.get_by_id(otp_id=first.id) is None
        with pytest.raises(NotFoundError):
            await use_case.execute(otp_id=first.id)


@pytest.mark.unit
class TestOtpEntity:
    def test_proves_contact_needs_phone_email_and_cnic(self) -> None:
        now = datetime.now(timezone.utc)
        otp = OtpVerification(
            id=uuid7(),
            otp_type=OtpType.PHONE,
            otp_code='123456',
            phone_number='3001234567',
            email='rider@test.com',
            cnic_number='3520212345671',
            status=OtpStatus.VERIFIED,
            expires_at=now,
        )
        contact = {
            'phone_number': '+92 300 1234567',
            'email': 'Rider@test.com',
            'cnic_number': '35202-1234567-1',
        }

        assert otp.proves_contact(**contact) is True
        assert otp.proves_contact(**{**contact, 'phone_number': '03009999999'}) is False
        assert otp.proves_contact(**{**contact, 'email': 'other@test.com'}) is False
        assert otp.proves_contact(**{**contact, 'cnic_number': '4210112345671'}) is False

    def test_phone_only_otp_does_not_prove_rider_contact(self) -> None:
        now = datetime.now(timezone.utc)
        otp = OtpVerification(
            id=uuid7(),
            otp_type=OtpType.PHONE,
            otp_code='123456',
            phone_number='3001234567',
            status=OtpStatus.VERIFIED,
            expires_at=now,
        )

        proved = otp.proves_contact(
            phone_number='03001234567', email='rider@test.com', cnic_number='3520212345671'
        )

        assert proved is False

    def test_failed_attempt_never_exceeds_cap(self) -> None:
        now = datetime.now(timezone.utc)
        otp = OtpVerification(
            id=uuid7(), otp_type=OtpType.PHONE, otp_code='1', expires_at=now, attempts=2
        )

        failed = otp.register_failed_attempt().register_failed_attempt()

        assert failed.attempts == 3
        assert failed.status == OtpStatus.FAILED
        assert failed.remaining_attempts == 0
