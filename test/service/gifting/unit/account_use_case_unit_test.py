"""
Unit tests for the account lifecycle

Test Focus:
1. Sign-in refuses blocked accounts and riders that are not approved
2. Repeated wrong passwords lock the account in the same write as the last attempt
3. Rider registration needs a verified OTP bound to the same phone, email and CNIC
4. Admin review rules: banned is terminal, reject only from pending
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest
from pydantic import SecretStr
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import (
    AuthenticationError,
    ConflictError,
    InvalidStateError,
    LoginError,
    NotEligibleError,
    ValidationFailedError,
)
from src.service.gifting.app.command.block_user_use_case import BlockUserUseCase
from src.service.gifting.app.command.register_rider_use_case import RegisterRiderUseCase
from src.service.gifting.app.command.review_rider_use_case import ReviewRiderUseCase
from src.service.gifting.app.command.sign_in_use_case import SignInUseCase
from src.service.gifting.app.command.sign_up_sender_use_case import SignUpSenderUseCase
from src.service.gifting.app.query.get_session_user_use_case import GetSessionUserUseCase
from src.service.gifting.domain.entity.otp_verification_entity import OtpVerification
from src.service.gifting.domain.entity.user_entity import TOO_MANY_LOGIN_ATTEMPTS_REASON
from src.service.gifting.domain.enum.otp_enum import OtpStatus, OtpType
from src.service.gifting.domain.enum.safety_enum import SecurityAction
from src.service.gifting.domain.enum.user_enum import ReviewDecision, RiderStatus
from src.service.gifting.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from test.service.gifting.factory import RIDER_ID, SENDER_ID, make_rider
from test.service.gifting.in_memory_repo import (
    InMemoryOtpRepo,
    InMemorySecurityEventRepo,
    InMemoryUserRepo,
)


PASSWORD = SecretStr('P@ssw0rd')


@pytest.fixture(scope='module')
def password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher()


@pytest.fixture
def sign_up(user_repo: InMemoryUserRepo, password_hasher: BcryptPasswordHasher) -> SignUpSenderUseCase:
    return SignUpSenderUseCase(user_command_repo=user_repo, password_hasher=password_hasher)


@pytest.fixture
def sign_in(
    user_repo: InMemoryUserRepo,
    password_hasher: BcryptPasswordHasher,
    security_event_repo: InMemorySecurityEventRepo,
) -> SignInUseCase:
    return SignInUseCase(
        user_query_repo=user_repo,
        user_command_repo=user_repo,
        password_hasher=password_hasher,
        security_event_repo=security_event_repo,
        max_login_attempts=3,
    )


async def _seed_verified_otp(
    repo: InMemoryOtpRepo,
    *,
    email: str | None = 'new.rider@test.com',
    cnic_number: str | None = '3520212345671',
) -> OtpVerification:
    now = datetime.now(timezone.utc)
    otp = OtpVerification(
        id=uuid7(),
        otp_type=OtpType.PHONE,
        otp_code='123456',
        phone_number='3451234567',
        email=email,
        cnic_number=cnic_number,
        status=OtpStatus.VERIFIED,
        expires_at=now + timedelta(minutes=5),
        verified_at=now,
    )
    return await repo.create(otp=otp)


@pytest.mark.unit
class TestSignUpAndSignIn:
    @pytest.mark.asyncio
    async def test_sign_up_then_sign_in(
        self, sign_up: SignUpSenderUseCase, sign_in: SignInUseCase
    ) -> None:
        user = await sign_up.execute(
            email=' New.Sender@Test.com ',
            password=PASSWORD,
            full_name='Sara Ahmed',
            phone_number='+92 333 1234567',
        )

        assert user.id is not None
        assert user.email == 'new.sender@test.com'
        assert user.phone_number == '3331234567'
        assert user.hashed_password != PASSWORD.get_secret_value()

        signed_in = await sign_in.execute(email='new.sender@test.com', password=PASSWORD)
        assert signed_in.id == user.id
        assert signed_in.last_login_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_email(self, sign_up: SignUpSenderUseCase) -> None:
        with pytest.raises(ConflictError):
            await sign_up.execute(
                email='sender@test.com',
                password=PASSWORD,
                full_name='Ali Raza',
                phone_number='03001234567',
            )

    @pytest.mark.asyncio
    async def test_short_password(self, sign_up: SignUpSenderUseCase) -> None:
        with pytest.raises(ValidationFailedError, match='at least 6 characters'):
            await sign_up.execute(
                email='x@test.com',
                password=SecretStr('123'),
                full_name='Sara Ahmed',
                phone_number='03001234567',
            )

    @pytest.mark.asyncio
    async def test_unknown_email(self, sign_in: SignInUseCase) -> None:
        with pytest.raises(LoginError, match='LOGIN_BAD_CREDENTIALS'):
            await sign_in.execute(email='nobody@test.com', password=PASSWORD)

    @pytest.mark.asyncio
    async def test_lockout_after_max_failed_attempts(
        self,
        sign_up: SignUpSenderUseCase,
        sign_in: SignInUseCase,
        user_repo: InMemoryUserRepo,
        security_event_repo: InMemorySecurityEventRepo,
    ) -> None:
        """
        Given: max_login_attempts is 3
        When: the wrong password is sent three times
        Then: the first two are bad credentials, the third blocks the account,
              and even the right password is refused afterwards
              and the audit trail holds two failures and one lockout
        """
        user = await sign_up.execute(
            email='lock@test.com', password=PASSWORD, full_name='Sara Ahmed', phone_number='03001234567'
        )
        wrong = SecretStr('wrong-password')

        for _ in range(2):
            with pytest.raises(LoginError):
                await sign_in.execute(email='lock@test.com', password=wrong)
        with pytest.raises(NotEligibleError, match=TOO_MANY_LOGIN_ATTEMPTS_REASON):
            await sign_in.execute(email='lock@test.com', password=wrong)
        with pytest.raises(NotEligibleError):
            await sign_in.execute(email='lock@test.com', password=PASSWORD)

        stored = await user_repo.get_by_id(user_id=user.id or 0)
        assert stored is not None
        assert stored.is_blocked is True
        assert stored.login_attempts == 3
        assert security_event_repo.actions() == [
            SecurityAction.LOGIN_FAILED,
            SecurityAction.LOGIN_FAILED,
            SecurityAction.ACCOUNT_LOCKED,
        ]

    @pytest.mark.asyncio
    async def test_successful_sign_in_resets_attempts(
        self, sign_up: SignUpSenderUseCase, sign_in: SignInUseCase
    ) -> None:
        await sign_up.execute(
            email='reset@test.com', password=PASSWORD, full_name='Sara Ahmed', phone_number='03001234567'
        )
        with pytest.raises(LoginError):
            await sign_in.execute(email='reset@test.com', password=SecretStr('nope-nope'))

        user = await sign_in.execute(email='reset@test.com', password=PASSWORD)

        assert user.login_attempts == 0

    @pytest.mark.parametrize(
        'rider_status,message',
        [
            (RiderStatus.PENDING, 'awaiting review'),
            (RiderStatus.REJECTED, 'Blurry CNIC'),
            (RiderStatus.BANNED, 'Blurry CNIC'),
        ],
    )
    @pytest.mark.asyncio
    async def test_unapproved_rider_cannot_sign_in(
        self,
        rider_status: RiderStatus,
        message: str,
        sign_in: SignInUseCase,
        user_repo: InMemoryUserRepo,
        password_hasher: BcryptPasswordHasher,
    ) -> None:
        rider = make_rider(id=60, email='r60@test.com', rider_status=rider_status)
        rider.hashed_password = password_hasher.hash_password(plain_password=PASSWORD)
        if rider_status != RiderStatus.PENDING:
            rider.status_reason = 'Blurry CNIC'
        user_repo.add(rider)

        with pytest.raises(NotEligibleError, match=message):
            await sign_in.execute(email='r60@test.com', password=PASSWORD)

    @pytest.mark.asyncio
    async def test_session_user_is_rechecked(self, user_repo: InMemoryUserRepo) -> None:
        use_case = GetSessionUserUseCase(user_query_repo=user_repo)
        sender = await use_case.execute(user_id=SENDER_ID)
        await user_repo.update(user=sender.block(reason='Chargeback abuse'))

        with pytest.raises(NotEligibleError, match='Chargeback abuse'):
            await use_case.execute(user_id=SENDER_ID)
        with pytest.raises(AuthenticationError):
            await use_case.execute(user_id=404)


@pytest.mark.unit
class TestRegisterRider:
    @pytest.fixture
    def use_case(
        self,
        user_repo: InMemoryUserRepo,
        otp_repo: InMemoryOtpRepo,
        password_hasher: BcryptPasswordHasher,
        mock_media_storage: Mock,
    ) -> RegisterRiderUseCase:
        return RegisterRiderUseCase(
            user_command_repo=user_repo,
            otp_verification_repo=otp_repo,
            password_hasher=password_hasher,
            media_storage=mock_media_storage,
        )

    @pytest.mark.asyncio
    async def test_registers_pending_rider(
        self, use_case: RegisterRiderUseCase, otp_repo: InMemoryOtpRepo
    ) -> None:
        otp = await _seed_verified_otp(otp_repo)

        rider = await use_case.execute(
            email='new.rider@test.com',
            password=PASSWORD,
            full_name='Bilal Khan',
            phone_number='03451234567',
            cnic='35202-1234567-1',
            city='Lahore',
            otp_id=otp.id,
            profile_image=b'jpeg',
        )

        assert rider.rider_status == RiderStatus.PENDING
        assert rider.cnic == '3520212345671'
        assert rider.is_phone_verified is True
        assert rider.is_email_verified is True
        assert rider.profile_image_url == f'/static/media/profile_images/{rider.id}.jpg'
        assert await otp_repo.get_by_id(otp_id=otp.id) is None

    @pytest.mark.asyncio
    async def test_unverified_phone_is_refused(
        self, use_case: RegisterRiderUseCase, otp_repo: InMemoryOtpRepo
    ) -> None:
        otp = await _seed_verified_otp(otp_repo)

        with pytest.raises(NotEligibleError):
            await use_case.execute(
                email='other.rider@test.com',
                password=PASSWORD,
                full_name='Bilal Khan',
                phone_number='03009999999',
                cnic='35202-1234567-1',
                city='Lahore',
                otp_id=otp.id,
            )

    @pytest.mark.asyncio
    async def test_phone_only_otp_is_refused(
        self, use_case: RegisterRiderUseCase, otp_repo: InMemoryOtpRepo, user_repo: InMemoryUserRepo
    ) -> None:
        """
        Given: a verified OTP that was bound to the phone alone
        When: a rider registers with that phone
        Then: registration is refused and no account is created
        """
        otp = await _seed_verified_otp(otp_repo, email=None, cnic_number=None)

        with pytest.raises(NotEligibleError, match='email and CNIC'):
            await use_case.execute(
                email='new.rider@test.com',
                password=PASSWORD,
                full_name='Bilal Khan',
                phone_number='03451234567',
                cnic='35202-1234567-1',
                city='Lahore',
                otp_id=otp.id,
            )

        assert await user_repo.get_by_email(email='new.rider@test.com') is None
        assert await otp_repo.get_by_id(otp_id=otp.id) is not None

    @pytest.mark.asyncio
    async def test_otp_for_another_cnic_is_refused(
        self, use_case: RegisterRiderUseCase, otp_repo: InMemoryOtpRepo
    ) -> None:
        otp = await _seed_verified_otp(otp_repo, cnic_number='4210112345671')

        with pytest.raises(NotEligibleError):
            await use_case.execute(
                email='new.rider@test.com',
                password=PASSWORD,
                full_name='Bilal Khan',
                phone_number='03451234567',
                cnic='35202-1234567-1',
                city='Lahore',
                otp_id=otp.id,
            )

    @pytest.mark.asyncio
    async def test_invalid_cnic_is_refused(
        self, use_case: RegisterRiderUseCase, otp_repo: InMemoryOtpRepo
    ) -> None:
        otp = await _seed_verified_otp(otp_repo)

        with pytest.raises(ValidationFailedError, match='province code'):
            await use_case.execute(
                email='third.rider@test.com',
                password=PASSWORD,
                full_name='Bilal Khan',
                phone_number='03451234567',
                cnic='00202-1234567-1',
                city='Lahore',
                otp_id=otp.id,
            )


@pytest.mark.unit
class TestAdminActions:
    @pytest.fixture
    def review(self, user_repo: InMemoryUserRepo) -> ReviewRiderUseCase:
        return ReviewRiderUseCase(user_query_repo=user_repo, user_command_repo=user_repo)

    @pytest.mark.asyncio
    async def test_approve_pending_rider(
        self, review: ReviewRiderUseCase, user_repo: InMemoryUserRepo
    ) -> None:
        user_repo.add(make_rider(id=70, email='r70@test.com', rider_status=RiderStatus.PENDING))

        approved = await review.execute(rider_id=70, decision=ReviewDecision.APPROVE)

        assert approved.rider_status == RiderStatus.APPROVED
        assert approved.can_claim_orders() is True

    @pytest.mark.asyncio
    async def test_reject_needs_reason_and_pending(
        self, review: ReviewRiderUseCase, user_repo: InMemoryUserRepo
    ) -> None:
        user_repo.add(make_rider(id=71, email='r71@test.com', rider_status=RiderStatus.PENDING))

        with pytest.raises(ValidationFailedError):
            await review.execute(rider_id=71, decision=ReviewDecision.REJECT)
        rejected = await review.execute(
            rider_id=71, decision=ReviewDecision.REJECT, reason='Blurry CNIC'
        )
        assert rejected.status_reason == 'Blurry CNIC'

        # An approved rider can be banned but not rejected
        with pytest.raises(InvalidStateError):
            await review.execute(rider_id=RIDER_ID, decision=ReviewDecision.REJECT, reason='late')

    @pytest.mark.asyncio
    async def test_banned_is_terminal(self, review: ReviewRiderUseCase) -> None:
        await review.execute(rider_id=RIDER_ID, decision=ReviewDecision.BAN, reason='Fraud')

        with pytest.raises(InvalidStateError):
            await review.execute(rider_id=RIDER_ID, decision=ReviewDecision.APPROVE)

    @pytest.mark.asyncio
    async def test_block_and_unblock(
        self, user_repo: InMemoryUserRepo, security_event_repo: InMemorySecurityEventRepo
    ) -> None:
        use_case = BlockUserUseCase(
            user_query_repo=user_repo,
            user_command_repo=user_repo,
            security_event_repo=security_event_repo,
        )

        blocked = await use_case.block(user_id=SENDER_ID, reason='Chargeback abuse')
        assert blocked.is_blocked is True
        assert blocked.blocked_reason == 'Chargeback abuse'

        unblocked = await use_case.unblock(user_id=SENDER_ID)
        assert unblocked.is_blocked is False
        assert unblocked.login_attempts == 0

        with pytest.raises(ValidationFailedError):
            await use_case.block(user_id=SENDER_ID, reason='  ')
        assert security_event_repo.actions() == [
            SecurityAction.USER_BLOCKED,
            SecurityAction.USER_UNBLOCKED,
        ]
