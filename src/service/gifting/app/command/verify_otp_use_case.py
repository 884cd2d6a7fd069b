from typing import Self
from uuid import UUID

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.gifting_metrics import metrics
from src.service.gifting.app.interface.i_otp_verification_repo import IOtpVerificationRepo
from src.service.gifting.domain.entity.otp_verification_entity import OtpVerification
from src.service.gifting.domain.enum.otp_enum import OtpStatus


@attrs.frozen
class OtpCheck:
    otp: OtpVerification
    verified: bool

    @property
    def outcome(self) -> str:
        if self.verified:
            return 'verified'
        return {
            OtpStatus.PENDING: 'invalid_code',
            OtpStatus.EXPIRED: 'expired',
            OtpStatus.FAILED: 'failed',
        }.get(self.otp.status, 'not_pending')


class VerifyOtpUseCase:
    """
    Check a submitted code against a pending OTP.

    Order of checks: expiry, attempt cap, then the code itself. A wrong code
    costs one attempt; the record fails once the cap is reached. Verification
    only ever succeeds once per record.
    """

    def __init__(self, *, otp_verification_repo: IOtpVerificationRepo) -> None:
        self.otp_verification_repo = otp_verification_repo

    @classmethod
    @inject
    def depends(
        cls,
        otp_verification_repo: IOtpVerificationRepo = Depends(
            Provide[Container.otp_verification_repo]
        ),
    ) -> Self:
        return cls(otp_verification_repo=otp_verification_repo)

    async def verify(self, *, otp_id: UUID, code: str) -> bool:
        check = await self.execute(otp_id=otp_id, code=code)
        return check is not None and check.verified

    @Logger.io
    async def execute(self, *, otp_id: UUID, code: str) -> OtpCheck | None:
        """
        Returns:
            None when no such OTP exists, otherwise the record as stored after
            this attempt and whether this attempt verified it
        """
        check = await self._check(otp_id=otp_id, code=code)
        if check is not None:
            metrics.record_otp_verification(outcome=check.outcome)
        return check

    async def _check(self, *, otp_id: UUID, code: str) -> OtpCheck | None:
        otp = await self.otp_verification_repo.get_by_id(otp_id=otp_id)
        if not otp:
            return None
        if otp.status != OtpStatus.PENDING:
            return OtpCheck(otp=otp, verified=False)

        if otp.is_expired():
            return await self._settle(otp, OtpStatus.EXPIRED, verified=False)
        if otp.is_exhausted():
            return await self._settle(otp, OtpStatus.FAILED, verified=False)
        if otp.matches_code(code):
            return await self._settle(otp, OtpStatus.VERIFIED, verified=True)

        updated = await self.otp_verification_repo.register_failed_attempt(otp_id=otp_id)
        return OtpCheck(otp=updated or await self._reload(otp), verified=False)

    async def _settle(self, otp: OtpVerification, status: OtpStatus, *, verified: bool) -> OtpCheck:
        updated = await self.otp_verification_repo.transition_status(otp=otp, status=status)
        if updated:
            return OtpCheck(otp=updated, verified=verified)
        # Another request settled it first
        return OtpCheck(otp=await self._reload(otp), verified=False)

    async def _reload(self, otp: OtpVerification) -> OtpVerification:
        return await self.otp_verification_repo.get_by_id(otp_id=otp.id) or otp
