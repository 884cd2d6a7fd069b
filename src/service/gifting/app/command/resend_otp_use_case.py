from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.generate_otp_use_case import GenerateOtpUseCase
from src.service.gifting.app.interface.i_otp_verification_repo import IOtpVerificationRepo
from src.service.gifting.domain.entity.otp_verification_entity import OtpVerification


class ResendOtpUseCase:
    """Replace an OTP with a fresh code for the same channels; the old record is deleted."""

    def __init__(
        self, *, otp_verification_repo: IOtpVerificationRepo, generate_otp: GenerateOtpUseCase
    ) -> None:
        self.otp_verification_repo = otp_verification_repo
        self.generate_otp = generate_otp

    @classmethod
    @inject
    def depends(
        cls,
        otp_verification_repo: IOtpVerificationRepo = Depends(
            Provide[Container.otp_verification_repo]
        ),
        generate_otp: GenerateOtpUseCase = Depends(GenerateOtpUseCase.depends),
    ) -> Self:
        return cls(otp_verification_repo=otp_verification_repo, generate_otp=generate_otp)

    @Logger.io
    async def execute(self, *, otp_id: UUID) -> OtpVerification:
        current = await self.otp_verification_repo.get_by_id(otp_id=otp_id)
        if not current:
            raise NotFoundError('OTP not found')

        await self.otp_verification_repo.delete(otp_id=otp_id)
        return await self.generate_otp.issue(
            bundle=current.bundle, otp_type=current.otp_type, user_id=current.user_id
        )
