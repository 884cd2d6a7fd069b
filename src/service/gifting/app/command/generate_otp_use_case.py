from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils.compat import uuid7

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_notification_sender import INotificationSender
from src.service.gifting.app.interface.i_otp_verification_repo import IOtpVerificationRepo
from src.service.gifting.domain.entity.otp_verification_entity import (
    ContactBundle,
    OtpVerification,
)
from src.service.gifting.domain.enum.otp_enum import OtpType


OTP_EMAIL_SUBJECT = 'Gift Wave - OTP Verification'


class GenerateOtpUseCase:
    """
    Issue a one-time code for a contact bundle and send it out.

    Only one pending code exists per bundle and type: issuing a new one
    removes the previous pending record. Delivery problems are logged and do
    not fail the request; the caller can ask for a resend.
    """

    def __init__(
        self,
        *,
        otp_verification_repo: IOtpVerificationRepo,
        notification_sender: INotificationSender,
        code_length: int = settings.OTP_LENGTH,
        ttl_minutes: int = settings.OTP_TTL_MINUTES,
        max_attempts: int = settings.OTP_MAX_ATTEMPTS,
    ) -> None:
        self.otp_verification_repo = otp_verification_repo
        self.notification_sender = notification_sender
        self.code_length = code_length
        self.ttl_minutes = ttl_minutes
        self.max_attempts = max_attempts

    @classmethod
    @inject
    def depends(
        cls,
        otp_verification_repo: IOtpVerificationRepo = Depends(
            Provide[Container.otp_verification_repo]
        ),
        notification_sender: INotificationSender = Depends(
            Provide[Container.notification_sender]
        ),
    ) -> Self:
        return cls(
            otp_verification_repo=otp_verification_repo, notification_sender=notification_sender
        )

    @Logger.io
    async def execute(
        self,
        *,
        otp_type: OtpType,
        phone_number: Optional[str] = None,
        cnic_number: Optional[str] = None,
        email: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> OtpVerification:
        bundle = ContactBundle.normalized(
            phone_number=phone_number, cnic_number=cnic_number, email=email
        )
        return await self.issue(bundle=bundle, otp_type=otp_type, user_id=user_id)

    @Logger.io
    async def issue(
        self, *, bundle: ContactBundle, otp_type: OtpType, user_id: Optional[int] = None
    ) -> OtpVerification:
        await self.otp_verification_repo.delete_pending_for_bundle(bundle=bundle, otp_type=otp_type)

        otp = OtpVerification.create(
            id=uuid7(),
            bundle=bundle,
            otp_type=otp_type,
            code_length=self.code_length,
            ttl_minutes=self.ttl_minutes,
            max_attempts=self.max_attempts,
            user_id=user_id,
        )
        otp = await self.otp_verification_repo.create(otp=otp)
        await self._dispatch(otp)
        return otp

    async def _dispatch(self, otp: OtpVerification) -> None:
        message = otp.message_text(ttl_minutes=self.ttl_minutes)
        try:
            if otp.phone_number:
                await self.notification_sender.send_sms(
                    phone_number=f'+92{otp.phone_number}', message=message
                )
            if otp.email:
                await self.notification_sender.send_email(
                    email=otp.email, subject=OTP_EMAIL_SUBJECT, body=message
                )
        except Exception as e:
            Logger.base.error(f'📭 [OTP] dispatch failed for {otp.id}: {type(e).__name__}: {e}')
