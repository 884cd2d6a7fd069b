from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.platform.exception.exceptions import (
    AttemptsExhaustedError,
    ExpiredError,
    InvalidStateError,
    NotFoundError,
    ValidationFailedError,
)
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.generate_otp_use_case import GenerateOtpUseCase
from src.service.gifting.app.command.resend_otp_use_case import ResendOtpUseCase
from src.service.gifting.app.command.verify_otp_use_case import VerifyOtpUseCase
from src.service.gifting.domain.enum.otp_enum import OtpStatus
from src.service.gifting.driving_adapter.http_controller.schema.otp_schema import (
    OtpGenerateRequest,
    OtpResponse,
    OtpVerifyRequest,
)


router = APIRouter()


@router.post('', response_model=OtpResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def generate_otp(
    request: OtpGenerateRequest,
    use_case: GenerateOtpUseCase = Depends(GenerateOtpUseCase.depends),
) -> OtpResponse:
    otp = await use_case.execute(
        otp_type=request.otp_type,
        phone_number=request.phone_number,
        cnic_number=request.cnic_number,
        email=request.email,
    )
    return OtpResponse.from_entity(otp)


@router.post('/{otp_id}/verify', response_model=OtpResponse)
@Logger.io
async def verify_otp(
    otp_id: UUID,
    request: OtpVerifyRequest,
    use_case: VerifyOtpUseCase = Depends(VerifyOtpUseCase.depends),
) -> OtpResponse:
    check = await use_case.execute(otp_id=otp_id, code=request.code)
    if check is None:
        raise NotFoundError('OTP not found')
    if check.verified:
        return OtpResponse.from_entity(check.otp)

    otp = check.otp
    if otp.status == OtpStatus.EXPIRED:
        raise ExpiredError('OTP has expired. Please request a new code')
    if otp.status == OtpStatus.FAILED:
        raise AttemptsExhaustedError('Maximum verification attempts exceeded. Please request a new code')
    if otp.status == OtpStatus.VERIFIED:
        raise InvalidStateError(otp.status, 'verify')
    raise ValidationFailedError(
        'code', f'Invalid OTP. {otp.remaining_attempts} attempts remaining'
    )


@router.post('/{otp_id}/resend', response_model=OtpResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def resend_otp(
    otp_id: UUID,
    use_case: ResendOtpUseCase = Depends(ResendOtpUseCase.depends),
) -> OtpResponse:
    return OtpResponse.from_entity(await use_case.execute(otp_id=otp_id))
