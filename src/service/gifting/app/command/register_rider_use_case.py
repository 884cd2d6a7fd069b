from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotEligibleError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_media_storage import IMediaStorage
from src.service.gifting.app.interface.i_otp_verification_repo import IOtpVerificationRepo
from src.service.gifting.app.interface.i_password_hasher import IPasswordHasher
from src.service.gifting.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.gifting.domain.entity.user_entity import UserEntity, validate_password


class RegisterRiderUseCase:
    """
    Create a rider account behind a verified OTP.

    The OTP must be verified and bound to the rider's phone, email and CNIC
    together. The account starts in review and cannot sign in until an
    admin approves it. The OTP is consumed on success.
    """

    def __init__(
        self,
        *,
        user_command_repo: IUserCommandRepo,
        otp_verification_repo: IOtpVerificationRepo,
        password_hasher: IPasswordHasher,
        media_storage: IMediaStorage,
    ) -> None:
        self.user_command_repo = user_command_repo
        self.otp_verification_repo = otp_verification_repo
        self.password_hasher = password_hasher
        self.media_storage = media_storage

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        otp_verification_repo: IOtpVerificationRepo = Depends(
            Provide[Container.otp_verification_repo]
        ),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
        media_storage: IMediaStorage = Depends(Provide[Container.media_storage]),
    ) -> Self:
        return cls(
            user_command_repo=user_command_repo,
            otp_verification_repo=otp_verification_repo,
            password_hasher=password_hasher,
            media_storage=media_storage,
        )

    @Logger.io
    async def execute(
        self,
        *,
        email: str,
        password: SecretStr,
        full_name: str,
        phone_number: str,
        cnic: str,
        city: str,
        otp_id: UUID,
        profile_image: Optional[bytes] = None,
    ) -> UserEntity:
        validate_password(password.get_secret_value())
        rider = UserEntity.create_rider(
            email=email,
            full_name=full_name,
            phone_number=phone_number,
            hashed_password=self.password_hasher.hash_password(plain_password=password),
            cnic=cnic,
            city=city,
        )

        otp = await self.otp_verification_repo.get_by_id(otp_id=otp_id)
        if not otp or not otp.proves_contact(
            phone_number=phone_number, email=email, cnic_number=cnic
        ):
            raise NotEligibleError(
                'Phone number, email and CNIC must be verified with an OTP before registering'
            )

        rider = await self.user_command_repo.create(user=rider)

        if profile_image:
            url = await self.media_storage.store(
                data=profile_image, content_type='image/jpeg', path=f'profile_images/{rider.id}.jpg'
            )
            rider.profile_image_url = url
            rider = await self.user_command_repo.update(user=rider)

        await self.otp_verification_repo.delete(otp_id=otp_id)
        return rider
