from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_password_hasher import IPasswordHasher
from src.service.gifting.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.gifting.domain.entity.user_entity import UserEntity, validate_password


class SignUpSenderUseCase:
    def __init__(
        self, *, user_command_repo: IUserCommandRepo, password_hasher: IPasswordHasher
    ) -> None:
        self.user_command_repo = user_command_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(user_command_repo=user_command_repo, password_hasher=password_hasher)

    @Logger.io
    async def execute(
        self, *, email: str, password: SecretStr, full_name: str, phone_number: str
    ) -> UserEntity:
        validate_password(password.get_secret_value())
        user = UserEntity.create_sender(
            email=email,
            full_name=full_name,
            phone_number=phone_number,
            hashed_password=self.password_hasher.hash_password(plain_password=password),
        )
        return await self.user_command_repo.create(user=user)
