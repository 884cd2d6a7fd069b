from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import LoginError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.security_audit import record_security_event
from src.service.gifting.app.interface.i_password_hasher import IPasswordHasher
from src.service.gifting.app.interface.i_security_event_repo import ISecurityEventRepo
from src.service.gifting.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.gifting.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.gifting.domain.entity.user_entity import (
    TOO_MANY_LOGIN_ATTEMPTS_REASON,
    UserEntity,
)
from src.service.gifting.domain.enum.safety_enum import SecurityAction, SecuritySeverity


class SignInUseCase:
    """
    Password sign-in with lockout.

    A wrong password costs one attempt; at `MAX_LOGIN_ATTEMPTS` the account is
    blocked. Blocked accounts and riders that are pending, rejected or banned
    are refused even with the right password. Every wrong password, and the
    lockout it may trigger, is written to the security audit trail.
    """

    def __init__(
        self,
        *,
        user_query_repo: IUserQueryRepo,
        user_command_repo: IUserCommandRepo,
        password_hasher: IPasswordHasher,
        security_event_repo: ISecurityEventRepo,
        max_login_attempts: int = settings.MAX_LOGIN_ATTEMPTS,
    ) -> None:
        self.user_query_repo = user_query_repo
        self.user_command_repo = user_command_repo
        self.password_hasher = password_hasher
        self.security_event_repo = security_event_repo
        self.max_login_attempts = max_login_attempts

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
        security_event_repo: ISecurityEventRepo = Depends(
            Provide[Container.security_event_repo]
        ),
    ) -> Self:
        return cls(
            user_query_repo=user_query_repo,
            user_command_repo=user_command_repo,
            password_hasher=password_hasher,
            security_event_repo=security_event_repo,
        )

    @Logger.io
    async def execute(self, *, email: str, password: SecretStr) -> UserEntity:
        user = await self.user_query_repo.get_by_email(email=email.strip().lower())
        if not user or user.id is None:
            raise LoginError('LOGIN_BAD_CREDENTIALS')

        # Blocked accounts are refused before the password is checked
        if user.is_blocked:
            user.ensure_can_sign_in()

        if not self.password_hasher.verify_password(
            plain_password=password, hashed_password=user.hashed_password
        ):
            updated = await self.user_command_repo.register_failed_login(
                user_id=user.id,
                max_attempts=self.max_login_attempts,
                block_reason=TOO_MANY_LOGIN_ATTEMPTS_REASON,
            )
            if updated and updated.is_blocked:
                await record_security_event(
                    self.security_event_repo,
                    user_id=user.id,
                    action=SecurityAction.ACCOUNT_LOCKED,
                    details=f'Account locked after {updated.login_attempts} failed sign-ins',
                    severity=SecuritySeverity.HIGH,
                )
                updated.ensure_can_sign_in()
            await record_security_event(
                self.security_event_repo,
                user_id=user.id,
                action=SecurityAction.LOGIN_FAILED,
                details='Wrong password',
                severity=SecuritySeverity.LOW,
            )
            raise LoginError('LOGIN_BAD_CREDENTIALS')

        user.ensure_can_sign_in()
        return await self.user_command_repo.update(user=user.record_successful_login())
