from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.security_audit import record_security_event
from src.service.gifting.app.interface.i_security_event_repo import ISecurityEventRepo
from src.service.gifting.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.gifting.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.domain.enum.safety_enum import SecurityAction, SecuritySeverity


class BlockUserUseCase:
    """Admin blocks or unblocks an account; independent of rider review status."""

    def __init__(
        self,
        *,
        user_query_repo: IUserQueryRepo,
        user_command_repo: IUserCommandRepo,
        security_event_repo: ISecurityEventRepo,
    ) -> None:
        self.user_query_repo = user_query_repo
        self.user_command_repo = user_command_repo
        self.security_event_repo = security_event_repo

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        security_event_repo: ISecurityEventRepo = Depends(
            Provide[Container.security_event_repo]
        ),
    ) -> Self:
        return cls(
            user_query_repo=user_query_repo,
            user_command_repo=user_command_repo,
            security_event_repo=security_event_repo,
        )

    async def _load(self, user_id: int) -> UserEntity:
        user = await self.user_query_repo.get_by_id(user_id=user_id)
        if not user:
            raise NotFoundError('User not found')
        return user

    @Logger.io
    async def block(self, *, user_id: int, reason: str) -> UserEntity:
        user = await self._load(user_id)
        blocked = await self.user_command_repo.update(user=user.block(reason=reason))
        await record_security_event(
            self.security_event_repo,
            user_id=user_id,
            action=SecurityAction.USER_BLOCKED,
            details=f'User blocked: {blocked.blocked_reason}',
            severity=SecuritySeverity.HIGH,
        )
        return blocked

    @Logger.io
    async def unblock(self, *, user_id: int) -> UserEntity:
        user = await self._load(user_id)
        unblocked = await self.user_command_repo.update(user=user.unblock())
        await record_security_event(
            self.security_event_repo,
            user_id=user_id,
            action=SecurityAction.USER_UNBLOCKED,
            details='User unblocked',
            severity=SecuritySeverity.MEDIUM,
        )
        return unblocked
