from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.gifting.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.domain.enum.user_enum import ReviewDecision


class ReviewRiderUseCase:
    """Admin approves, rejects or bans a rider application."""

    def __init__(
        self, *, user_query_repo: IUserQueryRepo, user_command_repo: IUserCommandRepo
    ) -> None:
        self.user_query_repo = user_query_repo
        self.user_command_repo = user_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
    ) -> Self:
        return cls(user_query_repo=user_query_repo, user_command_repo=user_command_repo)

    @Logger.io
    async def execute(
        self, *, rider_id: int, decision: ReviewDecision, reason: Optional[str] = None
    ) -> UserEntity:
        rider = await self.user_query_repo.get_by_id(user_id=rider_id)
        if not rider:
            raise NotFoundError('Rider not found')

        reviewed = rider.review(decision=decision, reason=reason)
        Logger.base.info(f'🛂 [Review] rider {rider_id}: {rider.rider_status} -> {reviewed.rider_status}')
        return await self.user_command_repo.update(user=reviewed)
