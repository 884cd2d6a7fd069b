from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import AuthenticationError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.gifting.domain.entity.user_entity import UserEntity


class GetSessionUserUseCase:
    """
    Resolve the account behind a session.

    The token only carries the user id; the account is re-read on every call so
    blocking or banning takes effect on the next request.
    """

    def __init__(self, *, user_query_repo: IUserQueryRepo) -> None:
        self.user_query_repo = user_query_repo

    @classmethod
    @inject
    def depends(
        cls, user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo])
    ) -> Self:
        return cls(user_query_repo=user_query_repo)

    @Logger.io
    async def execute(self, *, user_id: int) -> UserEntity:
        user = await self.user_query_repo.get_by_id(user_id=user_id)
        if not user:
            raise AuthenticationError('User not found')
        user.ensure_can_sign_in()
        return user
