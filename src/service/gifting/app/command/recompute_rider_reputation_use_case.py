from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.gifting.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.gifting.domain.entity.user_entity import UserEntity, compute_reputation


class RecomputeRiderReputationUseCase:
    """
    Rebuild a rider's average rating and delivery count from their rated orders.

    Always a full recompute from stored orders, so running it twice (or after
    a failed earlier run) converges on the same numbers.
    """

    def __init__(
        self, *, order_query_repo: IOrderQueryRepo, user_command_repo: IUserCommandRepo
    ) -> None:
        self.order_query_repo = order_query_repo
        self.user_command_repo = user_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo]),
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
    ) -> Self:
        return cls(order_query_repo=order_query_repo, user_command_repo=user_command_repo)

    @Logger.io
    async def execute(self, *, rider_id: int) -> UserEntity:
        ratings = await self.order_query_repo.list_ratings_for_rider(rider_id=rider_id)
        average_rating, total_deliveries = compute_reputation(ratings)

        rider = await self.user_command_repo.update_reputation(
            rider_id=rider_id, average_rating=average_rating, total_deliveries=total_deliveries
        )
        if not rider:
            raise NotFoundError('Rider not found')
        return rider
