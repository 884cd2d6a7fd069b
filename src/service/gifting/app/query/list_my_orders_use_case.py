from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.gifting.domain.entity.gift_order_entity import GiftOrder
from src.service.gifting.domain.entity.user_entity import UserEntity


class ListMyOrdersUseCase:
    """Orders a sender placed, or orders a rider has taken, newest first."""

    def __init__(self, *, order_query_repo: IOrderQueryRepo) -> None:
        self.order_query_repo = order_query_repo

    @classmethod
    @inject
    def depends(
        cls, order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo])
    ) -> Self:
        return cls(order_query_repo=order_query_repo)

    @Logger.io
    async def execute(self, *, user: UserEntity) -> list[GiftOrder]:
        if user.is_rider:
            return await self.order_query_repo.list_by_rider(rider_id=user.id or 0)
        return await self.order_query_repo.list_by_sender(sender_id=user.id or 0)
