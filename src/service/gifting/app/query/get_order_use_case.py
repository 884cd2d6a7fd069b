from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.gifting.domain.entity.gift_order_entity import GiftOrder
from src.service.gifting.domain.entity.user_entity import UserEntity


class GetOrderUseCase:
    def __init__(self, *, order_query_repo: IOrderQueryRepo) -> None:
        self.order_query_repo = order_query_repo

    @classmethod
    @inject
    def depends(
        cls, order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo])
    ) -> Self:
        return cls(order_query_repo=order_query_repo)

    @Logger.io
    async def execute(self, *, order_id: UUID, viewer: UserEntity) -> GiftOrder:
        order = await self.order_query_repo.get_by_id(order_id=order_id)
        if not order:
            raise NotFoundError('Order not found')
        if viewer.is_admin or order.is_visible_to(user_id=viewer.id or 0, is_rider=viewer.is_rider):
            return order
        raise ForbiddenError('You do not have access to this order')
