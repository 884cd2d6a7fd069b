from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.order_transition import load_order, persist_order_transition
from src.service.gifting.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.gifting.domain.entity.gift_order_entity import GiftOrder


class CancelOrderUseCase:
    """
    Cancel an order before the gift is bought.

    Pending orders can be cancelled by their sender; accepted orders by the
    sender or the assigned rider. A pending order cancelled this way never
    gets a rider.
    """

    def __init__(self, *, order_command_repo: IOrderCommandRepo) -> None:
        self.order_command_repo = order_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        order_command_repo: IOrderCommandRepo = Depends(Provide[Container.order_command_repo]),
    ) -> Self:
        return cls(order_command_repo=order_command_repo)

    @Logger.io
    async def execute(self, *, order_id: UUID, actor_id: int) -> GiftOrder:
        order = await load_order(self.order_command_repo, order_id)
        return await persist_order_transition(
            self.order_command_repo,
            transition='cancel_order',
            current=order,
            updated=order.cancel(actor_id=actor_id),
            replay=lambda fresh: fresh.cancel(actor_id=actor_id),
        )
