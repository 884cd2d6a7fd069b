from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.order_transition import load_order, persist_order_transition
from src.service.gifting.app.command.recompute_rider_reputation_use_case import (
    RecomputeRiderReputationUseCase,
)
from src.service.gifting.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.gifting.domain.entity.gift_order_entity import GiftOrder


class RateOrderUseCase:
    """
    Sender rates a delivered order once, then the rider's reputation is rebuilt.

    The rating is kept even if the reputation recompute fails; that failure is
    logged and can be retried through the admin reputation endpoint.
    """

    def __init__(
        self,
        *,
        order_command_repo: IOrderCommandRepo,
        recompute_reputation: RecomputeRiderReputationUseCase,
    ) -> None:
        self.order_command_repo = order_command_repo
        self.recompute_reputation = recompute_reputation

    @classmethod
    @inject
    def depends(
        cls,
        order_command_repo: IOrderCommandRepo = Depends(Provide[Container.order_command_repo]),
        recompute_reputation: RecomputeRiderReputationUseCase = Depends(
            RecomputeRiderReputationUseCase.depends
        ),
    ) -> Self:
        return cls(order_command_repo=order_command_repo, recompute_reputation=recompute_reputation)

    @Logger.io
    async def execute(
        self, *, order_id: UUID, sender_id: int, rating: int, review: Optional[str] = None
    ) -> GiftOrder:
        order = await load_order(self.order_command_repo, order_id)
        rated = await persist_order_transition(
            self.order_command_repo,
            transition='rate_order',
            current=order,
            updated=order.rate(sender_id=sender_id, rating=rating, review=review),
            replay=lambda fresh: fresh.rate(sender_id=sender_id, rating=rating, review=review),
        )

        if rated.rider_id is not None:
            try:
                await self.recompute_reputation.execute(rider_id=rated.rider_id)
            except Exception as e:
                Logger.base.error(
                    f'⚠️  [Reputation] recompute failed for rider {rated.rider_id} '
                    f'after rating order {rated.id}: {type(e).__name__}: {e}'
                )
        return rated
