from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.order_transition import load_order, persist_order_transition
from src.service.gifting.app.interface.i_media_storage import IMediaStorage
from src.service.gifting.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.gifting.domain.entity.gift_order_entity import GiftOrder


class ConfirmPaymentUseCase:
    """Sender confirms payment of the purchased gift; the order goes in transit."""

    def __init__(self, *, order_command_repo: IOrderCommandRepo, media_storage: IMediaStorage) -> None:
        self.order_command_repo = order_command_repo
        self.media_storage = media_storage

    @classmethod
    @inject
    def depends(
        cls,
        order_command_repo: IOrderCommandRepo = Depends(Provide[Container.order_command_repo]),
        media_storage: IMediaStorage = Depends(Provide[Container.media_storage]),
    ) -> Self:
        return cls(order_command_repo=order_command_repo, media_storage=media_storage)

    @Logger.io
    async def execute(
        self,
        *,
        order_id: UUID,
        sender_id: int,
        payment_method: str,
        payment_proof: Optional[bytes] = None,
    ) -> GiftOrder:
        order = await load_order(self.order_command_repo, order_id)
        paid = order.confirm_payment(sender_id=sender_id, payment_method=payment_method)

        if payment_proof:
            url = await self.media_storage.store(
                data=payment_proof, content_type='image/jpeg', path=f'payment_proofs/{order.id}.jpg'
            )
            paid = paid.with_payment_proof(url)

        return await persist_order_transition(
            self.order_command_repo,
            transition='confirm_payment',
            current=order,
            updated=paid,
            replay=lambda fresh: fresh.confirm_payment(
                sender_id=sender_id, payment_method=payment_method
            ),
        )
