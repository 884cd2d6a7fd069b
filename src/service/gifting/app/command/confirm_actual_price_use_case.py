from decimal import Decimal
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


class ConfirmActualPriceUseCase:
    """Assigned rider records what the gift really cost; the order moves to purchased."""

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
        rider_id: int,
        actual_price: Decimal,
        receipt_image: Optional[bytes] = None,
    ) -> GiftOrder:
        order = await load_order(self.order_command_repo, order_id)
        purchased = order.confirm_actual_price(rider_id=rider_id, actual_price=actual_price)

        if receipt_image:
            url = await self.media_storage.store(
                data=receipt_image, content_type='image/jpeg', path=f'receipt_images/{order.id}.jpg'
            )
            purchased = purchased.with_receipt_image(url)

        return await persist_order_transition(
            self.order_command_repo,
            transition='confirm_actual_price',
            current=order,
            updated=purchased,
            replay=lambda fresh: fresh.confirm_actual_price(
                rider_id=rider_id, actual_price=actual_price
            ),
        )
