from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ValidationFailedError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.order_transition import load_order, persist_order_transition
from src.service.gifting.app.interface.i_media_storage import IMediaStorage
from src.service.gifting.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.gifting.domain.entity.gift_order_entity import GiftOrder


class AttachReactionVideoUseCase:
    """Assigned rider uploads the receiver's reaction, when the sender asked for one."""

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
    async def execute(self, *, order_id: UUID, rider_id: int, video: bytes) -> GiftOrder:
        if not video:
            raise ValidationFailedError('video', 'Video data is required')

        order = await load_order(self.order_command_repo, order_id)
        order.check_can_attach_reaction_video(rider_id=rider_id)

        url = await self.media_storage.store(
            data=video, content_type='video/mp4', path=f'reaction_videos/{order.id}.mp4'
        )
        return await persist_order_transition(
            self.order_command_repo,
            transition='attach_reaction_video',
            current=order,
            updated=order.attach_reaction_video(rider_id=rider_id, url=url),
            replay=lambda fresh: fresh.attach_reaction_video(rider_id=rider_id, url=url),
        )
