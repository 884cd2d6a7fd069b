from typing import Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.security_audit import record_security_event
from src.service.gifting.app.interface.i_media_storage import IMediaStorage
from src.service.gifting.app.interface.i_security_event_repo import ISecurityEventRepo
from src.service.gifting.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.domain.enum.safety_enum import SecurityAction, SecuritySeverity


class UpdateProfileUseCase:
    """
    Signed-in user edits name, phone, city and profile photo.

    Only those columns are written, so a concurrent block or lockout on the
    same account is never undone by a profile save.
    """

    def __init__(
        self,
        *,
        user_command_repo: IUserCommandRepo,
        media_storage: IMediaStorage,
        security_event_repo: ISecurityEventRepo,
    ) -> None:
        self.user_command_repo = user_command_repo
        self.media_storage = media_storage
        self.security_event_repo = security_event_repo

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        media_storage: IMediaStorage = Depends(Provide[Container.media_storage]),
        security_event_repo: ISecurityEventRepo = Depends(
            Provide[Container.security_event_repo]
        ),
    ) -> Self:
        return cls(
            user_command_repo=user_command_repo,
            media_storage=media_storage,
            security_event_repo=security_event_repo,
        )

    @Logger.io
    async def execute(
        self,
        *,
        user: UserEntity,
        full_name: str,
        phone_number: str,
        city: Optional[str] = None,
        profile_image: Optional[bytes] = None,
    ) -> UserEntity:
        updated = user.update_profile(full_name=full_name, phone_number=phone_number, city=city)

        if profile_image:
            url = await self.media_storage.store(
                data=profile_image, content_type='image/jpeg', path=f'profile_images/{user.id}.jpg'
            )
            updated = attrs.evolve(updated, profile_image_url=url)

        saved = await self.user_command_repo.update_profile(user=updated)
        if not saved:
            raise NotFoundError('User not found')

        if saved.phone_number != user.phone_number:
            await record_security_event(
                self.security_event_repo,
                user_id=user.id,
                action=SecurityAction.PROFILE_UPDATED,
                details='Phone number changed; verification reset',
                severity=SecuritySeverity.LOW,
            )
        return saved
