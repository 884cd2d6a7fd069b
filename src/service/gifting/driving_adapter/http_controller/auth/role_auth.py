from fastapi import Depends

from src.platform.exception.exceptions import ForbiddenError
from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.driving_adapter.http_controller.user_controller import (
    get_current_user as get_user_from_controller,
)


class RoleAuthStrategy:
    @staticmethod
    def is_sender(user: UserEntity) -> bool:
        return user.is_sender

    @staticmethod
    def is_rider(user: UserEntity) -> bool:
        return user.is_rider

    @staticmethod
    def is_admin(user: UserEntity) -> bool:
        return user.is_admin


async def get_current_user(
    current_user: UserEntity = Depends(get_user_from_controller),
) -> UserEntity:
    return current_user


async def require_sender(
    current_user: UserEntity = Depends(get_user_from_controller),
) -> UserEntity:
    if not RoleAuthStrategy.is_sender(current_user):
        raise ForbiddenError('Only senders can perform this action')
    return current_user


async def require_rider(
    current_user: UserEntity = Depends(get_user_from_controller),
) -> UserEntity:
    if not RoleAuthStrategy.is_rider(current_user):
        raise ForbiddenError('Only riders can perform this action')
    return current_user


async def require_admin(
    current_user: UserEntity = Depends(get_user_from_controller),
) -> UserEntity:
    if not RoleAuthStrategy.is_admin(current_user):
        raise ForbiddenError('Only admins can perform this action')
    return current_user
