from abc import ABC, abstractmethod

from src.service.gifting.domain.entity.user_entity import UserEntity


class IUserQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, user_id: int) -> UserEntity | None:
        pass

    @abstractmethod
    async def get_by_email(self, *, email: str) -> UserEntity | None:
        pass
