from abc import ABC, abstractmethod
from decimal import Decimal

from src.service.gifting.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, user: UserEntity) -> UserEntity:
        """Raises ConflictError when the email is already registered."""
        pass

    @abstractmethod
    async def update(self, *, user: UserEntity) -> UserEntity:
        pass

    @abstractmethod
    async def update_profile(self, *, user: UserEntity) -> UserEntity | None:
        """Write only the self-service profile columns; returns None for an unknown id."""
        pass

    @abstractmethod
    async def register_failed_login(
        self, *, user_id: int, max_attempts: int, block_reason: str
    ) -> UserEntity | None:
        """
        Increment `login_attempts` in place and block the account in the same
        write once the count reaches `max_attempts`.
        """
        pass

    @abstractmethod
    async def update_reputation(
        self, *, rider_id: int, average_rating: Decimal, total_deliveries: int
    ) -> UserEntity | None:
        pass
