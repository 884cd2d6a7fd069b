from abc import ABC, abstractmethod
from uuid import UUID

from src.service.gifting.domain.entity.gift_order_entity import GiftOrder


class IOrderQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, order_id: UUID) -> GiftOrder | None:
        pass

    @abstractmethod
    async def list_pending_by_city(self, *, city: str) -> list[GiftOrder]:
        """Pending orders whose receiver city matches (case-insensitive), newest first."""
        pass

    @abstractmethod
    async def list_pending(self) -> list[GiftOrder]:
        """All pending orders, newest first."""
        pass

    @abstractmethod
    async def list_by_sender(self, *, sender_id: int) -> list[GiftOrder]:
        pass

    @abstractmethod
    async def list_by_rider(self, *, rider_id: int) -> list[GiftOrder]:
        pass

    @abstractmethod
    async def list_ratings_for_rider(self, *, rider_id: int) -> list[int]:
        """Ratings of the rider's delivered orders that carry a rating."""
        pass
