"""
Order Command Repository Interface

Writes to gift orders. Every state change is conditional on the stored row
still matching what the caller read, so concurrent writers cannot overwrite
each other.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from src.service.gifting.domain.entity.gift_order_entity import GiftOrder


class IOrderCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, order: GiftOrder) -> GiftOrder:
        pass

    @abstractmethod
    async def get_by_id(self, *, order_id: UUID) -> GiftOrder | None:
        """Read the current row (used to check preconditions before a write)."""
        pass

    @abstractmethod
    async def claim(
        self, *, order_id: UUID, rider_id: int, rider_name: str, rider_phone: str
    ) -> GiftOrder | None:
        """
        Atomically assign a rider to a pending, unassigned order.

        Returns:
            The accepted order, or None when the order was not pending and
            unassigned at write time (including when it does not exist)
        """
        pass

    @abstractmethod
    async def compare_and_swap(self, *, current: GiftOrder, updated: GiftOrder) -> GiftOrder | None:
        """
        Persist `updated` only if the stored status, payment status, rider and
        rating still equal those of `current`.

        Returns:
            The stored order, or None when the row changed since it was read
        """
        pass
