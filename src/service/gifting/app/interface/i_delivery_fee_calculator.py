from abc import ABC, abstractmethod
from decimal import Decimal


class IDeliveryFeeCalculator(ABC):
    @abstractmethod
    def compute_delivery_fee(self, *, origin_city: str | None, destination_city: str) -> Decimal:
        pass
