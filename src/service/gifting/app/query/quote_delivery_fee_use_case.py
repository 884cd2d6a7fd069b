from decimal import Decimal
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ValidationFailedError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_delivery_fee_calculator import IDeliveryFeeCalculator


class QuoteDeliveryFeeUseCase:
    def __init__(self, *, delivery_fee_calculator: IDeliveryFeeCalculator) -> None:
        self.delivery_fee_calculator = delivery_fee_calculator

    @classmethod
    @inject
    def depends(
        cls,
        delivery_fee_calculator: IDeliveryFeeCalculator = Depends(
            Provide[Container.delivery_fee_calculator]
        ),
    ) -> Self:
        return cls(delivery_fee_calculator=delivery_fee_calculator)

    @Logger.io
    def execute(self, *, origin_city: Optional[str], destination_city: str) -> Decimal:
        if not (destination_city or '').strip():
            raise ValidationFailedError('destination_city', 'Destination city is required')
        return self.delivery_fee_calculator.compute_delivery_fee(
            origin_city=origin_city, destination_city=destination_city.strip()
        )
