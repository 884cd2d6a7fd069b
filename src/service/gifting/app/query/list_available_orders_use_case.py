from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ValidationFailedError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.gifting.domain.entity.gift_order_entity import GiftOrder
from src.service.gifting.domain.value_object.geo_point import GeoPoint


class ListAvailableOrdersUseCase:
    """
    Pending orders a rider could pick up.

    With a rider position, every pending order within `radius_km` is returned,
    measured to the delivery location or, failing that, the receiver city's
    reference point. Orders with neither are left out. Without a position the
    rider's city is matched against the receiver city.
    """

    def __init__(
        self,
        *,
        order_query_repo: IOrderQueryRepo,
        default_radius_km: float = settings.DEFAULT_SEARCH_RADIUS_KM,
    ) -> None:
        self.order_query_repo = order_query_repo
        self.default_radius_km = default_radius_km

    @classmethod
    @inject
    def depends(
        cls, order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo])
    ) -> Self:
        return cls(order_query_repo=order_query_repo)

    @Logger.io
    async def execute(
        self,
        *,
        city: Optional[str] = None,
        near: Optional[GeoPoint] = None,
        radius_km: Optional[float] = None,
    ) -> list[GiftOrder]:
        if near is None:
            if not (city or '').strip():
                raise ValidationFailedError('city', 'City or current location is required')
            return await self.order_query_repo.list_pending_by_city(city=city.strip())  # type: ignore[union-attr]

        radius = self.default_radius_km if radius_km is None else radius_km
        if radius <= 0:
            raise ValidationFailedError('radius_km', 'Search radius must be positive')

        within_radius = []
        for order in await self.order_query_repo.list_pending():
            location = order.location_for_matching
            if location is not None and near.distance_km_to(location) <= radius:
                within_radius.append(order)
        return within_radius
