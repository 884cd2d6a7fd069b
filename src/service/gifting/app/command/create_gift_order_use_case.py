from decimal import Decimal
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils.compat import uuid7

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.gifting_metrics import metrics
from src.service.gifting.app.interface.i_delivery_fee_calculator import IDeliveryFeeCalculator
from src.service.gifting.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.gifting.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.gifting.domain.entity.gift_order_entity import GiftOrder
from src.service.gifting.domain.value_object.geo_point import GeoPoint


class CreateGiftOrderUseCase:
    """
    Place a new gift order on behalf of a sender.

    The sender snapshot (name, phone) is taken from the stored account so the
    order keeps it even if the profile changes later. The delivery fee is always
    priced by the injected fee calculator and fixed at creation.
    """

    def __init__(
        self,
        *,
        order_command_repo: IOrderCommandRepo,
        user_query_repo: IUserQueryRepo,
        delivery_fee_calculator: IDeliveryFeeCalculator,
    ) -> None:
        self.order_command_repo = order_command_repo
        self.user_query_repo = user_query_repo
        self.delivery_fee_calculator = delivery_fee_calculator
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        order_command_repo: IOrderCommandRepo = Depends(Provide[Container.order_command_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        delivery_fee_calculator: IDeliveryFeeCalculator = Depends(
            Provide[Container.delivery_fee_calculator]
        ),
    ) -> Self:
        return cls(
            order_command_repo=order_command_repo,
            user_query_repo=user_query_repo,
            delivery_fee_calculator=delivery_fee_calculator,
        )

    @Logger.io
    async def execute(
        self,
        *,
        sender_id: int,
        gift_name: str,
        receiver_name: str,
        receiver_address: str,
        receiver_city: str,
        receiver_phone: str,
        sender_city: Optional[str] = None,
        product_link: Optional[str] = None,
        personal_message: Optional[str] = None,
        request_video: bool = False,
        estimated_product_price: Optional[Decimal] = None,
        tip: Optional[Decimal] = None,
        delivery_location: Optional[GeoPoint] = None,
    ) -> GiftOrder:
        with self.tracer.start_as_current_span(
            'use_case.create_gift_order',
            attributes={'sender.id': sender_id, 'receiver.city': receiver_city},
        ):
            sender = await self.user_query_repo.get_by_id(user_id=sender_id)
            if not sender:
                raise NotFoundError('Sender not found')
            if not sender.is_sender:
                raise ForbiddenError('Only senders can place gift orders')

            origin_city = sender_city or sender.city
            delivery_fee = self.delivery_fee_calculator.compute_delivery_fee(
                origin_city=origin_city, destination_city=receiver_city
            )

            order = GiftOrder.create(
                id=uuid7(),
                sender_id=sender_id,
                sender_name=sender.full_name,
                sender_phone=sender.phone_number,
                sender_city=origin_city,
                gift_name=gift_name,
                product_link=product_link,
                personal_message=personal_message,
                request_video=request_video,
                receiver_name=receiver_name,
                receiver_address=receiver_address,
                receiver_city=receiver_city,
                receiver_phone=receiver_phone,
                delivery_fee=delivery_fee,
                estimated_product_price=estimated_product_price,
                tip=tip,
                delivery_location=delivery_location,
            )
            order = await self.order_command_repo.create(order=order)

        metrics.record_order_created(receiver_city=order.receiver_city)
        return order
