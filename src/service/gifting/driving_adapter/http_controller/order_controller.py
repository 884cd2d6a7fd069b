from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.platform.exception.exceptions import ValidationFailedError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.attach_gift_image_use_case import AttachGiftImageUseCase
from src.service.gifting.app.command.attach_reaction_video_use_case import (
    AttachReactionVideoUseCase,
)
from src.service.gifting.app.command.cancel_order_use_case import CancelOrderUseCase
from src.service.gifting.app.command.claim_order_use_case import ClaimOrderUseCase
from src.service.gifting.app.command.confirm_actual_price_use_case import (
    ConfirmActualPriceUseCase,
)
from src.service.gifting.app.command.confirm_payment_use_case import ConfirmPaymentUseCase
from src.service.gifting.app.command.create_gift_order_use_case import CreateGiftOrderUseCase
from src.service.gifting.app.command.mark_order_delivered_use_case import (
    MarkOrderDeliveredUseCase,
)
from src.service.gifting.app.command.rate_order_use_case import RateOrderUseCase
from src.service.gifting.app.query.get_order_use_case import GetOrderUseCase
from src.service.gifting.app.query.list_available_orders_use_case import (
    ListAvailableOrdersUseCase,
)
from src.service.gifting.app.query.list_my_orders_use_case import ListMyOrdersUseCase
from src.service.gifting.app.query.quote_delivery_fee_use_case import QuoteDeliveryFeeUseCase
from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.domain.value_object.geo_point import GeoPoint
from src.service.gifting.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_rider,
    require_sender,
)
from src.service.gifting.driving_adapter.http_controller.schema.order_schema import (
    ActualPriceRequest,
    DeliveryFeeResponse,
    GiftImageRequest,
    OrderCreateRequest,
    OrderResponse,
    PaymentConfirmRequest,
    RatingRequest,
    ReactionVideoRequest,
)


router = APIRouter()


@router.post('', response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_order(
    request: OrderCreateRequest,
    current_user: UserEntity = Depends(require_sender),
    use_case: CreateGiftOrderUseCase = Depends(CreateGiftOrderUseCase.depends),
) -> OrderResponse:
    location = request.delivery_location
    order = await use_case.execute(
        sender_id=current_user.id or 0,
        gift_name=request.gift_name,
        receiver_name=request.receiver_name,
        receiver_address=request.receiver_address,
        receiver_city=request.receiver_city,
        receiver_phone=request.receiver_phone,
        sender_city=request.sender_city,
        product_link=request.product_link,
        personal_message=request.personal_message,
        request_video=request.request_video,
        estimated_product_price=request.estimated_product_price,
        tip=request.tip,
        delivery_location=GeoPoint(location.latitude, location.longitude) if location else None,
    )
    return OrderResponse.from_entity(order)


@router.get('/delivery_fee', response_model=DeliveryFeeResponse)
@Logger.io
async def quote_delivery_fee(
    destination_city: str,
    origin_city: Optional[str] = None,
    current_user: UserEntity = Depends(get_current_user),
    use_case: QuoteDeliveryFeeUseCase = Depends(QuoteDeliveryFeeUseCase.depends),
) -> DeliveryFeeResponse:
    origin = origin_city or current_user.city
    fee = use_case.execute(origin_city=origin, destination_city=destination_city)
    return DeliveryFeeResponse(
        origin_city=origin, destination_city=destination_city, delivery_fee=fee
    )


@router.get('/my_orders', response_model=List[OrderResponse])
@Logger.io
async def list_my_orders(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListMyOrdersUseCase = Depends(ListMyOrdersUseCase.depends),
) -> list[OrderResponse]:
    return [OrderResponse.from_entity(order) for order in await use_case.execute(user=current_user)]


@router.get('/available', response_model=List[OrderResponse])
@Logger.io
async def list_available_orders(
    city: Optional[str] = None,
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    radius_km: Optional[float] = Query(None, gt=0),
    current_user: UserEntity = Depends(require_rider),
    use_case: ListAvailableOrdersUseCase = Depends(ListAvailableOrdersUseCase.depends),
) -> list[OrderResponse]:
    if (latitude is None) != (longitude is None):
        raise ValidationFailedError('location', 'latitude and longitude must be given together')

    near = GeoPoint(latitude, longitude) if latitude is not None and longitude is not None else None
    orders = await use_case.execute(city=city or current_user.city, near=near, radius_km=radius_km)
    return [OrderResponse.from_entity(order) for order in orders]


@router.get('/{order_id}', response_model=OrderResponse)
@Logger.io
async def get_order(
    order_id: UUID,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetOrderUseCase = Depends(GetOrderUseCase.depends),
) -> OrderResponse:
    return OrderResponse.from_entity(await use_case.execute(order_id=order_id, viewer=current_user))


@router.post('/{order_id}/claim', response_model=OrderResponse)
@Logger.io
async def claim_order(
    order_id: UUID,
    current_user: UserEntity = Depends(require_rider),
    use_case: ClaimOrderUseCase = Depends(ClaimOrderUseCase.depends),
) -> OrderResponse:
    order = await use_case.execute(order_id=order_id, rider_id=current_user.id or 0)
    return OrderResponse.from_entity(order)


@router.post('/{order_id}/actual_price', response_model=OrderResponse)
@Logger.io
async def confirm_actual_price(
    order_id: UUID,
    request: ActualPriceRequest,
    current_user: UserEntity = Depends(require_rider),
    use_case: ConfirmActualPriceUseCase = Depends(ConfirmActualPriceUseCase.depends),
) -> OrderResponse:
    order = await use_case.execute(
        order_id=order_id,
        rider_id=current_user.id or 0,
        actual_price=request.actual_price,
        receipt_image=request.receipt_image,
    )
    return OrderResponse.from_entity(order)


@router.post('/{order_id}/payment', response_model=OrderResponse)
@Logger.io
async def confirm_payment(
    order_id: UUID,
    request: PaymentConfirmRequest,
    current_user: UserEntity = Depends(require_sender),
    use_case: ConfirmPaymentUseCase = Depends(ConfirmPaymentUseCase.depends),
) -> OrderResponse:
    order = await use_case.execute(
        order_id=order_id,
        sender_id=current_user.id or 0,
        payment_method=request.payment_method,
        payment_proof=request.payment_proof,
    )
    return OrderResponse.from_entity(order)


@router.post('/{order_id}/delivered', response_model=OrderResponse)
@Logger.io
async def mark_delivered(
    order_id: UUID,
    current_user: UserEntity = Depends(require_rider),
    use_case: MarkOrderDeliveredUseCase = Depends(MarkOrderDeliveredUseCase.depends),
) -> OrderResponse:
    order = await use_case.execute(order_id=order_id, rider_id=current_user.id or 0)
    return OrderResponse.from_entity(order)


@router.post('/{order_id}/rating', response_model=OrderResponse)
@Logger.io
async def rate_order(
    order_id: UUID,
    request: RatingRequest,
    current_user: UserEntity = Depends(require_sender),
    use_case: RateOrderUseCase = Depends(RateOrderUseCase.depends),
) -> OrderResponse:
    order = await use_case.execute(
        order_id=order_id,
        sender_id=current_user.id or 0,
        rating=request.rating,
        review=request.review,
    )
    return OrderResponse.from_entity(order)


@router.post('/{order_id}/cancel', response_model=OrderResponse)
@Logger.io
async def cancel_order(
    order_id: UUID,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelOrderUseCase = Depends(CancelOrderUseCase.depends),
) -> OrderResponse:
    order = await use_case.execute(order_id=order_id, actor_id=current_user.id or 0)
    return OrderResponse.from_entity(order)


@router.post('/{order_id}/gift_image', response_model=OrderResponse)
@Logger.io
async def attach_gift_image(
    order_id: UUID,
    request: GiftImageRequest,
    current_user: UserEntity = Depends(require_rider),
    use_case: AttachGiftImageUseCase = Depends(AttachGiftImageUseCase.depends),
) -> OrderResponse:
    order = await use_case.execute(
        order_id=order_id, rider_id=current_user.id or 0, image=request.image
    )
    return OrderResponse.from_entity(order)


@router.post('/{order_id}/reaction_video', response_model=OrderResponse)
@Logger.io
async def attach_reaction_video(
    order_id: UUID,
    request: ReactionVideoRequest,
    current_user: UserEntity = Depends(require_rider),
    use_case: AttachReactionVideoUseCase = Depends(AttachReactionVideoUseCase.depends),
) -> OrderResponse:
    order = await use_case.execute(
        order_id=order_id, rider_id=current_user.id or 0, video=request.video
    )
    return OrderResponse.from_entity(order)
