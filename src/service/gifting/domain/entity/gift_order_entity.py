from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import UUID

import attrs

from src.platform.exception.exceptions import (
    AlreadyClaimedError,
    DomainError,
    ForbiddenError,
    InvalidStateError,
    ValidationFailedError,
)
from src.platform.logging.loguru_io import Logger
from src.service.gifting.domain.enum.order_status import (
    RIDER_ASSIGNED_STATUSES,
    OrderStatus,
    PaymentStatus,
)
from src.service.gifting.domain.validation.data_validator import (
    require_valid,
    validate_address,
    validate_gift_name,
    validate_name,
    validate_phone_number,
    validate_url,
)
from src.service.gifting.domain.value_object.geo_point import GeoPoint
from src.service.gifting.domain.value_object.pakistan_region import get_city_coordinates


MONEY_QUANT = Decimal('0.01')


def _to_money(value: Decimal | int | float | str | None) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value)).quantize(MONEY_QUANT)


def compute_total_amount(
    *,
    delivery_fee: Decimal,
    tip: Optional[Decimal],
    estimated_product_price: Optional[Decimal],
    actual_product_price: Optional[Decimal],
) -> Decimal:
    """Actual price wins over the estimate; a missing price or tip counts as zero."""
    product_price = (
        actual_product_price
        if actual_product_price is not None
        else (estimated_product_price if estimated_product_price is not None else Decimal('0'))
    )
    return (product_price + delivery_fee + (tip or Decimal('0'))).quantize(MONEY_QUANT)


def _require_non_negative(field: str, value: Optional[Decimal]) -> None:
    if value is not None and value < 0:
        raise ValidationFailedError(field, f'{field} must not be negative')


@attrs.define
class GiftOrder:
    id: UUID
    sender_id: int
    sender_name: str
    sender_phone: str
    gift_name: str
    receiver_name: str
    receiver_address: str
    receiver_city: str
    receiver_phone: str
    delivery_fee: Decimal = attrs.field(converter=_to_money)
    total_amount: Decimal = attrs.field(converter=_to_money)
    sender_city: Optional[str] = None
    product_link: Optional[str] = None
    personal_message: Optional[str] = None
    request_video: bool = False
    tip: Optional[Decimal] = attrs.field(default=None, converter=_to_money)
    estimated_product_price: Optional[Decimal] = attrs.field(default=None, converter=_to_money)
    actual_product_price: Optional[Decimal] = attrs.field(default=None, converter=_to_money)
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: Optional[str] = None
    status: OrderStatus = OrderStatus.PENDING
    rider_id: Optional[int] = None
    rider_name: Optional[str] = None
    rider_phone: Optional[str] = None
    created_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    gift_image_url: Optional[str] = None
    receipt_image_url: Optional[str] = None
    payment_proof_url: Optional[str] = None
    reaction_video_url: Optional[str] = None
    delivery_location: Optional[GeoPoint] = None
    rating: Optional[int] = None
    review: Optional[str] = None
    version: int = 0  # bumped by the store on every write

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        sender_id: int,
        sender_name: str,
        sender_phone: str,
        gift_name: str,
        receiver_name: str,
        receiver_address: str,
        receiver_city: str,
        receiver_phone: str,
        delivery_fee: Decimal,
        sender_city: Optional[str] = None,
        product_link: Optional[str] = None,
        personal_message: Optional[str] = None,
        request_video: bool = False,
        tip: Optional[Decimal] = None,
        estimated_product_price: Optional[Decimal] = None,
        delivery_location: Optional[GeoPoint] = None,
    ) -> 'GiftOrder':
        require_valid(validate_gift_name(gift_name), 'gift_name')
        require_valid(validate_name(receiver_name), 'receiver_name')
        require_valid(validate_address(receiver_address), 'receiver_address')
        require_valid(validate_phone_number(receiver_phone), 'receiver_phone')
        require_valid(validate_phone_number(sender_phone), 'sender_phone')
        require_valid(validate_url(product_link), 'product_link')
        if not (receiver_city or '').strip():
            raise ValidationFailedError('receiver_city', 'Receiver city is required')

        delivery_fee = _to_money(delivery_fee)  # type: ignore[assignment]
        tip = _to_money(tip)
        estimated_product_price = _to_money(estimated_product_price)
        _require_non_negative('delivery_fee', delivery_fee)
        _require_non_negative('tip', tip)
        _require_non_negative('estimated_product_price', estimated_product_price)

        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            sender_id=sender_id,
            sender_name=sender_name.strip(),
            sender_phone=sender_phone,
            sender_city=sender_city,
            gift_name=gift_name.strip(),
            product_link=(product_link or '').strip() or None,
            personal_message=personal_message,
            request_video=request_video,
            receiver_name=receiver_name.strip(),
            receiver_address=receiver_address.strip(),
            receiver_city=receiver_city.strip(),
            receiver_phone=receiver_phone,
            delivery_fee=delivery_fee,
            tip=tip,
            estimated_product_price=estimated_product_price,
            total_amount=compute_total_amount(
                delivery_fee=delivery_fee,
                tip=tip,
                estimated_product_price=estimated_product_price,
                actual_product_price=None,
            ),
            status=OrderStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            delivery_location=delivery_location,
            created_at=now,
            updated_at=now,
        )

    @property
    def location_for_matching(self) -> Optional[GeoPoint]:
        return self.delivery_location or get_city_coordinates(self.receiver_city)

    def is_visible_to(self, *, user_id: int, is_rider: bool) -> bool:
        if user_id in (self.sender_id, self.rider_id):
            return True
        return is_rider and self.status == OrderStatus.PENDING

    def _require_status(self, transition: str, *allowed: OrderStatus) -> None:
        if self.status not in allowed:
            raise InvalidStateError(self.status, transition)

    def _require_assigned_rider(self, rider_id: int) -> None:
        if self.rider_id != rider_id:
            raise ForbiddenError('Only the assigned rider can perform this action')

    def _require_sender(self, sender_id: int) -> None:
        if self.sender_id != sender_id:
            raise ForbiddenError('Only the sender can perform this action')

    @Logger.io
    def accept(self, *, rider_id: int, rider_name: str, rider_phone: str) -> 'GiftOrder':
        if self.status == OrderStatus.CANCELLED:
            raise InvalidStateError(self.status, 'accept')
        if self.status != OrderStatus.PENDING or self.rider_id is not None:
            raise AlreadyClaimedError()

        now = datetime.now(timezone.utc)
        return attrs.evolve(
            self,
            status=OrderStatus.ACCEPTED,
            rider_id=rider_id,
            rider_name=rider_name,
            rider_phone=rider_phone,
            accepted_at=now,
            updated_at=now,
        )

    @Logger.io
    def confirm_actual_price(self, *, rider_id: int, actual_price: Decimal) -> 'GiftOrder':
        self._require_status('confirm actual price', OrderStatus.ACCEPTED)
        self._require_assigned_rider(rider_id)
        actual_price = _to_money(actual_price)  # type: ignore[assignment]
        if actual_price is None or actual_price <= 0:
            raise ValidationFailedError('actual_price', 'Actual price must be greater than zero')

        return attrs.evolve(
            self,
            actual_product_price=actual_price,
            total_amount=compute_total_amount(
                delivery_fee=self.delivery_fee,
                tip=self.tip,
                estimated_product_price=self.estimated_product_price,
                actual_product_price=actual_price,
            ),
            status=OrderStatus.PURCHASED,
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def confirm_payment(
        self,
        *,
        sender_id: int,
        payment_method: str,
    ) -> 'GiftOrder':
        self._require_sender(sender_id)
        self._require_status('confirm payment', OrderStatus.PURCHASED)
        if self.payment_status != PaymentStatus.PENDING:
            raise InvalidStateError(f'payment {self.payment_status}', 'confirm payment')
        if not (payment_method or '').strip():
            raise ValidationFailedError('payment_method', 'Payment method is required')

        return attrs.evolve(
            self,
            payment_status=PaymentStatus.CONFIRMED,
            payment_method=payment_method.strip(),
            status=OrderStatus.IN_TRANSIT,
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def mark_delivered(self, *, rider_id: int) -> 'GiftOrder':
        self._require_status('mark delivered', OrderStatus.IN_TRANSIT)
        self._require_assigned_rider(rider_id)

        now = datetime.now(timezone.utc)
        return attrs.evolve(self, status=OrderStatus.DELIVERED, delivered_at=now, updated_at=now)

    @Logger.io
    def rate(self, *, sender_id: int, rating: int, review: Optional[str] = None) -> 'GiftOrder':
        self._require_sender(sender_id)
        self._require_status('rate', OrderStatus.DELIVERED)
        if self.rating is not None:
            raise InvalidStateError('already rated', 'rate')
        if not 1 <= rating <= 5:
            raise ValidationFailedError('rating', 'Rating must be between 1 and 5')

        return attrs.evolve(
            self,
            rating=rating,
            review=(review or '').strip() or None,
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def cancel(self, *, actor_id: int) -> 'GiftOrder':
        self._require_status('cancel', OrderStatus.PENDING, OrderStatus.ACCEPTED)
        allowed_actors = {self.sender_id}
        if self.status == OrderStatus.ACCEPTED and self.rider_id is not None:
            allowed_actors.add(self.rider_id)
        if actor_id not in allowed_actors:
            raise ForbiddenError('Only the sender or the assigned rider can cancel this order')

        now = datetime.now(timezone.utc)
        return attrs.evolve(self, status=OrderStatus.CANCELLED, cancelled_at=now, updated_at=now)

    def check_can_attach_gift_image(self, *, rider_id: int) -> None:
        self._require_status('attach gift image', *RIDER_ASSIGNED_STATUSES)
        self._require_assigned_rider(rider_id)

    def check_can_attach_reaction_video(self, *, rider_id: int) -> None:
        self._require_status(
            'attach reaction video', OrderStatus.IN_TRANSIT, OrderStatus.DELIVERED
        )
        self._require_assigned_rider(rider_id)
        if not self.request_video:
            raise DomainError('The sender did not request a reaction video')

    @Logger.io
    def attach_gift_image(self, *, rider_id: int, url: str) -> 'GiftOrder':
        self.check_can_attach_gift_image(rider_id=rider_id)
        return attrs.evolve(self, gift_image_url=url, updated_at=datetime.now(timezone.utc))

    @Logger.io
    def attach_reaction_video(self, *, rider_id: int, url: str) -> 'GiftOrder':
        self.check_can_attach_reaction_video(rider_id=rider_id)
        return attrs.evolve(self, reaction_video_url=url, updated_at=datetime.now(timezone.utc))

    def with_receipt_image(self, url: str) -> 'GiftOrder':
        return attrs.evolve(self, receipt_image_url=url)

    def with_payment_proof(self, url: str) -> 'GiftOrder':
        return attrs.evolve(self, payment_proof_url=url)
