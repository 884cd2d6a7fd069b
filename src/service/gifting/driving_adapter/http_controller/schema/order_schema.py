from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Base64Bytes, BaseModel, Field

from src.service.gifting.domain.entity.gift_order_entity import GiftOrder


class DeliveryLocationSchema(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class OrderCreateRequest(BaseModel):
    gift_name: str
    receiver_name: str
    receiver_address: str
    receiver_city: str
    receiver_phone: str
    sender_city: Optional[str] = None
    product_link: Optional[str] = None
    personal_message: Optional[str] = None
    request_video: bool = False
    estimated_product_price: Optional[Decimal] = None
    tip: Optional[Decimal] = None
    delivery_location: Optional[DeliveryLocationSchema] = None

    model_config = {
        'json_schema_extra': {
            'example': {
                'gift_name': 'Chocolate hamper',
                'receiver_name': 'Ayesha Khan',
                'receiver_address': 'House 12, Street 4, Gulberg III',
                'receiver_city': 'Lahore',
                'receiver_phone': '03001234567',
                'sender_city': 'Karachi',
                'estimated_product_price': '2500.00',
                'tip': '200.00',
                'request_video': True,
            }
        }
    }


class ActualPriceRequest(BaseModel):
    actual_price: Decimal
    receipt_image: Optional[Base64Bytes] = None


class PaymentConfirmRequest(BaseModel):
    payment_method: str
    payment_proof: Optional[Base64Bytes] = None

    model_config = {'json_schema_extra': {'example': {'payment_method': 'easypaisa'}}}


class RatingRequest(BaseModel):
    rating: int = Field(ge=1, le=5)
    review: Optional[str] = None


class GiftImageRequest(BaseModel):
    image: Base64Bytes


class ReactionVideoRequest(BaseModel):
    video: Base64Bytes


class DeliveryFeeResponse(BaseModel):
    origin_city: Optional[str]
    destination_city: str
    delivery_fee: Decimal


class OrderResponse(BaseModel):
    id: UUID
    status: str
    payment_status: str
    sender_id: int
    sender_name: str
    sender_phone: str
    gift_name: str
    product_link: Optional[str] = None
    personal_message: Optional[str] = None
    request_video: bool
    receiver_name: str
    receiver_address: str
    receiver_city: str
    receiver_phone: str
    delivery_fee: Decimal
    tip: Optional[Decimal] = None
    estimated_product_price: Optional[Decimal] = None
    actual_product_price: Optional[Decimal] = None
    total_amount: Decimal
    payment_method: Optional[str] = None
    rider_id: Optional[int] = None
    rider_name: Optional[str] = None
    rider_phone: Optional[str] = None
    created_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    gift_image_url: Optional[str] = None
    receipt_image_url: Optional[str] = None
    payment_proof_url: Optional[str] = None
    reaction_video_url: Optional[str] = None
    delivery_location: Optional[DeliveryLocationSchema] = None
    rating: Optional[int] = None
    review: Optional[str] = None

    @classmethod
    def from_entity(cls, order: GiftOrder) -> 'OrderResponse':
        location = order.delivery_location
        return cls(
            id=order.id,
            status=order.status.value,
            payment_status=order.payment_status.value,
            sender_id=order.sender_id,
            sender_name=order.sender_name,
            sender_phone=order.sender_phone,
            gift_name=order.gift_name,
            product_link=order.product_link,
            personal_message=order.personal_message,
            request_video=order.request_video,
            receiver_name=order.receiver_name,
            receiver_address=order.receiver_address,
            receiver_city=order.receiver_city,
            receiver_phone=order.receiver_phone,
            delivery_fee=order.delivery_fee,
            tip=order.tip,
            estimated_product_price=order.estimated_product_price,
            actual_product_price=order.actual_product_price,
            total_amount=order.total_amount,
            payment_method=order.payment_method,
            rider_id=order.rider_id,
            rider_name=order.rider_name,
            rider_phone=order.rider_phone,
            created_at=order.created_at,
            accepted_at=order.accepted_at,
            delivered_at=order.delivered_at,
            cancelled_at=order.cancelled_at,
            gift_image_url=order.gift_image_url,
            receipt_image_url=order.receipt_image_url,
            payment_proof_url=order.payment_proof_url,
            reaction_video_url=order.reaction_video_url,
            delivery_location=(
                DeliveryLocationSchema(latitude=location.latitude, longitude=location.longitude)
                if location
                else None
            ),
            rating=order.rating,
            review=order.review,
        )
