from typing import Any

import asyncpg

from src.service.gifting.domain.entity.gift_order_entity import GiftOrder
from src.service.gifting.domain.enum.order_status import OrderStatus, PaymentStatus
from src.service.gifting.domain.value_object.geo_point import GeoPoint


GIFT_ORDER_COLUMNS = """
    id, sender_id, sender_name, sender_phone, sender_city,
    gift_name, product_link, personal_message, request_video,
    receiver_name, receiver_address, receiver_city, receiver_phone,
    delivery_fee, tip, estimated_product_price, actual_product_price, total_amount,
    payment_status, payment_method, status,
    rider_id, rider_name, rider_phone,
    created_at, accepted_at, delivered_at, updated_at, cancelled_at,
    gift_image_url, receipt_image_url, payment_proof_url, reaction_video_url,
    delivery_latitude, delivery_longitude, rating, review, version
"""


def row_to_gift_order(row: asyncpg.Record) -> GiftOrder:
    """Convert asyncpg Record to GiftOrder entity"""
    location = None
    if row['delivery_latitude'] is not None and row['delivery_longitude'] is not None:
        location = GeoPoint(row['delivery_latitude'], row['delivery_longitude'])

    return GiftOrder(
        id=row['id'],
        sender_id=row['sender_id'],
        sender_name=row['sender_name'],
        sender_phone=row['sender_phone'],
        sender_city=row['sender_city'],
        gift_name=row['gift_name'],
        product_link=row['product_link'],
        personal_message=row['personal_message'],
        request_video=row['request_video'],
        receiver_name=row['receiver_name'],
        receiver_address=row['receiver_address'],
        receiver_city=row['receiver_city'],
        receiver_phone=row['receiver_phone'],
        delivery_fee=row['delivery_fee'],
        tip=row['tip'],
        estimated_product_price=row['estimated_product_price'],
        actual_product_price=row['actual_product_price'],
        total_amount=row['total_amount'],
        payment_status=PaymentStatus(row['payment_status']),
        payment_method=row['payment_method'],
        status=OrderStatus(row['status']),
        rider_id=row['rider_id'],
        rider_name=row['rider_name'],
        rider_phone=row['rider_phone'],
        created_at=row['created_at'],
        accepted_at=row['accepted_at'],
        delivered_at=row['delivered_at'],
        updated_at=row['updated_at'],
        cancelled_at=row['cancelled_at'],
        gift_image_url=row['gift_image_url'],
        receipt_image_url=row['receipt_image_url'],
        payment_proof_url=row['payment_proof_url'],
        reaction_video_url=row['reaction_video_url'],
        delivery_location=location,
        rating=row['rating'],
        review=row['review'],
        version=row['version'],
    )


def mutable_values(order: GiftOrder) -> list[Any]:
    """Values for the columns a transition may change, in UPDATE parameter order."""
    return [
        order.actual_product_price,
        order.total_amount,
        order.payment_status.value,
        order.payment_method,
        order.status.value,
        order.rider_id,
        order.rider_name,
        order.rider_phone,
        order.accepted_at,
        order.delivered_at,
        order.updated_at,
        order.cancelled_at,
        order.gift_image_url,
        order.receipt_image_url,
        order.payment_proof_url,
        order.reaction_video_url,
        order.rating,
        order.review,
    ]
