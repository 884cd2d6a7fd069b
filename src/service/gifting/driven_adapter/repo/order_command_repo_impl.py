"""
Order Command Repository Implementation

All state changes are single conditional UPDATE statements; PostgreSQL
row-level atomicity is what guarantees at most one rider per order.
"""

from datetime import datetime, timezone
from uuid import UUID

from src.platform.database.asyncpg_setting import store_connection
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.gifting.domain.entity.gift_order_entity import GiftOrder
from src.service.gifting.domain.enum.order_status import OrderStatus
from src.service.gifting.driven_adapter.repo.gift_order_row_mapper import (
    GIFT_ORDER_COLUMNS,
    mutable_values,
    row_to_gift_order,
)


class OrderCommandRepoImpl(IOrderCommandRepo):
    @Logger.io
    async def create(self, *, order: GiftOrder) -> GiftOrder:
        location = order.delivery_location
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO gift_order (
                    id, sender_id, sender_name, sender_phone, sender_city,
                    gift_name, product_link, personal_message, request_video,
                    receiver_name, receiver_address, receiver_city, receiver_phone,
                    delivery_fee, tip, estimated_product_price, actual_product_price, total_amount,
                    payment_status, status, created_at, updated_at,
                    delivery_latitude, delivery_longitude
                )
                VALUES (
                    $1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13,
                    $14, $15, $16, $17, $18, $19, $20, $21, $22, $23, $24
                )
                RETURNING {GIFT_ORDER_COLUMNS}
                """,
                order.id,
                order.sender_id,
                order.sender_name,
                order.sender_phone,
                order.sender_city,
                order.gift_name,
                order.product_link,
                order.personal_message,
                order.request_video,
                order.receiver_name,
                order.receiver_address,
                order.receiver_city,
                order.receiver_phone,
                order.delivery_fee,
                order.tip,
                order.estimated_product_price,
                order.actual_product_price,
                order.total_amount,
                order.payment_status.value,
                order.status.value,
                order.created_at,
                order.updated_at,
                location.latitude if location else None,
                location.longitude if location else None,
            )
            return row_to_gift_order(row)

    @Logger.io
    async def get_by_id(self, *, order_id: UUID) -> GiftOrder | None:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f'SELECT {GIFT_ORDER_COLUMNS} FROM gift_order WHERE id = $1', order_id
            )
            return row_to_gift_order(row) if row else None

    @Logger.io
    async def claim(
        self, *, order_id: UUID, rider_id: int, rider_name: str, rider_phone: str
    ) -> GiftOrder | None:
        now = datetime.now(timezone.utc)
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE gift_order
                SET status = $2,
                    rider_id = $3,
                    rider_name = $4,
                    rider_phone = $5,
                    accepted_at = $6,
                    updated_at = $6,
                    version = version + 1
                WHERE id = $1
                  AND status = 'pending'
                  AND rider_id IS NULL
                RETURNING {GIFT_ORDER_COLUMNS}
                """,
                order_id,
                OrderStatus.ACCEPTED.value,
                rider_id,
                rider_name,
                rider_phone,
                now,
            )
            return row_to_gift_order(row) if row else None

    @Logger.io
    async def compare_and_swap(self, *, current: GiftOrder, updated: GiftOrder) -> GiftOrder | None:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE gift_order
                SET actual_product_price = $1,
                    total_amount = $2,
                    payment_status = $3,
                    payment_method = $4,
                    status = $5,
                    rider_id = $6,
                    rider_name = $7,
                    rider_phone = $8,
                    accepted_at = $9,
                    delivered_at = $10,
                    updated_at = $11,
                    cancelled_at = $12,
                    gift_image_url = $13,
                    receipt_image_url = $14,
                    payment_proof_url = $15,
                    reaction_video_url = $16,
                    rating = $17,
                    review = $18,
                    version = version + 1
                WHERE id = $19
                  AND version = $20
                RETURNING {GIFT_ORDER_COLUMNS}
                """,
                *mutable_values(updated),
                current.id,
                current.version,
            )
            return row_to_gift_order(row) if row else None
