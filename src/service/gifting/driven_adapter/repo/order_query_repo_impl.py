from uuid import UUID

from src.platform.database.asyncpg_setting import store_connection
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.gifting.domain.entity.gift_order_entity import GiftOrder
from src.service.gifting.driven_adapter.repo.gift_order_row_mapper import (
    GIFT_ORDER_COLUMNS,
    row_to_gift_order,
)


class OrderQueryRepoImpl(IOrderQueryRepo):
    @Logger.io
    async def get_by_id(self, *, order_id: UUID) -> GiftOrder | None:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f'SELECT {GIFT_ORDER_COLUMNS} FROM gift_order WHERE id = $1', order_id
            )
            return row_to_gift_order(row) if row else None

    @Logger.io
    async def list_pending_by_city(self, *, city: str) -> list[GiftOrder]:
        async with store_connection() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {GIFT_ORDER_COLUMNS}
                FROM gift_order
                WHERE status = 'pending'
                  AND lower(receiver_city) = lower($1)
                ORDER BY created_at DESC
                """,
                city,
            )
            return [row_to_gift_order(row) for row in rows]

    @Logger.io
    async def list_pending(self) -> list[GiftOrder]:
        async with store_connection() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {GIFT_ORDER_COLUMNS}
                FROM gift_order
                WHERE status = 'pending'
                ORDER BY created_at DESC
                """
            )
            return [row_to_gift_order(row) for row in rows]

    @Logger.io
    async def list_by_sender(self, *, sender_id: int) -> list[GiftOrder]:
        async with store_connection() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {GIFT_ORDER_COLUMNS}
                FROM gift_order
                WHERE sender_id = $1
                ORDER BY created_at DESC
                """,
                sender_id,
            )
            return [row_to_gift_order(row) for row in rows]

    @Logger.io
    async def list_by_rider(self, *, rider_id: int) -> list[GiftOrder]:
        async with store_connection() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {GIFT_ORDER_COLUMNS}
                FROM gift_order
                WHERE rider_id = $1
                ORDER BY accepted_at DESC NULLS LAST
                """,
                rider_id,
            )
            return [row_to_gift_order(row) for row in rows]

    @Logger.io
    async def list_ratings_for_rider(self, *, rider_id: int) -> list[int]:
        async with store_connection() as conn:
            rows = await conn.fetch(
                """
                SELECT rating
                FROM gift_order
                WHERE rider_id = $1
                  AND status = 'delivered'
                  AND rating IS NOT NULL
                """,
                rider_id,
            )
            return [row['rating'] for row in rows]
