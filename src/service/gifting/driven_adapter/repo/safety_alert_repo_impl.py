from uuid import UUID

import asyncpg

from src.platform.database.asyncpg_setting import store_connection
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_safety_alert_repo import ISafetyAlertRepo
from src.service.gifting.domain.entity.safety_entity import SafetyAlert
from src.service.gifting.domain.enum.safety_enum import SafetyAlertType
from src.service.gifting.domain.value_object.geo_point import GeoPoint


ALERT_COLUMNS = """
    id, user_id, user_name, alert_type, order_id, latitude, longitude, description,
    is_resolved, admin_response, created_at, resolved_at
"""


class SafetyAlertRepoImpl(ISafetyAlertRepo):
    @staticmethod
    def _row_to_entity(row: asyncpg.Record) -> SafetyAlert:
        """Convert asyncpg Record to SafetyAlert entity"""
        has_location = row['latitude'] is not None and row['longitude'] is not None
        return SafetyAlert(
            id=row['id'],
            user_id=row['user_id'],
            user_name=row['user_name'],
            alert_type=SafetyAlertType(row['alert_type']),
            order_id=row['order_id'],
            location=GeoPoint(row['latitude'], row['longitude']) if has_location else None,
            description=row['description'],
            is_resolved=row['is_resolved'],
            admin_response=row['admin_response'],
            created_at=row['created_at'],
            resolved_at=row['resolved_at'],
        )

    @Logger.io
    async def create(self, *, alert: SafetyAlert) -> SafetyAlert:
        location = alert.location
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO safety_alert (
                    id, user_id, user_name, alert_type, order_id, latitude, longitude,
                    description, is_resolved, created_at
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
                RETURNING {ALERT_COLUMNS}
                """,
                alert.id,
                alert.user_id,
                alert.user_name,
                alert.alert_type.value,
                alert.order_id,
                location.latitude if location else None,
                location.longitude if location else None,
                alert.description,
                alert.is_resolved,
                alert.created_at,
            )
            return self._row_to_entity(row)

    @Logger.io
    async def get_by_id(self, *, alert_id: UUID) -> SafetyAlert | None:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f'SELECT {ALERT_COLUMNS} FROM safety_alert WHERE id = $1', alert_id
            )
            return self._row_to_entity(row) if row else None

    @Logger.io
    async def resolve(self, *, alert: SafetyAlert) -> SafetyAlert | None:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE safety_alert
                SET is_resolved = true,
                    admin_response = $2,
                    resolved_at = $3
                WHERE id = $1
                  AND is_resolved = false
                RETURNING {ALERT_COLUMNS}
                """,
                alert.id,
                alert.admin_response,
                alert.resolved_at,
            )
            return self._row_to_entity(row) if row else None

    @Logger.io
    async def list_by_user(self, *, user_id: int) -> list[SafetyAlert]:
        async with store_connection() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {ALERT_COLUMNS} FROM safety_alert
                WHERE user_id = $1
                ORDER BY created_at DESC
                """,
                user_id,
            )
            return [self._row_to_entity(row) for row in rows]

    @Logger.io
    async def list_open(self) -> list[SafetyAlert]:
        async with store_connection() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {ALERT_COLUMNS} FROM safety_alert
                WHERE is_resolved = false
                ORDER BY created_at ASC
                """
            )
            return [self._row_to_entity(row) for row in rows]
