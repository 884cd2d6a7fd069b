from datetime import datetime, timezone
from decimal import Decimal

import asyncpg

from src.platform.database.asyncpg_setting import store_connection
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.driven_adapter.repo.user_row_mapper import USER_COLUMNS, row_to_user


class UserCommandRepoImpl(IUserCommandRepo):
    @Logger.io
    async def create(self, *, user: UserEntity) -> UserEntity:
        async with store_connection() as conn:
            try:
                row = await conn.fetchrow(
                    f"""
                    INSERT INTO app_user (
                        email, phone_number, full_name, user_type, hashed_password, cnic, city,
                        rider_status, profile_image_url, average_rating, total_deliveries,
                        is_email_verified, is_phone_verified, is_admin, created_at, updated_at
                    )
                    VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15, $16)
                    RETURNING {USER_COLUMNS}
                    """,
                    user.email,
                    user.phone_number,
                    user.full_name,
                    user.user_type.value,
                    user.hashed_password,
                    user.cnic,
                    user.city,
                    user.rider_status.value if user.rider_status else None,
                    user.profile_image_url,
                    user.average_rating,
                    user.total_deliveries,
                    user.is_email_verified,
                    user.is_phone_verified,
                    user.is_admin,
                    user.created_at,
                    user.updated_at,
                )
            except asyncpg.UniqueViolationError as e:
                raise ConflictError(f'User with email {user.email} already exists') from e
            return row_to_user(row)

    @Logger.io
    async def update(self, *, user: UserEntity) -> UserEntity:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE app_user
                SET full_name = $2,
                    phone_number = $3,
                    city = $4,
                    rider_status = $5,
                    status_reason = $6,
                    profile_image_url = $7,
                    is_email_verified = $8,
                    is_phone_verified = $9,
                    login_attempts = $10,
                    is_blocked = $11,
                    blocked_reason = $12,
                    last_login_at = $13,
                    updated_at = $14
                WHERE id = $1
                RETURNING {USER_COLUMNS}
                """,
                user.id,
                user.full_name,
                user.phone_number,
                user.city,
                user.rider_status.value if user.rider_status else None,
                user.status_reason,
                user.profile_image_url,
                user.is_email_verified,
                user.is_phone_verified,
                user.login_attempts,
                user.is_blocked,
                user.blocked_reason,
                user.last_login_at,
                user.updated_at or datetime.now(timezone.utc),
            )
            if not row:
                raise NotFoundError('User not found')
            return row_to_user(row)

    @Logger.io
    async def update_profile(self, *, user: UserEntity) -> UserEntity | None:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE app_user
                SET full_name = $2,
                    phone_number = $3,
                    city = $4,
                    profile_image_url = $5,
                    is_phone_verified = $6,
                    updated_at = $7
                WHERE id = $1
                RETURNING {USER_COLUMNS}
                """,
                user.id,
                user.full_name,
                user.phone_number,
                user.city,
                user.profile_image_url,
                user.is_phone_verified,
                user.updated_at or datetime.now(timezone.utc),
            )
            return row_to_user(row) if row else None

    @Logger.io
    async def register_failed_login(
        self, *, user_id: int, max_attempts: int, block_reason: str
    ) -> UserEntity | None:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE app_user
                SET login_attempts = login_attempts + 1,
                    is_blocked = is_blocked OR login_attempts + 1 >= $2,
                    blocked_reason = CASE
                        WHEN NOT is_blocked AND login_attempts + 1 >= $2 THEN $3
                        ELSE blocked_reason
                    END,
                    updated_at = now()
                WHERE id = $1
                RETURNING {USER_COLUMNS}
                """,
                user_id,
                max_attempts,
                block_reason,
            )
            return row_to_user(row) if row else None

    @Logger.io
    async def update_reputation(
        self, *, rider_id: int, average_rating: Decimal, total_deliveries: int
    ) -> UserEntity | None:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE app_user
                SET average_rating = $2,
                    total_deliveries = $3,
                    updated_at = now()
                WHERE id = $1
                RETURNING {USER_COLUMNS}
                """,
                rider_id,
                average_rating,
                total_deliveries,
            )
            return row_to_user(row) if row else None
