from datetime import datetime, timezone
from uuid import UUID

import asyncpg

from src.platform.database.asyncpg_setting import store_connection
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_otp_verification_repo import IOtpVerificationRepo
from src.service.gifting.domain.entity.otp_verification_entity import (
    ContactBundle,
    OtpVerification,
)
from src.service.gifting.domain.enum.otp_enum import OtpStatus, OtpType


OTP_COLUMNS = """
    id, user_id, phone_number, cnic_number, email, otp_type, otp_code, status,
    attempts, max_attempts, expires_at, created_at, verified_at
"""


class OtpVerificationRepoImpl(IOtpVerificationRepo):
    @staticmethod
    def _row_to_entity(row: asyncpg.Record) -> OtpVerification:
        """Convert asyncpg Record to OtpVerification entity"""
        return OtpVerification(
            id=row['id'],
            user_id=row['user_id'],
            phone_number=row['phone_number'],
            cnic_number=row['cnic_number'],
            email=row['email'],
            otp_type=OtpType(row['otp_type']),
            otp_code=row['otp_code'],
            status=OtpStatus(row['status']),
            attempts=row['attempts'],
            max_attempts=row['max_attempts'],
            expires_at=row['expires_at'],
            created_at=row['created_at'],
            verified_at=row['verified_at'],
        )

    @Logger.io
    async def create(self, *, otp: OtpVerification) -> OtpVerification:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO otp_verification (
                    id, user_id, phone_number, cnic_number, email, otp_type, otp_code,
                    status, attempts, max_attempts, expires_at, created_at
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12)
                RETURNING {OTP_COLUMNS}
                """,
                otp.id,
                otp.user_id,
                otp.phone_number,
                otp.cnic_number,
                otp.email,
                otp.otp_type.value,
                otp.otp_code,
                otp.status.value,
                otp.attempts,
                otp.max_attempts,
                otp.expires_at,
                otp.created_at,
            )
            return self._row_to_entity(row)

    @Logger.io
    async def get_by_id(self, *, otp_id: UUID) -> OtpVerification | None:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f'SELECT {OTP_COLUMNS} FROM otp_verification WHERE id = $1', otp_id
            )
            return self._row_to_entity(row) if row else None

    @Logger.io
    async def delete(self, *, otp_id: UUID) -> bool:
        async with store_connection() as conn:
            result = await conn.execute('DELETE FROM otp_verification WHERE id = $1', otp_id)
            return result == 'DELETE 1'

    @Logger.io
    async def delete_pending_for_bundle(self, *, bundle: ContactBundle, otp_type: OtpType) -> int:
        async with store_connection() as conn:
            result = await conn.execute(
                """
                DELETE FROM otp_verification
                WHERE otp_type = $1
                  AND status = 'pending'
                  AND phone_number IS NOT DISTINCT FROM $2
                  AND cnic_number IS NOT DISTINCT FROM $3
                  AND email IS NOT DISTINCT FROM $4
                """,
                otp_type.value,
                bundle.phone_number,
                bundle.cnic_number,
                bundle.email,
            )
            # asyncpg status string: 'DELETE <count>'
            return int(result.split()[-1])

    @Logger.io
    async def transition_status(
        self, *, otp: OtpVerification, status: OtpStatus
    ) -> OtpVerification | None:
        verified_at = datetime.now(timezone.utc) if status == OtpStatus.VERIFIED else None
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE otp_verification
                SET status = $2,
                    verified_at = COALESCE($3, verified_at)
                WHERE id = $1
                  AND status = 'pending'
                RETURNING {OTP_COLUMNS}
                """,
                otp.id,
                status.value,
                verified_at,
            )
            return self._row_to_entity(row) if row else None

    @Logger.io
    async def register_failed_attempt(self, *, otp_id: UUID) -> OtpVerification | None:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE otp_verification
                SET attempts = attempts + 1,
                    status = CASE
                        WHEN attempts + 1 >= max_attempts THEN 'failed'
                        ELSE status
                    END
                WHERE id = $1
                  AND status = 'pending'
                  AND attempts < max_attempts
                RETURNING {OTP_COLUMNS}
                """,
                otp_id,
            )
            return self._row_to_entity(row) if row else None
