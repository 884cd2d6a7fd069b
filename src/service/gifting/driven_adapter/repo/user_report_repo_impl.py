from uuid import UUID

import asyncpg

from src.platform.database.asyncpg_setting import store_connection
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_user_report_repo import IUserReportRepo
from src.service.gifting.domain.entity.safety_entity import UserReport
from src.service.gifting.domain.enum.safety_enum import ReportStatus, ReportType


REPORT_COLUMNS = """
    id, reporter_id, reporter_name, reported_user_id, reported_user_name, report_type,
    description, order_id, evidence, status, admin_notes, created_at, updated_at
"""


class UserReportRepoImpl(IUserReportRepo):
    @staticmethod
    def _row_to_entity(row: asyncpg.Record) -> UserReport:
        """Convert asyncpg Record to UserReport entity"""
        return UserReport(
            id=row['id'],
            reporter_id=row['reporter_id'],
            reporter_name=row['reporter_name'],
            reported_user_id=row['reported_user_id'],
            reported_user_name=row['reported_user_name'],
            report_type=ReportType(row['report_type']),
            description=row['description'],
            order_id=row['order_id'],
            evidence=list(row['evidence'] or []),
            status=ReportStatus(row['status']),
            admin_notes=row['admin_notes'],
            created_at=row['created_at'],
            updated_at=row['updated_at'],
        )

    @Logger.io
    async def create(self, *, report: UserReport) -> UserReport:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO user_report (
                    id, reporter_id, reporter_name, reported_user_id, reported_user_name,
                    report_type, description, order_id, evidence, status, created_at, updated_at
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12)
                RETURNING {REPORT_COLUMNS}
                """,
                report.id,
                report.reporter_id,
                report.reporter_name,
                report.reported_user_id,
                report.reported_user_name,
                report.report_type.value,
                report.description,
                report.order_id,
                report.evidence,
                report.status.value,
                report.created_at,
                report.updated_at,
            )
            return self._row_to_entity(row)

    @Logger.io
    async def get_by_id(self, *, report_id: UUID) -> UserReport | None:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f'SELECT {REPORT_COLUMNS} FROM user_report WHERE id = $1', report_id
            )
            return self._row_to_entity(row) if row else None

    @Logger.io
    async def update_review(
        self, *, current: UserReport, updated: UserReport
    ) -> UserReport | None:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE user_report
                SET status = $2,
                    admin_notes = $3,
                    updated_at = $4
                WHERE id = $1
                  AND status = $5
                RETURNING {REPORT_COLUMNS}
                """,
                current.id,
                updated.status.value,
                updated.admin_notes,
                updated.updated_at,
                current.status.value,
            )
            return self._row_to_entity(row) if row else None

    @Logger.io
    async def list_by_reporter(self, *, reporter_id: int) -> list[UserReport]:
        async with store_connection() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {REPORT_COLUMNS} FROM user_report
                WHERE reporter_id = $1
                ORDER BY created_at DESC
                """,
                reporter_id,
            )
            return [self._row_to_entity(row) for row in rows]

    @Logger.io
    async def list_by_status(self, *, status: ReportStatus) -> list[UserReport]:
        async with store_connection() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {REPORT_COLUMNS} FROM user_report
                WHERE status = $1
                ORDER BY created_at ASC
                """,
                status.value,
            )
            return [self._row_to_entity(row) for row in rows]
