import asyncpg

from src.platform.database.asyncpg_setting import store_connection
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_security_event_repo import ISecurityEventRepo
from src.service.gifting.domain.entity.safety_entity import SecurityEvent
from src.service.gifting.domain.enum.safety_enum import SecurityAction, SecuritySeverity


EVENT_COLUMNS = 'id, user_id, action, details, severity, ip_address, user_agent, created_at'


class SecurityEventRepoImpl(ISecurityEventRepo):
    @staticmethod
    def _row_to_entity(row: asyncpg.Record) -> SecurityEvent:
        return SecurityEvent(
            id=row['id'],
            user_id=row['user_id'],
            action=SecurityAction(row['action']),
            details=row['details'],
            severity=SecuritySeverity(row['severity']),
            ip_address=row['ip_address'],
            user_agent=row['user_agent'],
            created_at=row['created_at'],
        )

    @Logger.io
    async def create(self, *, event: SecurityEvent) -> SecurityEvent:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO security_event (
                    id, user_id, action, details, severity, ip_address, user_agent, created_at
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                RETURNING {EVENT_COLUMNS}
                """,
                event.id,
                event.user_id,
                event.action.value,
                event.details,
                event.severity.value,
                event.ip_address,
                event.user_agent,
                event.created_at,
            )
            return self._row_to_entity(row)

    @Logger.io
    async def list_recent(
        self, *, limit: int, min_severity: SecuritySeverity = SecuritySeverity.LOW
    ) -> list[SecurityEvent]:
        async with store_connection() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {EVENT_COLUMNS} FROM security_event
                WHERE severity = ANY($1::text[])
                ORDER BY created_at DESC
                LIMIT $2
                """,
                [level.value for level in min_severity.and_above()],
                limit,
            )
            return [self._row_to_entity(row) for row in rows]
