"""
Reports, safety alerts and the security audit trail.

Reports and alerts are filed by signed-in users and worked through by admins;
security events are append-only and never change after they are written.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import attrs

from src.platform.exception.exceptions import InvalidStateError, ValidationFailedError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.domain.enum.safety_enum import (
    ReportStatus,
    ReportType,
    SafetyAlertType,
    SecurityAction,
    SecuritySeverity,
)
from src.service.gifting.domain.validation.data_validator import require_valid, validate_url
from src.service.gifting.domain.value_object.geo_point import GeoPoint


MIN_REPORT_DESCRIPTION = 10
MAX_DESCRIPTION = 1000
MAX_EVIDENCE_ITEMS = 5

# Review moves allowed from each report status; resolved and dismissed are final
REPORT_TRANSITIONS: dict[ReportStatus, frozenset[ReportStatus]] = {
    ReportStatus.PENDING: frozenset(
        {ReportStatus.UNDER_REVIEW, ReportStatus.RESOLVED, ReportStatus.DISMISSED}
    ),
    ReportStatus.UNDER_REVIEW: frozenset({ReportStatus.RESOLVED, ReportStatus.DISMISSED}),
    ReportStatus.RESOLVED: frozenset(),
    ReportStatus.DISMISSED: frozenset(),
}


def _clean_description(description: str, *, min_length: int) -> str:
    trimmed = (description or '').strip()
    if len(trimmed) < min_length:
        raise ValidationFailedError(
            'description', f'Description must be at least {min_length} characters long'
        )
    if len(trimmed) > MAX_DESCRIPTION:
        raise ValidationFailedError(
            'description', f'Description must be less than {MAX_DESCRIPTION} characters'
        )
    return trimmed


@attrs.define
class UserReport:
    id: UUID
    reporter_id: int
    reporter_name: str
    reported_user_id: int
    reported_user_name: str
    report_type: ReportType
    description: str
    order_id: Optional[UUID] = None
    evidence: list[str] = attrs.Factory(list)
    status: ReportStatus = ReportStatus.PENDING
    admin_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        reporter: UserEntity,
        reported: UserEntity,
        report_type: ReportType,
        description: str,
        order_id: Optional[UUID] = None,
        evidence: Optional[list[str]] = None,
    ) -> 'UserReport':
        if reporter.id == reported.id:
            raise ValidationFailedError('reported_user_id', 'You cannot report yourself')

        evidence = [url.strip() for url in evidence or [] if url and url.strip()]
        if len(evidence) > MAX_EVIDENCE_ITEMS:
            raise ValidationFailedError(
                'evidence', f'At most {MAX_EVIDENCE_ITEMS} evidence links can be attached'
            )
        for url in evidence:
            require_valid(validate_url(url), 'evidence')

        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            reporter_id=reporter.id or 0,
            reporter_name=reporter.full_name,
            reported_user_id=reported.id or 0,
            reported_user_name=reported.full_name,
            report_type=report_type,
            description=_clean_description(description, min_length=MIN_REPORT_DESCRIPTION),
            order_id=order_id,
            evidence=evidence,
            status=ReportStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @Logger.io
    def review(self, *, status: ReportStatus, admin_notes: Optional[str] = None) -> 'UserReport':
        if status not in REPORT_TRANSITIONS[self.status]:
            raise InvalidStateError(self.status, f'move report to {status}')
        return attrs.evolve(
            self,
            status=status,
            admin_notes=(admin_notes or '').strip() or self.admin_notes,
            updated_at=datetime.now(timezone.utc),
        )


@attrs.define
class SafetyAlert:
    id: UUID
    user_id: int
    user_name: str
    alert_type: SafetyAlertType
    description: str
    order_id: Optional[UUID] = None
    location: Optional[GeoPoint] = None
    is_resolved: bool = False
    admin_response: Optional[str] = None
    created_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        user: UserEntity,
        alert_type: SafetyAlertType,
        description: str,
        order_id: Optional[UUID] = None,
        location: Optional[GeoPoint] = None,
    ) -> 'SafetyAlert':
        return cls(
            id=id,
            user_id=user.id or 0,
            user_name=user.full_name,
            alert_type=alert_type,
            description=_clean_description(description, min_length=1),
            order_id=order_id,
            location=location,
            is_resolved=False,
            created_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def resolve(self, *, admin_response: str) -> 'SafetyAlert':
        if self.is_resolved:
            raise InvalidStateError('resolved', 'resolve alert')
        response = (admin_response or '').strip()
        if not response:
            raise ValidationFailedError('admin_response', 'A response is required to resolve')
        return attrs.evolve(
            self,
            is_resolved=True,
            admin_response=response,
            resolved_at=datetime.now(timezone.utc),
        )


@attrs.frozen
class SecurityEvent:
    id: UUID
    action: SecurityAction
    details: str
    severity: SecuritySeverity
    user_id: Optional[int] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: Optional[datetime] = None
