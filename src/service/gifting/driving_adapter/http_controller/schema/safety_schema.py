from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.service.gifting.domain.entity.safety_entity import SafetyAlert, SecurityEvent, UserReport
from src.service.gifting.domain.enum.safety_enum import (
    ReportStatus,
    ReportType,
    SafetyAlertType,
)
from src.service.gifting.driving_adapter.http_controller.schema.order_schema import (
    DeliveryLocationSchema,
)


class ReportCreateRequest(BaseModel):
    reported_user_id: int
    report_type: ReportType
    description: str
    order_id: Optional[UUID] = None
    evidence: Optional[list[str]] = None

    model_config = {
        'json_schema_extra': {
            'example': {
                'reported_user_id': 2,
                'report_type': 'misconduct',
                'description': 'Rider was rude at the door and refused to hand over the gift',
            }
        }
    }


class ReportReviewRequest(BaseModel):
    status: ReportStatus
    admin_notes: Optional[str] = None


class SafetyAlertCreateRequest(BaseModel):
    alert_type: SafetyAlertType
    description: str
    order_id: Optional[UUID] = None
    location: Optional[DeliveryLocationSchema] = None


class SafetyAlertResolveRequest(BaseModel):
    admin_response: str


class ReportResponse(BaseModel):
    id: UUID
    reporter_id: int
    reporter_name: str
    reported_user_id: int
    reported_user_name: str
    report_type: str
    description: str
    order_id: Optional[UUID] = None
    evidence: list[str]
    status: str
    admin_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, report: UserReport) -> 'ReportResponse':
        return cls(
            id=report.id,
            reporter_id=report.reporter_id,
            reporter_name=report.reporter_name,
            reported_user_id=report.reported_user_id,
            reported_user_name=report.reported_user_name,
            report_type=report.report_type.value,
            description=report.description,
            order_id=report.order_id,
            evidence=report.evidence,
            status=report.status.value,
            admin_notes=report.admin_notes,
            created_at=report.created_at,
            updated_at=report.updated_at,
        )


class SafetyAlertResponse(BaseModel):
    id: UUID
    user_id: int
    user_name: str
    alert_type: str
    description: str
    order_id: Optional[UUID] = None
    location: Optional[DeliveryLocationSchema] = None
    is_resolved: bool
    admin_response: Optional[str] = None
    created_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, alert: SafetyAlert) -> 'SafetyAlertResponse':
        location = alert.location
        return cls(
            id=alert.id,
            user_id=alert.user_id,
            user_name=alert.user_name,
            alert_type=alert.alert_type.value,
            description=alert.description,
            order_id=alert.order_id,
            location=(
                DeliveryLocationSchema(latitude=location.latitude, longitude=location.longitude)
                if location
                else None
            ),
            is_resolved=alert.is_resolved,
            admin_response=alert.admin_response,
            created_at=alert.created_at,
            resolved_at=alert.resolved_at,
        )


class SecurityEventResponse(BaseModel):
    id: UUID
    user_id: Optional[int] = None
    action: str
    details: str
    severity: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, event: SecurityEvent) -> 'SecurityEventResponse':
        return cls(
            id=event.id,
            user_id=event.user_id,
            action=event.action.value,
            details=event.details,
            severity=event.severity.value,
            created_at=event.created_at,
        )
