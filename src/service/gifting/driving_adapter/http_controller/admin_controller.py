from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.block_user_use_case import BlockUserUseCase
from src.service.gifting.app.command.recompute_rider_reputation_use_case import (
    RecomputeRiderReputationUseCase,
)
from src.service.gifting.app.command.resolve_safety_alert_use_case import (
    ResolveSafetyAlertUseCase,
)
from src.service.gifting.app.command.review_report_use_case import ReviewReportUseCase
from src.service.gifting.app.command.review_rider_use_case import ReviewRiderUseCase
from src.service.gifting.app.query.list_reports_use_case import ListReportsUseCase
from src.service.gifting.app.query.list_safety_alerts_use_case import ListSafetyAlertsUseCase
from src.service.gifting.app.query.list_security_events_use_case import (
    ListSecurityEventsUseCase,
)
from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.domain.enum.safety_enum import ReportStatus, SecuritySeverity
from src.service.gifting.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.gifting.driving_adapter.http_controller.schema.safety_schema import (
    ReportResponse,
    ReportReviewRequest,
    SafetyAlertResolveRequest,
    SafetyAlertResponse,
    SecurityEventResponse,
)
from src.service.gifting.driving_adapter.http_controller.schema.user_schema import (
    BlockUserRequest,
    RiderReviewRequest,
    UserResponse,
)


router = APIRouter()


@router.post('/rider/{rider_id}/review', response_model=UserResponse)
@Logger.io
async def review_rider(
    rider_id: int,
    request: RiderReviewRequest,
    admin: UserEntity = Depends(require_admin),
    use_case: ReviewRiderUseCase = Depends(ReviewRiderUseCase.depends),
) -> UserResponse:
    rider = await use_case.execute(rider_id=rider_id, decision=request.decision, reason=request.reason)
    return UserResponse.from_entity(rider)


@router.post('/user/{user_id}/block', response_model=UserResponse)
@Logger.io
async def block_user(
    user_id: int,
    request: BlockUserRequest,
    admin: UserEntity = Depends(require_admin),
    use_case: BlockUserUseCase = Depends(BlockUserUseCase.depends),
) -> UserResponse:
    return UserResponse.from_entity(await use_case.block(user_id=user_id, reason=request.reason))


@router.post('/user/{user_id}/unblock', response_model=UserResponse)
@Logger.io
async def unblock_user(
    user_id: int,
    admin: UserEntity = Depends(require_admin),
    use_case: BlockUserUseCase = Depends(BlockUserUseCase.depends),
) -> UserResponse:
    return UserResponse.from_entity(await use_case.unblock(user_id=user_id))


@router.post('/rider/{rider_id}/reputation', response_model=UserResponse)
@Logger.io
async def recompute_reputation(
    rider_id: int,
    admin: UserEntity = Depends(require_admin),
    use_case: RecomputeRiderReputationUseCase = Depends(RecomputeRiderReputationUseCase.depends),
) -> UserResponse:
    return UserResponse.from_entity(await use_case.execute(rider_id=rider_id))


@router.get('/report', response_model=List[ReportResponse])
@Logger.io
async def list_reports_for_review(
    report_status: ReportStatus = Query(ReportStatus.PENDING, alias='status'),
    admin: UserEntity = Depends(require_admin),
    use_case: ListReportsUseCase = Depends(ListReportsUseCase.depends),
) -> list[ReportResponse]:
    return [ReportResponse.from_entity(r) for r in await use_case.by_status(status=report_status)]


@router.patch('/report/{report_id}', response_model=ReportResponse)
@Logger.io
async def review_report(
    report_id: UUID,
    request: ReportReviewRequest,
    admin: UserEntity = Depends(require_admin),
    use_case: ReviewReportUseCase = Depends(ReviewReportUseCase.depends),
) -> ReportResponse:
    report = await use_case.execute(
        report_id=report_id, status=request.status, admin_notes=request.admin_notes
    )
    return ReportResponse.from_entity(report)


@router.get('/safety_alert', response_model=List[SafetyAlertResponse])
@Logger.io
async def list_open_safety_alerts(
    admin: UserEntity = Depends(require_admin),
    use_case: ListSafetyAlertsUseCase = Depends(ListSafetyAlertsUseCase.depends),
) -> list[SafetyAlertResponse]:
    return [SafetyAlertResponse.from_entity(a) for a in await use_case.open()]


@router.post('/safety_alert/{alert_id}/resolve', response_model=SafetyAlertResponse)
@Logger.io
async def resolve_safety_alert(
    alert_id: UUID,
    request: SafetyAlertResolveRequest,
    admin: UserEntity = Depends(require_admin),
    use_case: ResolveSafetyAlertUseCase = Depends(ResolveSafetyAlertUseCase.depends),
) -> SafetyAlertResponse:
    alert = await use_case.execute(alert_id=alert_id, admin_response=request.admin_response)
    return SafetyAlertResponse.from_entity(alert)


@router.get('/security_event', response_model=List[SecurityEventResponse])
@Logger.io
async def list_security_events(
    limit: int = 50,
    min_severity: SecuritySeverity = SecuritySeverity.LOW,
    admin: UserEntity = Depends(require_admin),
    use_case: ListSecurityEventsUseCase = Depends(ListSecurityEventsUseCase.depends),
) -> list[SecurityEventResponse]:
    events = await use_case.execute(limit=limit, min_severity=min_severity)
    return [SecurityEventResponse.from_entity(e) for e in events]
