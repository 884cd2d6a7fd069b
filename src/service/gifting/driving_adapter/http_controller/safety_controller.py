from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.create_safety_alert_use_case import (
    CreateSafetyAlertUseCase,
)
from src.service.gifting.app.command.submit_report_use_case import SubmitReportUseCase
from src.service.gifting.app.query.list_reports_use_case import ListReportsUseCase
from src.service.gifting.app.query.list_safety_alerts_use_case import ListSafetyAlertsUseCase
from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.domain.value_object.geo_point import GeoPoint
from src.service.gifting.driving_adapter.http_controller.auth.role_auth import get_current_user
from src.service.gifting.driving_adapter.http_controller.schema.safety_schema import (
    ReportCreateRequest,
    ReportResponse,
    SafetyAlertCreateRequest,
    SafetyAlertResponse,
)


router = APIRouter()


@router.post('/report', response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def submit_report(
    request: ReportCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: SubmitReportUseCase = Depends(SubmitReportUseCase.depends),
) -> ReportResponse:
    report = await use_case.execute(
        reporter=current_user,
        reported_user_id=request.reported_user_id,
        report_type=request.report_type,
        description=request.description,
        order_id=request.order_id,
        evidence=request.evidence,
    )
    return ReportResponse.from_entity(report)


@router.get('/report', response_model=List[ReportResponse])
@Logger.io
async def list_my_reports(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListReportsUseCase = Depends(ListReportsUseCase.depends),
) -> list[ReportResponse]:
    return [ReportResponse.from_entity(r) for r in await use_case.mine(user=current_user)]


@router.post('/alert', response_model=SafetyAlertResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_safety_alert(
    request: SafetyAlertCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateSafetyAlertUseCase = Depends(CreateSafetyAlertUseCase.depends),
) -> SafetyAlertResponse:
    location = request.location
    alert = await use_case.execute(
        user=current_user,
        alert_type=request.alert_type,
        description=request.description,
        order_id=request.order_id,
        location=GeoPoint(location.latitude, location.longitude) if location else None,
    )
    return SafetyAlertResponse.from_entity(alert)


@router.get('/alert', response_model=List[SafetyAlertResponse])
@Logger.io
async def list_my_safety_alerts(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListSafetyAlertsUseCase = Depends(ListSafetyAlertsUseCase.depends),
) -> list[SafetyAlertResponse]:
    return [SafetyAlertResponse.from_entity(a) for a in await use_case.mine(user=current_user)]
