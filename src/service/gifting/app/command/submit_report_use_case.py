from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils.compat import uuid7

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotEligibleError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.security_audit import record_security_event
from src.service.gifting.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.gifting.app.interface.i_security_event_repo import ISecurityEventRepo
from src.service.gifting.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.gifting.app.interface.i_user_report_repo import IUserReportRepo
from src.service.gifting.domain.entity.safety_entity import UserReport
from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.domain.enum.safety_enum import (
    ReportType,
    SecurityAction,
    SecuritySeverity,
)


class SubmitReportUseCase:
    """
    A user reports another user.

    When the report names an order, both the reporter and the reported user
    must be its sender or its assigned rider.
    """

    def __init__(
        self,
        *,
        user_report_repo: IUserReportRepo,
        user_query_repo: IUserQueryRepo,
        order_query_repo: IOrderQueryRepo,
        security_event_repo: ISecurityEventRepo,
    ) -> None:
        self.user_report_repo = user_report_repo
        self.user_query_repo = user_query_repo
        self.order_query_repo = order_query_repo
        self.security_event_repo = security_event_repo

    @classmethod
    @inject
    def depends(
        cls,
        user_report_repo: IUserReportRepo = Depends(Provide[Container.user_report_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo]),
        security_event_repo: ISecurityEventRepo = Depends(
            Provide[Container.security_event_repo]
        ),
    ) -> Self:
        return cls(
            user_report_repo=user_report_repo,
            user_query_repo=user_query_repo,
            order_query_repo=order_query_repo,
            security_event_repo=security_event_repo,
        )

    @Logger.io
    async def execute(
        self,
        *,
        reporter: UserEntity,
        reported_user_id: int,
        report_type: ReportType,
        description: str,
        order_id: Optional[UUID] = None,
        evidence: Optional[list[str]] = None,
    ) -> UserReport:
        reported = await self.user_query_repo.get_by_id(user_id=reported_user_id)
        if not reported:
            raise NotFoundError('Reported user not found')

        report = UserReport.create(
            id=uuid7(),
            reporter=reporter,
            reported=reported,
            report_type=report_type,
            description=description,
            order_id=order_id,
            evidence=evidence,
        )

        if order_id is not None:
            order = await self.order_query_repo.get_by_id(order_id=order_id)
            if not order:
                raise NotFoundError('Order not found')
            parties = (order.sender_id, order.rider_id)
            if reporter.id not in parties or reported.id not in parties:
                raise NotEligibleError('Both users must be part of the reported order')

        report = await self.user_report_repo.create(report=report)
        await record_security_event(
            self.security_event_repo,
            user_id=reporter.id,
            action=SecurityAction.REPORT_SUBMITTED,
            details=f'Report submitted against {reported.full_name} for {report_type}',
            severity=SecuritySeverity.MEDIUM,
        )
        return report
