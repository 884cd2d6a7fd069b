from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_user_report_repo import IUserReportRepo
from src.service.gifting.domain.entity.safety_entity import UserReport
from src.service.gifting.domain.enum.safety_enum import ReportStatus


class ReviewReportUseCase:
    """Admin moves a report through pending -> underReview -> resolved / dismissed."""

    def __init__(self, *, user_report_repo: IUserReportRepo) -> None:
        self.user_report_repo = user_report_repo

    @classmethod
    @inject
    def depends(
        cls, user_report_repo: IUserReportRepo = Depends(Provide[Container.user_report_repo])
    ) -> Self:
        return cls(user_report_repo=user_report_repo)

    @Logger.io
    async def execute(
        self, *, report_id: UUID, status: ReportStatus, admin_notes: Optional[str] = None
    ) -> UserReport:
        report = await self.user_report_repo.get_by_id(report_id=report_id)
        if not report:
            raise NotFoundError('Report not found')

        reviewed = report.review(status=status, admin_notes=admin_notes)
        saved = await self.user_report_repo.update_review(current=report, updated=reviewed)
        if not saved:
            raise ConflictError('Report was reviewed concurrently, please retry')
        return saved
