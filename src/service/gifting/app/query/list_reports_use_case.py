from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_user_report_repo import IUserReportRepo
from src.service.gifting.domain.entity.safety_entity import UserReport
from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.domain.enum.safety_enum import ReportStatus


class ListReportsUseCase:
    """A user's own reports, or the admin review queue for one status."""

    def __init__(self, *, user_report_repo: IUserReportRepo) -> None:
        self.user_report_repo = user_report_repo

    @classmethod
    @inject
    def depends(
        cls, user_report_repo: IUserReportRepo = Depends(Provide[Container.user_report_repo])
    ) -> Self:
        return cls(user_report_repo=user_report_repo)

    @Logger.io
    async def mine(self, *, user: UserEntity) -> list[UserReport]:
        return await self.user_report_repo.list_by_reporter(reporter_id=user.id or 0)

    @Logger.io
    async def by_status(self, *, status: ReportStatus) -> list[UserReport]:
        return await self.user_report_repo.list_by_status(status=status)
