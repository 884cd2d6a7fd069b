from abc import ABC, abstractmethod
from uuid import UUID

from src.service.gifting.domain.entity.safety_entity import UserReport
from src.service.gifting.domain.enum.safety_enum import ReportStatus


class IUserReportRepo(ABC):
    @abstractmethod
    async def create(self, *, report: UserReport) -> UserReport:
        pass

    @abstractmethod
    async def get_by_id(self, *, report_id: UUID) -> UserReport | None:
        pass

    @abstractmethod
    async def update_review(
        self, *, current: UserReport, updated: UserReport
    ) -> UserReport | None:
        """
        Write the reviewed status and notes only while the stored status is
        still `current.status`.

        Returns None when another review got there first.
        """
        pass

    @abstractmethod
    async def list_by_reporter(self, *, reporter_id: int) -> list[UserReport]:
        """Reports the user filed, newest first."""
        pass

    @abstractmethod
    async def list_by_status(self, *, status: ReportStatus) -> list[UserReport]:
        """Oldest first, so the review queue is worked in filing order."""
        pass
