from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ValidationFailedError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_security_event_repo import ISecurityEventRepo
from src.service.gifting.domain.entity.safety_entity import SecurityEvent
from src.service.gifting.domain.enum.safety_enum import SecuritySeverity


class ListSecurityEventsUseCase:
    """Admin view of the audit trail, newest first."""

    def __init__(
        self,
        *,
        security_event_repo: ISecurityEventRepo,
        max_limit: int = settings.SECURITY_EVENT_PAGE_LIMIT,
    ) -> None:
        self.security_event_repo = security_event_repo
        self.max_limit = max_limit

    @classmethod
    @inject
    def depends(
        cls,
        security_event_repo: ISecurityEventRepo = Depends(
            Provide[Container.security_event_repo]
        ),
    ) -> Self:
        return cls(security_event_repo=security_event_repo)

    @Logger.io
    async def execute(
        self, *, limit: int = 50, min_severity: SecuritySeverity = SecuritySeverity.LOW
    ) -> list[SecurityEvent]:
        if not 1 <= limit <= self.max_limit:
            raise ValidationFailedError('limit', f'limit must be between 1 and {self.max_limit}')
        return await self.security_event_repo.list_recent(limit=limit, min_severity=min_severity)
