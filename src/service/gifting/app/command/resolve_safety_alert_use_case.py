from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import InvalidStateError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_safety_alert_repo import ISafetyAlertRepo
from src.service.gifting.domain.entity.safety_entity import SafetyAlert


class ResolveSafetyAlertUseCase:
    def __init__(self, *, safety_alert_repo: ISafetyAlertRepo) -> None:
        self.safety_alert_repo = safety_alert_repo

    @classmethod
    @inject
    def depends(
        cls, safety_alert_repo: ISafetyAlertRepo = Depends(Provide[Container.safety_alert_repo])
    ) -> Self:
        return cls(safety_alert_repo=safety_alert_repo)

    @Logger.io
    async def execute(self, *, alert_id: UUID, admin_response: str) -> SafetyAlert:
        alert = await self.safety_alert_repo.get_by_id(alert_id=alert_id)
        if not alert:
            raise NotFoundError('Safety alert not found')

        resolved = await self.safety_alert_repo.resolve(
            alert=alert.resolve(admin_response=admin_response)
        )
        if not resolved:
            # Another admin resolved it between our read and write
            raise InvalidStateError('resolved', 'resolve alert')
        return resolved
