from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_safety_alert_repo import ISafetyAlertRepo
from src.service.gifting.domain.entity.safety_entity import SafetyAlert
from src.service.gifting.domain.entity.user_entity import UserEntity


class ListSafetyAlertsUseCase:
    def __init__(self, *, safety_alert_repo: ISafetyAlertRepo) -> None:
        self.safety_alert_repo = safety_alert_repo

    @classmethod
    @inject
    def depends(
        cls, safety_alert_repo: ISafetyAlertRepo = Depends(Provide[Container.safety_alert_repo])
    ) -> Self:
        return cls(safety_alert_repo=safety_alert_repo)

    @Logger.io
    async def mine(self, *, user: UserEntity) -> list[SafetyAlert]:
        return await self.safety_alert_repo.list_by_user(user_id=user.id or 0)

    @Logger.io
    async def open(self) -> list[SafetyAlert]:
        return await self.safety_alert_repo.list_open()
