from abc import ABC, abstractmethod
from uuid import UUID

from src.service.gifting.domain.entity.safety_entity import SafetyAlert


class ISafetyAlertRepo(ABC):
    @abstractmethod
    async def create(self, *, alert: SafetyAlert) -> SafetyAlert:
        pass

    @abstractmethod
    async def get_by_id(self, *, alert_id: UUID) -> SafetyAlert | None:
        pass

    @abstractmethod
    async def resolve(self, *, alert: SafetyAlert) -> SafetyAlert | None:
        """
        Store the resolution only if the alert is still open.

        Returns None when it was already resolved.
        """
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: int) -> list[SafetyAlert]:
        """Alerts the user raised, newest first."""
        pass

    @abstractmethod
    async def list_open(self) -> list[SafetyAlert]:
        """Unresolved alerts, oldest first."""
        pass
