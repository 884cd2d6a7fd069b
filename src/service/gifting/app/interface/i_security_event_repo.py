from abc import ABC, abstractmethod

from src.service.gifting.domain.entity.safety_entity import SecurityEvent
from src.service.gifting.domain.enum.safety_enum import SecuritySeverity


class ISecurityEventRepo(ABC):
    @abstractmethod
    async def create(self, *, event: SecurityEvent) -> SecurityEvent:
        pass

    @abstractmethod
    async def list_recent(
        self, *, limit: int, min_severity: SecuritySeverity = SecuritySeverity.LOW
    ) -> list[SecurityEvent]:
        """Newest first, at or above `min_severity`."""
        pass
