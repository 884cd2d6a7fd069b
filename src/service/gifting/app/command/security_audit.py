from datetime import datetime, timezone
from typing import Optional

from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import UnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.gifting_metrics import metrics
from src.service.gifting.app.interface.i_security_event_repo import ISecurityEventRepo
from src.service.gifting.domain.entity.safety_entity import SecurityEvent
from src.service.gifting.domain.enum.safety_enum import SecurityAction, SecuritySeverity


async def record_security_event(
    repo: ISecurityEventRepo,
    *,
    action: SecurityAction,
    details: str,
    severity: SecuritySeverity,
    user_id: Optional[int] = None,
) -> SecurityEvent | None:
    """
    Append one event to the audit trail.

    The action being audited has already happened, so a store outage here is
    logged and counted but does not fail the caller.
    """
    event = SecurityEvent(
        id=uuid7(),
        user_id=user_id,
        action=action,
        details=details,
        severity=severity,
        created_at=datetime.now(timezone.utc),
    )
    metrics.record_security_event(action=action, severity=severity)
    try:
        return await repo.create(event=event)
    except UnavailableError:
        Logger.base.error(f'🛡️ [Audit] {action} for user {user_id} was not stored')
        return None
