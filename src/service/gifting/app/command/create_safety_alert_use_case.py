from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils.compat import uuid7

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.command.security_audit import record_security_event
from src.service.gifting.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.gifting.app.interface.i_safety_alert_repo import ISafetyAlertRepo
from src.service.gifting.app.interface.i_security_event_repo import ISecurityEventRepo
from src.service.gifting.domain.entity.safety_entity import SafetyAlert
from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.domain.enum.safety_enum import (
    SafetyAlertType,
    SecurityAction,
    SecuritySeverity,
)
from src.service.gifting.domain.value_object.geo_point import GeoPoint


class CreateSafetyAlertUseCase:
    """Raise a panic / dispute alert, optionally tied to an order the user is part of."""

    def __init__(
        self,
        *,
        safety_alert_repo: ISafetyAlertRepo,
        order_query_repo: IOrderQueryRepo,
        security_event_repo: ISecurityEventRepo,
    ) -> None:
        self.safety_alert_repo = safety_alert_repo
        self.order_query_repo = order_query_repo
        self.security_event_repo = security_event_repo

    @classmethod
    @inject
    def depends(
        cls,
        safety_alert_repo: ISafetyAlertRepo = Depends(Provide[Container.safety_alert_repo]),
        order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo]),
        security_event_repo: ISecurityEventRepo = Depends(
            Provide[Container.security_event_repo]
        ),
    ) -> Self:
        return cls(
            safety_alert_repo=safety_alert_repo,
            order_query_repo=order_query_repo,
            security_event_repo=security_event_repo,
        )

    @Logger.io
    async def execute(
        self,
        *,
        user: UserEntity,
        alert_type: SafetyAlertType,
        description: str,
        order_id: Optional[UUID] = None,
        location: Optional[GeoPoint] = None,
    ) -> SafetyAlert:
        alert = SafetyAlert.create(
            id=uuid7(),
            user=user,
            alert_type=alert_type,
            description=description,
            order_id=order_id,
            location=location,
        )

        if order_id is not None:
            order = await self.order_query_repo.get_by_id(order_id=order_id)
            if not order:
                raise NotFoundError('Order not found')
            if user.id not in (order.sender_id, order.rider_id):
                raise ForbiddenError('You do not have access to this order')

        alert = await self.safety_alert_repo.create(alert=alert)
        await record_security_event(
            self.security_event_repo,
            user_id=user.id,
            action=SecurityAction.SAFETY_ALERT_CREATED,
            details=f'Safety alert created: {alert_type} - {alert.description}',
            severity=SecuritySeverity.CRITICAL,
        )
        return alert
