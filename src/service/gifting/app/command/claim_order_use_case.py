import time
from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    AlreadyClaimedError,
    InvalidStateError,
    NotEligibleError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.gifting_metrics import metrics
from src.service.gifting.app.command.order_transition import load_order
from src.service.gifting.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.gifting.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.gifting.domain.entity.gift_order_entity import GiftOrder


class ClaimOrderUseCase:
    """
    Rider accepts a pending order.

    The assignment is a single conditional write; of any number of concurrent
    claims exactly one succeeds and the rest get `AlreadyClaimedError`.
    Rider eligibility is checked against a freshly loaded account.
    """

    def __init__(
        self, *, order_command_repo: IOrderCommandRepo, user_query_repo: IUserQueryRepo
    ) -> None:
        self.order_command_repo = order_command_repo
        self.user_query_repo = user_query_repo
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        order_command_repo: IOrderCommandRepo = Depends(Provide[Container.order_command_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    ) -> Self:
        return cls(order_command_repo=order_command_repo, user_query_repo=user_query_repo)

    @Logger.io
    async def execute(self, *, order_id: UUID, rider_id: int) -> GiftOrder:
        start_time = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.claim_order',
            attributes={'order.id': str(order_id), 'rider.id': rider_id},
        ) as span:
            try:
                claimed = await self._claim(order_id=order_id, rider_id=rider_id)
            except AlreadyClaimedError:
                self._record(span, result='already_claimed', start_time=start_time)
                raise
            except InvalidStateError:
                self._record(span, result='invalid_state', start_time=start_time)
                raise
            except NotEligibleError:
                self._record(span, result='not_eligible', start_time=start_time)
                raise

            self._record(span, result='won', start_time=start_time)
            return claimed

    async def _claim(self, *, order_id: UUID, rider_id: int) -> GiftOrder:
        rider = await self.user_query_repo.get_by_id(user_id=rider_id)
        if not rider:
            raise NotEligibleError('Only approved riders can accept orders')
        rider.ensure_can_claim_orders()

        claimed = await self.order_command_repo.claim(
            order_id=order_id,
            rider_id=rider_id,
            rider_name=rider.full_name,
            rider_phone=rider.phone_number,
        )
        if claimed:
            return claimed

        # Lost the write: report why from the row as it is now
        order = await load_order(self.order_command_repo, order_id)
        order.accept(rider_id=rider_id, rider_name=rider.full_name, rider_phone=rider.phone_number)
        raise AlreadyClaimedError()

    @staticmethod
    def _record(span: trace.Span, *, result: str, start_time: float) -> None:
        span.set_attribute('claim.result', result)
        metrics.record_claim(result=result, duration=time.perf_counter() - start_time)
