"""
Unit tests for ClaimOrderUseCase

Test Focus:
1. At most one of N concurrent claims succeeds; the rest get AlreadyClaimedError
2. Eligibility is checked on a freshly loaded rider at claim time
3. Claims on cancelled orders report the invalid state, not a lost race
4. Every claim outcome is counted in gift_order_claims_total
"""

import anyio
from prometheus_client import REGISTRY
import pytest

from src.platform.exception.exceptions import (
    AlreadyClaimedError,
    InvalidStateError,
    NotEligibleError,
)
from src.service.gifting.app.command.claim_order_use_case import ClaimOrderUseCase
from src.service.gifting.domain.enum.order_status import OrderStatus
from src.service.gifting.domain.enum.user_enum import RiderStatus
from test.service.gifting.factory import OTHER_RIDER_ID, RIDER_ID, SENDER_ID, make_order, make_rider
from test.service.gifting.in_memory_repo import InMemoryOrderRepo, InMemoryUserRepo


@pytest.fixture
def use_case(order_repo: InMemoryOrderRepo, user_repo: InMemoryUserRepo) -> ClaimOrderUseCase:
    return ClaimOrderUseCase(order_command_repo=order_repo, user_query_repo=user_repo)


@pytest.mark.unit
class TestConcurrentClaims:
    @pytest.mark.parametrize('rider_count', [2, 8])
    @pytest.mark.anyio
    async def test_exactly_one_rider_wins(
        self,
        rider_count: int,
        use_case: ClaimOrderUseCase,
        order_repo: InMemoryOrderRepo,
        user_repo: InMemoryUserRepo,
    ) -> None:
        """
        Given: one pending order and N approved riders
        When: all N claim it at the same time
        Then: one claim succeeds, N-1 get AlreadyClaimedError,
              and the stored rider is the winner
        """
        rider_ids = [100 + i for i in range(rider_count)]
        for rider_id in rider_ids:
            user_repo.add(make_rider(id=rider_id, email=f'rider{rider_id}@test.com'))
        order = await order_repo.create(order=make_order())

        winners: list[int] = []
        losers: list[int] = []

        async def claim(rider_id: int) -> None:
            try:
                await use_case.execute(order_id=order.id, rider_id=rider_id)
                winners.append(rider_id)
            except AlreadyClaimedError:
                losers.append(rider_id)

        async with anyio.create_task_group() as tg:
            for rider_id in rider_ids:
                tg.start_soon(claim, rider_id)

        assert len(winners) == 1
        assert sorted(losers) == sorted(set(rider_ids) - set(winners))
        assert order_repo.claim_calls == rider_count

        stored = await order_repo.get_by_id(order_id=order.id)
        assert stored is not None
        assert stored.status == OrderStatus.ACCEPTED
        assert stored.rider_id == winners[0]


@pytest.mark.unit
class TestClaimRules:
    @pytest.mark.asyncio
    async def test_second_claim_is_already_claimed(
        self, use_case: ClaimOrderUseCase, order_repo: InMemoryOrderRepo
    ) -> None:
        order = await order_repo.create(order=make_order())
        await use_case.execute(order_id=order.id, rider_id=RIDER_ID)

        with pytest.raises(AlreadyClaimedError, match='already been accepted'):
            await use_case.execute(order_id=order.id, rider_id=OTHER_RIDER_ID)

    @pytest.mark.asyncio
    async def test_cancelled_order_reports_invalid_state(
        self, use_case: ClaimOrderUseCase, order_repo: InMemoryOrderRepo
    ) -> None:
        order = await order_repo.create(order=make_order().cancel(actor_id=SENDER_ID))

        with pytest.raises(InvalidStateError):
            await use_case.execute(order_id=order.id, rider_id=RIDER_ID)

    @pytest.mark.parametrize(
        'rider_status', [RiderStatus.PENDING, RiderStatus.REJECTED, RiderStatus.BANNED]
    )
    @pytest.mark.asyncio
    async def test_unapproved_rider_is_not_eligible(
        self,
        rider_status: RiderStatus,
        use_case: ClaimOrderUseCase,
        order_repo: InMemoryOrderRepo,
        user_repo: InMemoryUserRepo,
    ) -> None:
        user_repo.add(make_rider(id=50, email='new@test.com', rider_status=rider_status))
        order = await order_repo.create(order=make_order())

        with pytest.raises(NotEligibleError):
            await use_case.execute(order_id=order.id, rider_id=50)

        assert order_repo.claim_calls == 0

    @pytest.mark.asyncio
    async def test_rider_blocked_after_sign_in_cannot_claim(
        self, use_case: ClaimOrderUseCase, order_repo: InMemoryOrderRepo, user_repo: InMemoryUserRepo
    ) -> None:
        rider = await user_repo.get_by_id(user_id=RIDER_ID)
        assert rider is not None
        await user_repo.update(user=rider.block(reason='Fraud report'))
        order = await order_repo.create(order=make_order())

        with pytest.raises(NotEligibleError):
            await use_case.execute(order_id=order.id, rider_id=RIDER_ID)

    @pytest.mark.asyncio
    async def test_senders_cannot_claim(
        self, use_case: ClaimOrderUseCase, order_repo: InMemoryOrderRepo
    ) -> None:
        order = await order_repo.create(order=make_order())

        with pytest.raises(NotEligibleError):
            await use_case.execute(order_id=order.id, rider_id=SENDER_ID)


def _claims_counted(result: str) -> float:
    return REGISTRY.get_sample_value('gift_order_claims_total', {'result': result}) or 0.0


@pytest.mark.unit
class TestClaimMetrics:
    @pytest.mark.asyncio
    async def test_each_outcome_is_counted(
        self, use_case: ClaimOrderUseCase, order_repo: InMemoryOrderRepo
    ) -> None:
        """
        Given: one order and two riders
        When: both claim it, one after the other
        Then: one `won` and one `already_claimed` are counted
        """
        won_before = _claims_counted('won')
        lost_before = _claims_counted('already_claimed')
        order = await order_repo.create(order=make_order())

        await use_case.execute(order_id=order.id, rider_id=RIDER_ID)
        with pytest.raises(AlreadyClaimedError):
            await use_case.execute(order_id=order.id, rider_id=OTHER_RIDER_ID)

        assert _claims_counted('won') == won_before + 1
        assert _claims_counted('already_claimed') == lost_before + 1
