from typing import Callable

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.metrics.gifting_metrics import metrics
from src.service.gifting.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.gifting.domain.entity.gift_order_entity import GiftOrder


async def load_order(repo: IOrderCommandRepo, order_id) -> GiftOrder:
    order = await repo.get_by_id(order_id=order_id)
    if not order:
        raise NotFoundError('Order not found')
    return order


async def persist_order_transition(
    repo: IOrderCommandRepo,
    *,
    transition: str,
    current: GiftOrder,
    updated: GiftOrder,
    replay: Callable[[GiftOrder], GiftOrder],
) -> GiftOrder:
    """
    Write `updated` if the row is still at the version `current` was read at.

    When the row moved underneath us the transition is replayed against the
    fresh row so the caller gets the same error it would have got had it read
    the newer state first.
    """
    saved = await repo.compare_and_swap(current=current, updated=updated)
    if saved:
        metrics.record_order_transition(transition=transition, result='saved')
        return saved

    fresh = await load_order(repo, current.id)
    try:
        replay(fresh)
    except Exception:
        metrics.record_order_transition(transition=transition, result='refused')
        raise
    metrics.record_order_transition(transition=transition, result='conflict')
    raise ConflictError('Order was modified concurrently, please retry')
